"""entities package – The snake body model."""

from .snake import Snake
