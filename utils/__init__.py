"""utils package – Reusable drawing helpers."""

from .helpers import draw_centered, draw_end_screen
