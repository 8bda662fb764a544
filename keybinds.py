"""
keybinds.py – Keyboard bindings for Adaptive Snake.

Two binding sets:
- DIRECTION_KEYS: pygame key → snake direction (arrows and WASD)
- CONTROL_KEYS:   control action → pygame key

Usage:
    from keybinds import direction_for_key, CONTROL_KEYS
    direction = direction_for_key(event.key)
    if event.key == CONTROL_KEYS["pause"]:
        ...
"""

from __future__ import annotations

import logging

import pygame

from ai.directions import Direction

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════
#  Movement
# ══════════════════════════════════════════════════════════

DIRECTION_KEYS: dict[int, Direction] = {
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_w:     Direction.UP,
    pygame.K_s:     Direction.DOWN,
    pygame.K_a:     Direction.LEFT,
    pygame.K_d:     Direction.RIGHT,
}

# ══════════════════════════════════════════════════════════
#  Controls
# ══════════════════════════════════════════════════════════

# Canonical control actions
ACTIONS: list[str] = [
    "restart",
    "pause",
    "toggle_hints",
    "toggle_adaptive",
    "toggle_smart_food",
    "toggle_panel",
    "quit",
]

# Human-friendly labels for the panel help lines
ACTION_LABELS: dict[str, str] = {
    "restart":           "Restart",
    "pause":             "Pause / Resume",
    "toggle_hints":      "AI Hints",
    "toggle_adaptive":   "Adaptive Difficulty",
    "toggle_smart_food": "Smart Food",
    "toggle_panel":      "AI Panel",
    "quit":              "Quit",
}

CONTROL_KEYS: dict[str, int] = {
    "restart":           pygame.K_SPACE,
    "pause":             pygame.K_p,
    "toggle_hints":      pygame.K_h,
    "toggle_adaptive":   pygame.K_g,
    "toggle_smart_food": pygame.K_f,
    "toggle_panel":      pygame.K_F1,
    "quit":              pygame.K_ESCAPE,
}

# Control action → AISettings field it flips
SETTING_TOGGLES: dict[str, str] = {
    "toggle_hints":      "show_predictions",
    "toggle_adaptive":   "adaptive_difficulty",
    "toggle_smart_food": "smart_food_placement",
}


def direction_for_key(key: int) -> Direction | None:
    """Direction bound to *key*, or None."""
    return DIRECTION_KEYS.get(key)


def action_for_key(key: int) -> str | None:
    """Control action bound to *key*, or None."""
    for action, bound in CONTROL_KEYS.items():
        if bound == key:
            return action
    return None


def find_conflicts(bindings: dict[str, int]) -> list[tuple[str, str, int]]:
    """Return (action_a, action_b, key) tuples for duplicate keys, including
    clashes with the movement keys."""
    seen: dict[int, str] = {key: f"move_{d.value}" for key, d in DIRECTION_KEYS.items()}
    conflicts: list[tuple[str, str, int]] = []
    for action, key in bindings.items():
        if key in seen:
            conflicts.append((seen[key], action, key))
        else:
            seen[key] = action
    return conflicts


def key_name(key_code: int) -> str:
    """Human-readable key name (e.g. 'SPACE', 'F1')."""
    return pygame.key.name(key_code).upper()


def help_lines(actions=("pause", "restart", "toggle_panel", "quit"),
               bindings: dict[str, int] | None = None) -> list[str]:
    """One "KEY  Label" line per action, for the status panel."""
    bindings = bindings or CONTROL_KEYS
    return [f"{key_name(bindings[a]):<6s} {ACTION_LABELS.get(a, a)}" for a in actions]


def warn_on_conflicts(bindings: dict[str, int]) -> list[tuple[str, str, int]]:
    """Log a warning for every clashing binding; returns the clashes."""
    conflicts = find_conflicts(bindings)
    for first, second, key in conflicts:
        logger.warning("Key %s is bound to both %s and %s", key_name(key), first, second)
    return conflicts
