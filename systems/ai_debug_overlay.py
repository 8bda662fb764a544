"""
ai_debug_overlay.py – Toggleable AI status panel.

Renders the engine's status snapshot (difficulty bar, strategy,
prediction, skill, moves, success rate) and the current AI settings
in the side panel.  Activated via F1; does NOT modify any gameplay.
"""

from __future__ import annotations

import pygame

from keybinds import CONTROL_KEYS, SETTING_TOGGLES, help_lines, key_name
from settings import AI_INDICATOR, BOARD_PIXELS, PANEL_WIDTH, SCREEN_HEIGHT


# ── Layout constants ──────────────────────────────────────

_PANEL_X = BOARD_PIXELS
_PANEL_PAD = 12
_LINE_H = 20
_FONT_SIZE = 16
_BG_ALPHA = 200
_BG_COLOR = (15, 15, 20)
_TITLE_COLOR = (100, 220, 255)
_LABEL_COLOR = (180, 180, 180)
_VALUE_COLOR = (255, 255, 255)
_SECTION_COLOR = (80, 200, 160)
_ON_COLOR = (90, 230, 120)
_OFF_COLOR = (200, 80, 80)
_BAR_H = 10
_BAR_W = PANEL_WIDTH - 2 * _PANEL_PAD

_DIRECTION_SYMBOLS = {"up": "↑", "down": "↓", "left": "←", "right": "→"}

_TOGGLE_LABELS = {
    "toggle_hints":      "Hints",
    "toggle_adaptive":   "Adaptive",
    "toggle_smart_food": "Smart food",
}


def direction_symbol(direction) -> str:
    """Arrow for a direction (``?`` when there is no prediction)."""
    if direction is None:
        return "?"
    return _DIRECTION_SYMBOLS.get(getattr(direction, "value", direction), "?")


class AIDebugOverlay:
    """Side-panel HUD for the adaptive engine.

    Usage
    -----
    overlay = AIDebugOverlay(screen)
    # in event loop:  if key == K_F1: overlay.toggle()
    # each frame:     overlay.draw(director, score)
    """

    def __init__(self, screen: pygame.Surface) -> None:
        self._screen = screen
        self._visible = True
        self._font: pygame.font.Font | None = None

    # ── Public API ────────────────────────────────────────

    def toggle(self) -> None:
        """Toggle overlay visibility."""
        self._visible = not self._visible

    @property
    def visible(self) -> bool:
        return self._visible

    def draw(self, director, score: int) -> None:
        """Render the status panel.  Safe if *director* is None."""
        self._ensure_font()

        panel = pygame.Surface((PANEL_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        panel.fill((*_BG_COLOR, _BG_ALPHA))
        pygame.draw.line(panel, (60, 60, 80), (0, 0), (0, SCREEN_HEIGHT), 1)

        y = _PANEL_PAD
        y = self._line(panel, "ADAPTIVE SNAKE", _TITLE_COLOR, y)
        y = self._line(panel, f"Score:  {score}", _VALUE_COLOR, y)
        y += _LINE_H // 2

        if director is None:
            self._line(panel, "AI engine: N/A", _LABEL_COLOR, y)
            self._screen.blit(panel, (_PANEL_X, 0))
            return

        status = director.get_status()

        # ── Difficulty bar ────────────────────────────────
        y = self._line(panel, f"Difficulty:  {status.difficulty_percent}%", _SECTION_COLOR, y)
        pygame.draw.rect(panel, (40, 40, 40), (_PANEL_PAD, y, _BAR_W, _BAR_H), border_radius=2)
        fill_w = int(_BAR_W * max(0, min(100, status.difficulty_percent)) / 100)
        if fill_w > 0:
            pygame.draw.rect(panel, AI_INDICATOR, (_PANEL_PAD, y, fill_w, _BAR_H), border_radius=2)
        pygame.draw.rect(panel, (80, 80, 80), (_PANEL_PAD, y, _BAR_W, _BAR_H), 1, border_radius=2)
        y += _BAR_H + _LINE_H // 2

        if self._visible:
            y = self._line(panel, f"Strategy:    {status.strategy.value}", _VALUE_COLOR, y)
            y = self._line(panel, f"Prediction:  {direction_symbol(status.prediction)}", _VALUE_COLOR, y)
            y = self._line(panel, f"Skill:       {status.skill_level}/5", _VALUE_COLOR, y)
            y = self._line(panel, f"Moves:       {status.total_moves}", _VALUE_COLOR, y)
            y = self._line(panel, f"Success:     {status.success_rate_percent}%", _VALUE_COLOR, y)
            y = self._line(panel, f"Interval:    {director.move_interval_ms:.0f} ms", _VALUE_COLOR, y)

            # ── Settings ──────────────────────────────────
            y += _LINE_H // 2
            y = self._line(panel, "Settings:", _SECTION_COLOR, y)
            settings = director.settings
            for action, label in _TOGGLE_LABELS.items():
                enabled = getattr(settings, SETTING_TOGGLES[action])
                key = key_name(CONTROL_KEYS[action])
                text = f"  [{key}] {label:<11s} {'ON' if enabled else 'OFF'}"
                y = self._line(panel, text, _ON_COLOR if enabled else _OFF_COLOR, y)

        y += _LINE_H // 2
        for text in help_lines():
            y = self._line(panel, text, _LABEL_COLOR, y)
        self._screen.blit(panel, (_PANEL_X, 0))

    # ── Internals ─────────────────────────────────────────

    def _line(self, panel: pygame.Surface, text: str, color, y: int) -> int:
        surf = self._font.render(text, True, color)  # type: ignore[union-attr]
        panel.blit(surf, (_PANEL_PAD, y))
        return y + _LINE_H

    def _ensure_font(self) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont("consolas", _FONT_SIZE)
