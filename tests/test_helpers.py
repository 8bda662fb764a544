"""
Tests for the pygame drawing helpers.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pygame
import pytest

import utils
from ai.adaptive_director import AdaptiveDirector
from settings import BOARD_PIXELS, SCREEN_HEIGHT


@pytest.fixture
def surface():
    pygame.font.init()
    yield pygame.Surface((BOARD_PIXELS, SCREEN_HEIGHT))
    pygame.font.quit()


class TestHelpers:
    def test_exports(self):
        assert callable(utils.draw_centered)
        assert callable(utils.draw_end_screen)

    def test_draw_centered_paints_text(self, surface):
        surface.fill((0, 0, 0))
        utils.draw_centered(surface, "PAUSED", SCREEN_HEIGHT // 2, size=48)
        assert surface.get_at((BOARD_PIXELS // 2, 0))[:3] == (0, 0, 0)
        row = SCREEN_HEIGHT // 2
        assert any(surface.get_at((x, row))[:3] != (0, 0, 0) for x in range(BOARD_PIXELS))

    def test_end_screen_darkens_board(self, surface):
        surface.fill((200, 200, 200))
        status = AdaptiveDirector().get_status()
        utils.draw_end_screen(surface, "Game Over!", 30, status)
        r, g, b = surface.get_at((1, 1))[:3]
        assert r < 200 and g < 200 and b < 200
