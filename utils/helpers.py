"""helpers.py - Reusable drawing functions."""

import pygame
from settings import WHITE, BLACK, BOARD_PIXELS, SCREEN_HEIGHT, FONT_SIZE


def draw_centered(surface, text, cy, color=WHITE, size=FONT_SIZE):
    """Render a line of text centred horizontally over the board."""
    font = pygame.font.SysFont(None, size)
    rendered = font.render(text, True, color)
    rect = rendered.get_rect(center=(BOARD_PIXELS // 2, cy))
    surface.blit(rendered, rect)


def draw_end_screen(surface, message, score, status=None):
    """Darken the board and show the game-over message, final score,
    the AI's skill assessment and a restart hint."""
    overlay = pygame.Surface((BOARD_PIXELS, SCREEN_HEIGHT))
    overlay.set_alpha(180)
    overlay.fill(BLACK)
    surface.blit(overlay, (0, 0))

    cy = SCREEN_HEIGHT // 2
    draw_centered(surface, message, cy - 70, size=56)
    draw_centered(surface, f"Final Score: {score}", cy - 25, size=30)

    # AI performance summary
    if status is not None:
        draw_centered(surface, f"AI Skill Assessment: Level {status.skill_level}/5", cy + 10, size=22)
        draw_centered(surface, f"Success Rate: {status.success_rate_percent}%", cy + 32, size=22)
        draw_centered(surface, f"Total Moves: {status.total_moves}", cy + 54, size=22)

    draw_centered(surface, "Press SPACE to restart  |  ESC to quit", cy + 95, size=24)
