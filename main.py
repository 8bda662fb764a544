"""
main.py - Entry point for Adaptive Snake.

Integrates all systems:
- Snake body model (entities/snake.py)
- Game rules and engine wiring (systems/game_session.py)
- Adaptive AI engine (ai/adaptive_director.py)
- AI status panel (systems/ai_debug_overlay.py)
- Per-game statistics and difficulty graph (ai/stats.py)
- Headless bot simulation (ai/simulation_runner.py)

Run:  python main.py
      python main.py --simulate 50
"""
VERSION = "1.0.0"

import argparse
import logging
import random
import sys

import pygame

logger = logging.getLogger(__name__)

# ── Project imports ───────────────────────────────────────
from settings import (
    SCREEN_WIDTH, SCREEN_HEIGHT, FPS, TITLE, BG_COLOR, WHITE,
    GRID_SIZE, TILE_SIZE, BOARD_PIXELS, GRID_LINE,
    SNAKE_HEAD, SNAKE_BODY, FOOD_RANDOM, FOOD_SMART,
    HINT_FILL, HINT_BORDER, AI_INDICATOR, YELLOW,
)
from ai.adaptive_director import AdaptiveDirector
from ai.directions import step
from ai.stats import SessionStats
from systems.game_session import GameSession
from systems.ai_debug_overlay import AIDebugOverlay
from utils import draw_centered, draw_end_screen
from keybinds import (
    CONTROL_KEYS, SETTING_TOGGLES, action_for_key, direction_for_key, warn_on_conflicts,
)


def _cell_rect(x: int, y: int) -> pygame.Rect:
    return pygame.Rect(x * TILE_SIZE + 1, y * TILE_SIZE + 1, TILE_SIZE - 2, TILE_SIZE - 2)


# ══════════════════════════════════════════════════════════
#  GAME CLASS
# ══════════════════════════════════════════════════════════

class Game:
    """Top-level game controller.  Owns the loop, events, and rendering."""

    def __init__(self, seed: int | None = None, plot_file: str | None = None):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()

        rng = random.Random(seed)

        # Adaptive engine (one instance for the whole process)
        self.director = AdaptiveDirector(rng=random.Random(rng.random()))

        # Per-game statistics
        self.stats = SessionStats(report=True, plot_file=plot_file)

        # Board + rules
        self.session = GameSession(self.director, grid_size=GRID_SIZE,
                                   rng=random.Random(rng.random()), stats=self.stats)

        # AI status panel
        self.overlay = AIDebugOverlay(self.screen)

        self.running = True

    # ══════════════════════════════════════════════════════
    #  Main loop
    # ══════════════════════════════════════════════════════

    def run(self):
        while self.running:
            self.clock.tick(FPS)
            self._handle_events()
            self.session.tick(pygame.time.get_ticks())
            self._draw()
            pygame.display.flip()

        pygame.quit()

    # ── Events ────────────────────────────────────────────

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key: int):
        now = pygame.time.get_ticks()
        session = self.session

        direction = direction_for_key(key)
        if direction is not None:
            session.handle_direction(direction, now)
            return

        action = action_for_key(key)
        if action is None:
            return

        if action == "quit":
            self.running = False
        elif action == "restart":
            if session.game_over:
                session.reset()
            else:
                session.start(now)
        elif action == "pause":
            session.toggle_pause()
        elif action == "toggle_panel":
            self.overlay.toggle()
        elif action in SETTING_TOGGLES:
            field_name = SETTING_TOGGLES[action]
            current = getattr(self.director.settings, field_name)
            self.director.update_settings({field_name: not current})
            logger.info("%s → %s", field_name, "on" if not current else "off")

    # ══════════════════════════════════════════════════════
    #  Drawing
    # ══════════════════════════════════════════════════════

    def _draw(self):
        self.screen.fill(BG_COLOR)
        self._draw_grid()
        self._draw_food()
        self._draw_snake()

        session = self.session
        if (self.director.settings.show_predictions
                and session.running and not session.paused):
            self._draw_prediction_hint()
        self._draw_ai_indicator()

        self.overlay.draw(self.director, session.score)

        if session.game_state == "IDLE":
            draw_centered(self.screen, "Press an arrow key to start",
                          SCREEN_HEIGHT // 2, color=WHITE, size=30)
        elif session.paused:
            draw_centered(self.screen, "PAUSED", SCREEN_HEIGHT // 2, color=YELLOW, size=48)
        elif session.game_over:
            message = "You Win!" if session.won else "Game Over!"
            draw_end_screen(self.screen, message, session.score, self.director.get_status())

    def _draw_grid(self):
        for i in range(GRID_SIZE + 1):
            p = i * TILE_SIZE
            pygame.draw.line(self.screen, GRID_LINE, (p, 0), (p, BOARD_PIXELS))
            pygame.draw.line(self.screen, GRID_LINE, (0, p), (BOARD_PIXELS, p))

    def _draw_food(self):
        food = self.session.food
        if food is None:
            return
        color = FOOD_SMART if self.director.settings.smart_food_placement else FOOD_RANDOM
        pygame.draw.rect(self.screen, color, _cell_rect(*food), border_radius=6)

    def _draw_snake(self):
        for i, segment in enumerate(self.session.snake.segments):
            color = SNAKE_HEAD if i == 0 else SNAKE_BODY
            pygame.draw.rect(self.screen, color, _cell_rect(*segment), border_radius=4)

    def _draw_prediction_hint(self):
        """Highlight the cell the engine expects the player to turn into."""
        session = self.session
        prediction = session.prediction_hint()
        if prediction is None or prediction == session.snake.heading:
            return

        cell = step(session.snake.head, prediction)
        if not (0 <= cell.x < GRID_SIZE and 0 <= cell.y < GRID_SIZE):
            return

        rect = _cell_rect(*cell)
        hint = pygame.Surface(rect.size, pygame.SRCALPHA)
        hint.fill(HINT_FILL)
        self.screen.blit(hint, rect.topleft)
        pygame.draw.rect(self.screen, HINT_BORDER, rect, 1)

    def _draw_ai_indicator(self):
        """Small pulse in the board corner; brighter at higher difficulty."""
        intensity = self.director.get_status().difficulty_percent / 100
        alpha = int(255 * (0.3 + intensity * 0.7))
        badge = pygame.Surface((20, 8), pygame.SRCALPHA)
        badge.fill((*AI_INDICATOR, max(0, min(255, alpha))))
        self.screen.blit(badge, (BOARD_PIXELS - 30, 10))


# ══════════════════════════════════════════════════════════
#  CLI
# ══════════════════════════════════════════════════════════

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=f"Adaptive Snake v{VERSION}")
    parser.add_argument("--simulate", type=int, metavar="N", default=0,
                        help="play N headless bot games instead of opening a window")
    parser.add_argument("--grid", type=int, default=GRID_SIZE,
                        help="board size for --simulate (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for all randomness")
    parser.add_argument("--plot", metavar="FILE", default=None,
                        help="save a difficulty-trend graph to FILE after each game")
    parser.add_argument("--debug", action="store_true",
                        help="verbose engine logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    warn_on_conflicts(CONTROL_KEYS)

    if args.simulate > 0:
        from ai.simulation_runner import SimulationRunner
        SimulationRunner(n_games=args.simulate, grid_size=args.grid, seed=args.seed).run()
        return 0

    Game(seed=args.seed, plot_file=args.plot).run()
    return 0


# ── Run ───────────────────────────────────────────────────
if __name__ == "__main__":
    sys.exit(main())
