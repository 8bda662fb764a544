"""
simulation_runner.py – Automated bot-vs-engine headless simulation.

Runs N games where a heuristic bot steers the snake while the adaptive
engine places food and tunes difficulty.  Nothing is rendered and no
real time passes: the clock advances by the engine's move interval on
every tick.

Usage (from CLI):
    python main.py --simulate 50

The bot heads greedily for the food, refuses moves that kill it on the
next step, and now and then takes a random legal turn so the engine
sees imperfect play.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from ai.adaptive_director import AdaptiveDirector
from ai.directions import OPPOSITE, Direction, manhattan, step
from ai.food_placement import RandomSource
from ai.stats import SessionStats
from settings import GRID_SIZE, SIM_MAX_TICKS, SIM_MISTAKE_CHANCE, SIM_REACTION_MS

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════
#  Per-game result
# ══════════════════════════════════════════════════════════

@dataclass
class GameResult:
    """Lightweight record for one simulated game."""
    game_number: int = 0
    outcome: str = ""              # "crash" | "win" | "timeout"
    score: int = 0
    length: int = 0
    ticks: int = 0
    final_difficulty: int = 0      # percent
    mean_difficulty: float = 0.0   # percent
    final_strategy: str = ""
    skill_level: int = 1
    strategy_changes: int = 0


# ══════════════════════════════════════════════════════════
#  Bot player
# ══════════════════════════════════════════════════════════

class SnakeBot:
    """Greedy food-seeker that avoids immediate death."""

    def __init__(self, rng: RandomSource | None = None,
                 mistake_chance: float = SIM_MISTAKE_CHANCE,
                 reaction_ms: tuple[float, float] = SIM_REACTION_MS):
        self._rng = rng or random.Random()
        self.mistake_chance = mistake_chance
        self.reaction_ms = reaction_ms

    def reaction_delay(self) -> float:
        lo, hi = self.reaction_ms
        return lo + self._rng.random() * (hi - lo)

    def choose(self, session) -> Direction:
        snake = session.snake
        head = snake.head
        legal = [d for d in Direction if d != OPPOSITE[snake.heading]]

        if self._rng.random() < self.mistake_chance:
            return legal[min(int(self._rng.random() * len(legal)), len(legal) - 1)]

        safe = [d for d in legal if self._is_safe(session, step(head, d))]
        if not safe:
            return snake.heading
        if session.food is None:
            return snake.heading if snake.heading in safe else safe[0]

        # Closest to food; keep the current heading on ties
        return min(safe, key=lambda d: (manhattan(step(head, d), session.food),
                                        d != snake.heading))

    @staticmethod
    def _is_safe(session, cell) -> bool:
        size = session.grid_size
        if not (0 <= cell.x < size and 0 <= cell.y < size):
            return False
        return not session.snake.occupies(cell)


# ══════════════════════════════════════════════════════════
#  Simulation Runner
# ══════════════════════════════════════════════════════════

class SimulationRunner:
    """Run *n_games* headless games against one AdaptiveDirector.

    Parameters
    ----------
    n_games : int
        How many games to play.
    grid_size : int
        Board side length in cells.
    seed : int | None
        Seed for the bot, the engine and the fallback placement.
    """

    def __init__(self, n_games: int = 10, grid_size: int = GRID_SIZE,
                 seed: int | None = None, max_ticks: int = SIM_MAX_TICKS) -> None:
        # Imported here so the engine package does not pull in pygame
        from systems.game_session import GameSession

        self._n_games = max(1, n_games)
        self._max_ticks = max_ticks
        rng = random.Random(seed)

        self.director = AdaptiveDirector(rng=random.Random(rng.random()))
        self.stats = SessionStats(report=False, plot_file=None)
        self.session = GameSession(self.director, grid_size=grid_size,
                                   rng=random.Random(rng.random()), stats=self.stats)
        self.bot = SnakeBot(rng=random.Random(rng.random()))
        self._results: list[GameResult] = []

    # ── Public entry point ────────────────────────────────

    def run(self, report: bool = True) -> list[GameResult]:
        """Play all games, then (optionally) print and return results."""
        for i in range(1, self._n_games + 1):
            result = self._run_one_game(i)
            self._results.append(result)
            logger.info(
                "Game %d: outcome=%s  score=%d  ticks=%d  diff=%d%%  strategy=%s  skill=%d",
                i, result.outcome, result.score, result.ticks, result.final_difficulty,
                result.final_strategy, result.skill_level,
            )
        if report:
            self._print_summary()
        return self._results

    # ── Single game ───────────────────────────────────────

    def _run_one_game(self, game_number: int) -> GameResult:
        session = self.session
        now = 0.0
        session.reset()
        session.start(now)

        ticks = 0
        while not session.game_over:
            if ticks >= self._max_ticks:
                logger.warning("Game %d timed out after %d ticks", game_number, ticks)
                session.end("timeout")
                break

            choice = self.bot.choose(session)
            if choice != session.snake.heading:
                now += self.bot.reaction_delay()
                session.handle_direction(choice, now)

            now += session.move_interval_ms
            session.update()
            ticks += 1

        status = self.director.get_status()
        return GameResult(
            game_number=game_number,
            outcome=self.stats.outcome,
            score=session.score,
            length=len(session.snake),
            ticks=ticks,
            final_difficulty=status.difficulty_percent,
            mean_difficulty=self.stats.mean_difficulty,
            final_strategy=status.strategy.value,
            skill_level=status.skill_level,
            strategy_changes=self.stats.strategy_changes,
        )

    # ── Summary printout ──────────────────────────────────

    def _print_summary(self) -> None:
        n = len(self._results)
        if n == 0:
            print("\nNo games completed.")
            return

        print(f"\n{'=' * 58}")
        print(f"  Simulation Results  ({n} games)")
        print(f"{'=' * 58}")

        outcomes: dict[str, int] = {}
        for r in self._results:
            outcomes[r.outcome] = outcomes.get(r.outcome, 0) + 1
        for name in sorted(outcomes, key=lambda k: outcomes[k], reverse=True):
            cnt = outcomes[name]
            print(f"  {name.capitalize():<10s}: {cnt:>4d}  ({100 * cnt / n:.1f}%)")

        scores = [r.score for r in self._results]
        print(f"\n  Avg score             : {sum(scores) / n:.1f}")
        print(f"  Best score            : {max(scores)}")
        print(f"  Avg ticks             : {sum(r.ticks for r in self._results) / n:.1f}")
        print(f"  Avg mean difficulty   : {sum(r.mean_difficulty for r in self._results) / n:.1f}%")
        print(f"  Avg strategy changes  : {sum(r.strategy_changes for r in self._results) / n:.1f}")

        # ── Final strategy distribution ───────────────────
        strat_count: dict[str, int] = {}
        for r in self._results:
            strat_count[r.final_strategy] = strat_count.get(r.final_strategy, 0) + 1
        print(f"\n  Final Strategy Distribution:")
        for name in sorted(strat_count, key=lambda k: strat_count[k], reverse=True):
            print(f"    {name:<18s}  games={strat_count[name]:>3d}")

        # ── Skill distribution ────────────────────────────
        print(f"\n  Final Skill Levels:")
        for level in range(1, 6):
            cnt = sum(1 for r in self._results if r.skill_level == level)
            if cnt:
                print(f"    Level {level}  games={cnt:>3d}")

        print(f"\n{'=' * 58}\n")
