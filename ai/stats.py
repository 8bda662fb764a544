"""
stats.py  –  Per-game statistics tracking.

SessionStats samples the engine status every tick of a game.  At game
end it prints a formatted summary and (optionally) saves a
difficulty-trend line graph via matplotlib.

Nothing is kept across games: start_game() clears the trace.
"""

import logging
import time

import numpy as np

logger = logging.getLogger(__name__)

import matplotlib
matplotlib.use("Agg")  # non-interactive backend so the plot doesn't block pygame
import matplotlib.pyplot as plt

DEFAULT_PLOT_FILE = "difficulty_trend.png"


class SessionStats:
    """Tracks engine output for one game and produces end-of-game reports.

    Attributes tracked:
        difficulty_history  – list[int]  (difficulty % per tick)
        strategy_history    – list[str]  (strategy per tick)
        strategy_changes    – int
        score               – int  (set at end_game)
        outcome             – str  ("crash" | "win" | "timeout", set at end_game)
        duration            – float (seconds, set at end_game)
    """

    def __init__(self, report: bool = True, plot_file: str | None = DEFAULT_PLOT_FILE):
        self.report = report
        self.plot_file = plot_file
        self.start_game()

    def start_game(self):
        """Clear the trace; call when a new game begins."""
        self.difficulty_history: list[int] = []
        self.strategy_history: list[str] = []
        self.strategy_changes: int = 0
        self.final_status: dict = {}
        self.score: int = 0
        self.outcome: str = ""
        self.duration: float = 0.0
        self._start_time: float = time.time()

    # ══════════════════════════════════════════════════════
    #  Per-tick recorder
    # ══════════════════════════════════════════════════════

    def record_tick(self, status):
        """Call once per simulation tick with the engine's AIStatus."""
        strategy = status.strategy.value
        if self.strategy_history and self.strategy_history[-1] != strategy:
            self.strategy_changes += 1
        self.difficulty_history.append(status.difficulty_percent)
        self.strategy_history.append(strategy)
        self.final_status = status.as_dict()

    # ══════════════════════════════════════════════════════
    #  End-of-game
    # ══════════════════════════════════════════════════════

    def end_game(self, score: int, outcome: str):
        """Finalise stats and, when reporting is on, print and plot them."""
        self.duration = time.time() - self._start_time
        self.score = score
        self.outcome = outcome

        if self.report:
            self._print_summary()
            if self.plot_file:
                self.plot_difficulty(self.plot_file)

    @property
    def mean_difficulty(self) -> float:
        if not self.difficulty_history:
            return 0.0
        return float(np.mean(self.difficulty_history))

    # ══════════════════════════════════════════════════════
    #  Reports
    # ══════════════════════════════════════════════════════

    def _print_summary(self):
        """Print a clean formatted game summary to stdout."""
        status = self.final_status
        print("\n" + "=" * 52)
        print("  GAME SUMMARY")
        print("=" * 52)
        print(f"  Outcome          : {self.outcome}")
        print(f"  Score            : {self.score}")
        print(f"  Duration         : {self.duration:.1f}s")
        print(f"  Ticks            : {len(self.difficulty_history)}")
        print("-" * 52)
        print(f"  Skill Level      : {status.get('skill_level', 1)}/5")
        print(f"  Success Rate     : {status.get('success_rate_percent', 0)}%")
        print(f"  Total Moves      : {status.get('total_moves', 0)}")
        print(f"  Final Strategy   : {status.get('strategy', '-')}")
        print(f"  Strategy Changes : {self.strategy_changes}")
        print(f"  Difficulty       : mean {self.mean_difficulty:.1f}%  "
              f"final {status.get('difficulty_percent', 0)}%")
        print("=" * 52 + "\n")

    def plot_difficulty(self, filename: str) -> str | None:
        """Save a line graph of difficulty_history to *filename*."""
        if not self.difficulty_history:
            return None

        x = np.arange(len(self.difficulty_history))
        y = np.asarray(self.difficulty_history)

        fig, ax = plt.subplots()
        ax.plot(x, y)
        ax.set_xlabel("Tick")
        ax.set_ylabel("Difficulty (%)")
        ax.set_ylim(0, 100)
        ax.set_title(f"Difficulty Trend - score {self.score}")
        ax.grid(True)

        fig.savefig(filename, dpi=100, bbox_inches="tight")
        plt.close(fig)
        logger.info("Difficulty graph saved to %s", filename)
        return filename

    # ══════════════════════════════════════════════════════
    #  Data accessors
    # ══════════════════════════════════════════════════════

    def as_dict(self) -> dict:
        """Return a plain dict snapshot (useful for JSON serialisation)."""
        return {
            "score":              self.score,
            "outcome":            self.outcome,
            "duration":           round(self.duration, 2),
            "ticks":              len(self.difficulty_history),
            "strategy_changes":   self.strategy_changes,
            "mean_difficulty":    round(self.mean_difficulty, 2),
            "final_status":       dict(self.final_status),
        }
