"""
Tests for per-game statistics and the difficulty graph.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from ai.adaptive_director import AIStatus
from ai.directions import Direction
from ai.food_placement import Strategy
from ai.stats import SessionStats


def _status(difficulty=30, strategy=Strategy.LEARNING, skill=1):
    return AIStatus(
        difficulty_percent=difficulty,
        strategy=strategy,
        prediction=Direction.UP,
        skill_level=skill,
        total_moves=4,
        success_rate_percent=50,
    )


class TestRecording:
    def test_record_tick(self):
        stats = SessionStats(report=False, plot_file=None)
        stats.record_tick(_status(30))
        stats.record_tick(_status(40))
        assert stats.difficulty_history == [30, 40]
        assert stats.mean_difficulty == pytest.approx(35.0)
        assert stats.final_status["prediction"] == "up"

    def test_strategy_changes(self):
        stats = SessionStats(report=False, plot_file=None)
        for strategy in (Strategy.LEARNING, Strategy.LEARNING, Strategy.ENCOURAGING,
                         Strategy.LEARNING):
            stats.record_tick(_status(strategy=strategy))
        assert stats.strategy_changes == 2

    def test_start_game_clears(self):
        stats = SessionStats(report=False, plot_file=None)
        stats.record_tick(_status())
        stats.end_game(20, "crash")
        stats.start_game()
        assert stats.difficulty_history == []
        assert stats.score == 0
        assert stats.mean_difficulty == 0.0

    def test_as_dict(self):
        stats = SessionStats(report=False, plot_file=None)
        stats.record_tick(_status(50, Strategy.CHALLENGING, skill=4))
        stats.end_game(30, "win")
        data = stats.as_dict()
        assert data["score"] == 30
        assert data["outcome"] == "win"
        assert data["ticks"] == 1
        assert data["final_status"]["strategy"] == "challenging"
        assert data["final_status"]["skill_level"] == 4


class TestReports:
    def test_summary_printed(self, capsys):
        stats = SessionStats(report=True, plot_file=None)
        stats.record_tick(_status())
        stats.end_game(40, "crash")
        out = capsys.readouterr().out
        assert "GAME SUMMARY" in out
        assert "crash" in out
        assert "40" in out

    def test_quiet_when_not_reporting(self, capsys):
        stats = SessionStats(report=False, plot_file=None)
        stats.end_game(0, "crash")
        assert capsys.readouterr().out == ""

    def test_plot_saved(self, tmp_path):
        target = tmp_path / "trend.png"
        stats = SessionStats(report=True, plot_file=str(target))
        for d in (30, 32, 35):
            stats.record_tick(_status(d))
        stats.end_game(10, "crash")
        assert target.exists()
        assert target.stat().st_size > 0

    def test_plot_skipped_without_data(self, tmp_path):
        target = tmp_path / "empty.png"
        stats = SessionStats(report=False, plot_file=None)
        assert stats.plot_difficulty(str(target)) is None
        assert not target.exists()
