"""
Tests for the adaptive director.

Tests cover:
- Strategy selection priority
- Difficulty smoothing, clamping and the move interval
- Prediction gating and food placement bookkeeping
- Settings updates and reset
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from ai.adaptive_director import AdaptiveDirector, DirectorConfig, move_interval_ms
from ai.ai_settings import AISettings
from ai.directions import Direction
from ai.food_placement import Strategy

R, L, U, D = Direction.RIGHT, Direction.LEFT, Direction.UP, Direction.DOWN


class FixedRandom:
    def __init__(self, value=0.0):
        self.value = value

    def random(self):
        return self.value


def _director(**settings):
    return AdaptiveDirector(settings=AISettings(**settings), rng=FixedRandom())


class TestInitialState:
    def test_status(self):
        status = _director().get_status()
        assert status.difficulty_percent == 30
        assert status.strategy == Strategy.LEARNING
        assert status.prediction is None
        assert status.skill_level == 1
        assert status.total_moves == 0
        assert status.success_rate_percent == 0

    def test_status_as_dict(self):
        data = _director().get_status().as_dict()
        assert data["strategy"] == "learning"
        assert data["prediction"] is None

    def test_default_interval(self):
        assert _director().move_interval_ms == pytest.approx(120)


class TestStrategy:
    def test_many_collisions_encourage(self):
        director = _director()
        for _ in range(4):
            director.record_collision()
        assert director.current_strategy == Strategy.ENCOURAGING

    def test_three_collisions_are_not_struggling(self):
        director = _director()
        for _ in range(3):
            director.record_collision()
        assert director.current_strategy == Strategy.LEARNING

    def test_slow_reactions_encourage(self):
        director = _director()
        director.record_move(U, 900.0)
        director.record_food_collection()
        assert director.current_strategy == Strategy.ENCOURAGING

    def test_fast_skilled_player_is_challenged(self):
        director = _director()
        director.record_move(R, 150.0)
        for _ in range(9):
            director.record_food_collection()
        director.record_collision()
        assert director.player_stats.skill_level == 5
        assert director.current_strategy == Strategy.CHALLENGING

    def test_struggling_beats_excelling(self):
        director = _director()
        director.record_move(R, 100.0)
        for _ in range(30):
            director.record_food_collection()
        for _ in range(4):
            director.record_collision()
        assert director.player_stats.skill_level == 5
        assert director.current_strategy == Strategy.ENCOURAGING

    def test_repetitive_player(self):
        director = _director()
        for move in (U, R, D, U, R, D):
            director.record_move(move, 400.0)
        director.record_food_collection()
        assert director.player_stats.skill_level == 3
        assert director.current_strategy == Strategy.PATTERN_BREAKING

    def test_learning_otherwise(self):
        director = _director()
        director.record_move(U, 300.0)
        director.record_move(R, 300.0)
        director.record_food_collection()
        assert director.current_strategy == Strategy.LEARNING

    def test_moves_alone_do_not_change_strategy(self):
        director = _director()
        for move in (U, R, D, U, R, D):
            director.record_move(move, 400.0)
        assert director.current_strategy == Strategy.LEARNING


class TestDifficulty:
    def test_one_step(self):
        director = _director()
        assert director.adjust_difficulty() == pytest.approx(0.295)
        assert director.current_difficulty == pytest.approx(0.295)

    def test_converges_to_target(self):
        director = _director()
        for _ in range(500):
            director.adjust_difficulty()
        assert director.current_difficulty == pytest.approx(0.2, abs=1e-3)

    def test_clamped_high(self):
        config = DirectorConfig(difficulty_targets=(2.0,) * 5)
        director = AdaptiveDirector(AISettings(difficulty_adjustment_rate=1.0), config)
        assert director.adjust_difficulty() == 1.0

    def test_clamped_low(self):
        config = DirectorConfig(difficulty_targets=(-1.0,) * 5)
        director = AdaptiveDirector(AISettings(difficulty_adjustment_rate=1.0), config)
        assert director.adjust_difficulty() == 0.1

    def test_fallback_target(self):
        director = AdaptiveDirector(config=DirectorConfig(difficulty_targets=()))
        assert director.target_difficulty() == 0.3
        assert director.adjust_difficulty() == pytest.approx(0.3)

    def test_target_follows_skill(self):
        director = _director()
        director.record_move(R, 150.0)
        director.record_food_collection()
        assert director.target_difficulty() == 0.9

    def test_adaptive_off(self):
        director = _director(adaptive_difficulty=False)
        for _ in range(10):
            director.adjust_difficulty()
        assert director.current_difficulty == pytest.approx(0.3)

    def test_move_interval(self):
        assert move_interval_ms(0.3) == pytest.approx(120)
        assert move_interval_ms(1.0) == pytest.approx(50)
        assert move_interval_ms(0.1) == pytest.approx(140)

    def test_move_interval_floor(self):
        assert move_interval_ms(5.0) == 50


class TestPredictionAndFood:
    def test_prediction(self):
        director = _director()
        for move in (R, R, D) * 3:
            director.record_move(move, 300.0)
        assert director.predict_next(R) == R
        assert director.get_status().prediction == R

    def test_prediction_disabled(self):
        director = _director(show_predictions=False)
        for move in (R, R, D) * 3:
            director.record_move(move, 300.0)
        assert director.predict_next(R) is None
        assert director.state.predicted_next_move is None

    def test_place_food_records_placement(self):
        director = _director()
        snake = [(5, 5), (4, 5), (3, 5)]
        food = director.place_food(snake, 10)
        assert food is not None
        assert food not in snake
        assert director.state.last_food_placement == food

    def test_place_food_full_board(self):
        director = _director()
        assert director.place_food([(0, 0)], 1) is None
        assert director.state.last_food_placement is None

    def test_place_food_uniform_when_smart_off(self):
        director = _director(smart_food_placement=False)
        assert director.place_food([(0, 0)], 3) == (0, 1)


class TestSettingsAndReset:
    def test_update_settings(self):
        director = _director()
        before = director.settings
        after = director.update_settings({"show_predictions": False, "bogus": 1})
        assert after.show_predictions is False
        assert before.show_predictions is True
        assert director.settings is after
        assert not hasattr(after, "bogus")

    def test_update_settings_keywords(self):
        director = _director()
        director.update_settings(difficulty_adjustment_rate=0.5)
        assert director.settings.difficulty_adjustment_rate == 0.5
        assert director.settings.adaptive_difficulty is True

    def test_settings_are_frozen(self):
        settings = AISettings()
        with pytest.raises(Exception):
            settings.show_predictions = False

    def test_reset_matches_fresh(self):
        director = _director(show_predictions=True)
        for move in (U, R, D, U, R, D):
            director.record_move(move, 400.0)
        director.record_food_collection()
        director.record_collision()
        director.adjust_difficulty()
        director.predict_next(D)
        director.place_food([(5, 5)], 10)
        director.update_settings(smart_food_placement=False)

        director.reset()
        assert director.get_status() == _director().get_status()
        assert director.state.last_food_placement is None
        assert director.model.patterns == {}
        assert director.settings.smart_food_placement is False

    def test_reset_twice(self):
        director = _director()
        director.record_collision()
        director.reset()
        first = director.get_status()
        director.reset()
        assert director.get_status() == first

    def test_success_percent(self):
        director = _director()
        for _ in range(9):
            director.record_food_collection()
        director.record_collision()
        assert director.get_status().success_rate_percent == 90

    def test_success_percent_rounds_half_up(self):
        director = _director()
        director.record_food_collection()
        director.record_food_collection()
        director.record_collision()
        assert director.get_status().success_rate_percent == 67


class TestPatternBreakingPlacement:
    """The director steers pattern-breaking food away from the favourite direction."""

    def _pattern_breaker(self, favourite):
        director = _director()
        for move in (favourite,) * 4 + (U, R, D, U, R, D):
            director.record_move(move, 400.0)
        director.record_food_collection()
        assert director.current_strategy == Strategy.PATTERN_BREAKING
        return director

    def test_favours_right_so_food_goes_down(self):
        director = self._pattern_breaker(R)
        assert director.model.most_preferred_direction() == R
        # zero noise: every non-right cell scores 50, right cells 0
        assert director.place_food([(0, 0)], 3) == (0, 1)

    def test_favours_down_so_food_goes_right(self):
        director = self._pattern_breaker(D)
        assert director.model.most_preferred_direction() == D
        assert director.place_food([(0, 0)], 3) == (1, 0)
