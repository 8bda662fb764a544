"""
Tests for the player behaviour model.

Tests cover:
- Move history bounds and incremental reaction-time mean
- Skill-level thresholds
- 3-gram pattern table and next-move prediction
- Repetition detection and preferred direction
- Reset
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from ai.behavior_model import BehaviorModel, PlayerStats, pattern_key
from ai.directions import Direction

R, L, U, D = Direction.RIGHT, Direction.LEFT, Direction.UP, Direction.DOWN


def _model_with(moves, reaction_ms=300.0):
    model = BehaviorModel()
    for move in moves:
        model.record_move(move, reaction_ms)
    return model


class TestRecording:
    def test_history_is_bounded(self):
        moves = [U, R, D, L, U, R, D, L, U, R, D, L, R, R, U]
        model = _model_with(moves)
        assert model.stats.total_moves == 15
        assert list(model.stats.last_moves) == moves[-10:]

    def test_short_history_kept_in_order(self):
        model = _model_with([U, L, D])
        assert list(model.stats.last_moves) == [U, L, D]

    def test_incremental_mean(self):
        samples = [120.0, 480.0, 95.5, 310.0, 1000.0, 42.0]
        model = BehaviorModel()
        for i, rt in enumerate(samples):
            model.record_move(Direction.UP if i % 2 else Direction.LEFT, rt)
        assert model.stats.average_reaction_time == pytest.approx(sum(samples) / len(samples))

    def test_direction_histogram(self):
        model = _model_with([U, U, R, "down"])
        prefs = model.stats.preferred_directions
        assert prefs[U] == 2
        assert prefs[R] == 1
        assert prefs[D] == 1
        assert prefs[L] == 0

    def test_plain_strings_accepted(self):
        model = _model_with(["left", "up"])
        assert list(model.stats.last_moves) == [L, U]

    def test_food_and_collision_counters(self):
        model = BehaviorModel()
        model.record_food_collection()
        model.record_food_collection()
        model.record_collision()
        assert model.stats.food_collected == 2
        assert model.stats.collision_count == 1
        assert model.stats.success_rate == pytest.approx(2 / 3)

    def test_success_rate_without_events(self):
        assert PlayerStats().success_rate == 0.0


class TestSkillLevel:
    def _skill(self, food, collisions, reaction_ms):
        model = BehaviorModel()
        model.record_move(R, reaction_ms)
        for _ in range(food):
            model.record_food_collection()
        for _ in range(collisions):
            model.record_collision()
        return model.stats.skill_level

    def test_starts_at_one(self):
        assert BehaviorModel().stats.skill_level == 1

    def test_top_level(self):
        # 0.9 success, 150ms
        assert self._skill(9, 1, 150.0) == 5

    def test_success_rate_boundary_is_strict(self):
        # exactly 0.8 does not reach level 5
        assert self._skill(8, 2, 199.0) == 4

    def test_reaction_boundary_is_strict(self):
        assert self._skill(9, 1, 200.0) == 4

    def test_slow_but_accurate(self):
        assert self._skill(5, 5, 450.0) == 3

    def test_slow_fallback_to_two(self):
        assert self._skill(1, 1, 900.0) == 2

    def test_poor_play(self):
        assert self._skill(1, 9, 100.0) == 1

    def test_skill_tracks_new_moves(self):
        model = BehaviorModel()
        for _ in range(9):
            model.record_food_collection()
        model.record_collision()
        model.record_move(R, 150.0)
        assert model.stats.skill_level == 5
        model.record_move(U, 2000.0)   # mean now 1075ms
        assert model.stats.skill_level == 2


class TestPatterns:
    def test_pattern_key(self):
        assert pattern_key([R, R, D]) == "rrd"
        assert pattern_key(["up", "left", "down"]) == "uld"

    def test_no_patterns_before_three_moves(self):
        model = _model_with([U, R])
        assert model.patterns == {}

    def test_counts_every_trigram(self):
        model = _model_with([R, R, D] * 3)
        assert model.patterns == {"rrd": 3, "rdr": 2, "drr": 2}

    def test_keys_follow_history_order(self):
        model = _model_with([U, D, L, R])
        assert list(model.patterns) == ["udl", "dlr"]

    def test_predict_repeated_cycle(self):
        model = _model_with([R, R, D] * 3)
        # context (right, down) has only ever been followed by right
        assert model.predict_next(R) == R
        assert model.predict_next(U) == R

    def test_predict_with_short_history(self):
        model = _model_with([L])
        assert model.predict_next(U) == U
        assert BehaviorModel().predict_next("down") == D

    def test_predict_without_matching_context(self):
        model = _model_with([U, L])
        assert model.predict_next(D) == D

    def test_predict_tie_goes_to_first_seen(self):
        # "urd" and "url" are both seen once; "urd" came first
        model = _model_with([U, R, D, U, R, L, U, R])
        assert model.patterns["urd"] == 1
        assert model.patterns["url"] == 1
        assert model.predict_next(R) == D

    def test_predict_prefers_most_frequent(self):
        model = _model_with([U, R, D, U, R, L, U, R, L, U, R])
        assert model.patterns["url"] == 2
        assert model.predict_next(R) == L


class TestRepetition:
    def test_repeating_block(self):
        assert _model_with([U, R, D, U, R, D]).is_repetitive()

    def test_needs_six_moves(self):
        assert not _model_with([U, R, D, U, R]).is_repetitive()

    def test_broken_block(self):
        assert not _model_with([U, R, D, U, R, L]).is_repetitive()

    def test_uses_latest_six(self):
        assert _model_with([L, L, U, R, D, U, R, D]).is_repetitive()


class TestPreferredDirection:
    def test_ties_resolve_to_last_direction(self):
        assert BehaviorModel().most_preferred_direction() == R

    def test_highest_count_wins(self):
        assert _model_with([U, U, L]).most_preferred_direction() == U

    def test_tie_between_two(self):
        # up and left both twice: later key (left) wins
        assert _model_with([U, L, U, L]).most_preferred_direction() == L


class TestReset:
    def test_reset_matches_fresh_model(self):
        model = _model_with([U, R, D, U, R, D], reaction_ms=222.0)
        model.record_food_collection()
        model.record_collision()
        model.reset()
        fresh = BehaviorModel()
        assert model.stats == fresh.stats
        assert model.patterns == {}
        assert model.stats.last_moves.maxlen == 10

    def test_reset_twice(self):
        model = _model_with([U, R, D])
        model.reset()
        once = (model.stats, dict(model.patterns))
        model.reset()
        assert (model.stats, model.patterns) == once
