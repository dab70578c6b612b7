"""Tests for weekly change estimation and velocity alerts."""

from __future__ import annotations

from datetime import date

import pytest

from caladjust.config.settings import ThresholdsConfig
from caladjust.tracking.models import AlertType, WeightEntry
from caladjust.tracking.velocity import check_weight_velocity, estimate_weekly_change


class TestEstimateWeeklyChange:
    """Tests for estimate_weekly_change function."""

    def test_empty_history(self, today) -> None:
        """No entries means no change."""
        assert estimate_weekly_change([], today) == 0.0

    def test_single_entry(self, today, make_entries) -> None:
        """A single entry cannot produce a rate."""
        assert estimate_weekly_change(make_entries({0: 80.0}), today) == 0.0

    def test_exact_week_delta(self, today, make_entries) -> None:
        """Entries exactly 7 days apart give a literal delta."""
        history = make_entries({7: 80.0, 0: 79.0})
        assert estimate_weekly_change(history, today) == pytest.approx(-1.0)

    def test_short_history_is_prorated(self, today, make_entries) -> None:
        """0.6 kg lost over 3 days is about 1.4 kg/week."""
        history = make_entries({3: 80.0, 0: 79.4})
        assert estimate_weekly_change(history, today) == pytest.approx(-1.4)

    def test_same_day_entries_use_one_day_minimum(self, today) -> None:
        """Two entries on the same day are treated as one day apart."""
        history = [WeightEntry(today, 80.0), WeightEntry(today, 80.0)]
        assert estimate_weekly_change(history, today) == pytest.approx(0.0)

    def test_uses_newest_week_old_entry(self, today, make_entries) -> None:
        """The reference is the most recent entry at least a week old."""
        history = make_entries({14: 82.0, 8: 81.0, 3: 80.5, 0: 80.0})
        assert estimate_weekly_change(history, today) == pytest.approx(-1.0)

    def test_order_independent(self, today, make_entries) -> None:
        """Input order should not affect the result."""
        history = make_entries({0: 79.0, 14: 81.0, 7: 80.0})
        assert estimate_weekly_change(history, today) == pytest.approx(-1.0)
        assert estimate_weekly_change(list(reversed(history)), today) == pytest.approx(-1.0)

    def test_input_not_mutated(self, today, make_entries) -> None:
        """Sorting happens on a copy."""
        history = make_entries({0: 79.0, 7: 80.0})
        before = list(history)
        estimate_weekly_change(history, today)
        assert history == before

    def test_outlier_is_not_smoothed(self, today, make_entries) -> None:
        """A single erratic weigh-in moves the result directly."""
        history = make_entries({7: 80.0, 1: 79.8, 0: 82.0})
        assert estimate_weekly_change(history, today) == pytest.approx(2.0)


class TestCheckWeightVelocity:
    """Tests for check_weight_velocity function."""

    def test_goal_achieved_with_single_entry(self, today, losing_goal, make_entries) -> None:
        """Reaching the target is detected even with one weigh-in."""
        alert = check_weight_velocity(make_entries({0: 74.8}), losing_goal, today)
        assert alert.type == AlertType.GOAL_ACHIEVED
        assert alert.recommendation is not None

    def test_goal_achieved_exactly_at_target(self, today, losing_goal, make_entries) -> None:
        """Target weight itself counts as achieved."""
        alert = check_weight_velocity(make_entries({0: 75.0}), losing_goal, today)
        assert alert.type == AlertType.GOAL_ACHIEVED

    def test_gaining_goal_achieved(self, today, gaining_goal, make_entries) -> None:
        """A gaining goal is achieved at or above the target."""
        alert = check_weight_velocity(make_entries({7: 69.0, 0: 70.2}), gaining_goal, today)
        assert alert.type == AlertType.GOAL_ACHIEVED

    def test_goal_achieved_uses_latest_entry(self, today, losing_goal, make_entries) -> None:
        """An old entry below target does not count once weight went back up."""
        history = make_entries({14: 74.0, 0: 76.0})
        alert = check_weight_velocity(history, losing_goal, today)
        assert alert.type != AlertType.GOAL_ACHIEVED

    def test_fast_loss(self, today, losing_goal, make_entries) -> None:
        """Losing 1.5 kg in a week is flagged as fast loss."""
        alert = check_weight_velocity(make_entries({7: 85.0, 0: 83.5}), losing_goal, today)
        assert alert.type == AlertType.FAST_LOSS
        assert alert.weekly_change == pytest.approx(-1.5)
        assert "200-300" in alert.recommendation

    def test_one_kg_is_not_fast_loss(self, today, losing_goal, make_entries) -> None:
        """The fast loss threshold is strict."""
        alert = check_weight_velocity(make_entries({7: 80.0, 0: 79.0}), losing_goal, today)
        assert alert.type == AlertType.ON_TRACK

    def test_fast_gain_while_losing(self, today, losing_goal, make_entries) -> None:
        """Gaining 0.8 kg on a losing goal is flagged."""
        alert = check_weight_velocity(make_entries({7: 85.0, 0: 85.8}), losing_goal, today)
        assert alert.type == AlertType.FAST_GAIN

    def test_slow_progress(self, today, losing_goal, make_entries) -> None:
        """Losing 0.1 kg in a week is slow progress."""
        alert = check_weight_velocity(make_entries({7: 85.0, 0: 84.9}), losing_goal, today)
        assert alert.type == AlertType.SLOW_PROGRESS

    def test_no_change_is_slow_progress(self, today, losing_goal, make_entries) -> None:
        """Zero change falls inside the slow progress band."""
        alert = check_weight_velocity(make_entries({7: 85.0, 0: 85.0}), losing_goal, today)
        assert alert.type == AlertType.SLOW_PROGRESS

    def test_small_gain_is_on_track(self, today, losing_goal, make_entries) -> None:
        """A gain below the fast gain threshold is not slow progress."""
        alert = check_weight_velocity(make_entries({7: 85.0, 0: 85.3}), losing_goal, today)
        assert alert.type == AlertType.ON_TRACK

    def test_on_track_loss(self, today, losing_goal, make_entries) -> None:
        """Half a kilo per week is a healthy loss."""
        alert = check_weight_velocity(make_entries({7: 85.0, 0: 84.5}), losing_goal, today)
        assert alert.type == AlertType.ON_TRACK
        assert "loss" in alert.message

    def test_custom_thresholds(self, today, losing_goal, make_entries) -> None:
        """Thresholds come from the config when given."""
        thresholds = ThresholdsConfig(fast_loss_rate=-0.4)
        alert = check_weight_velocity(
            make_entries({7: 85.0, 0: 84.5}), losing_goal, today, thresholds
        )
        assert alert.type == AlertType.FAST_LOSS


class TestGainingGoalAsymmetry:
    """Gaining goals skip the fast/slow checks. This is a known limitation."""

    def test_fast_loss_on_gaining_goal_is_on_track(self, today, gaining_goal, make_entries) -> None:
        """Losing 1.5 kg/week while trying to gain is still reported on track."""
        alert = check_weight_velocity(make_entries({7: 65.0, 0: 63.5}), gaining_goal, today)
        assert alert.type == AlertType.ON_TRACK
        assert "gain" in alert.message

    def test_fast_gain_on_gaining_goal_is_on_track(self, today, gaining_goal, make_entries) -> None:
        """Gaining 2 kg/week is not flagged for gaining goals."""
        alert = check_weight_velocity(make_entries({7: 63.0, 0: 65.0}), gaining_goal, today)
        assert alert.type == AlertType.ON_TRACK

    def test_stalled_gain_is_on_track(self, today, gaining_goal, make_entries) -> None:
        """No slow progress alert for gaining goals."""
        alert = check_weight_velocity(make_entries({7: 65.0, 0: 65.0}), gaining_goal, today)
        assert alert.type == AlertType.ON_TRACK


def test_default_today_is_used(losing_goal) -> None:
    """Without an explicit date the estimator looks back from today."""
    history = [WeightEntry(date.today(), 80.0)]
    alert = check_weight_velocity(history, losing_goal)
    assert alert.weekly_change == 0.0
