"""Pytest fixtures for caladjust tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from caladjust.tracking.models import UserProfile, WeightEntry, WeightGoal

TODAY = date(2025, 3, 15)


def entries_from(weights_by_days_ago: dict[int, float], today: date = TODAY) -> list[WeightEntry]:
    """Build weight entries from {days_ago: weight}."""
    return [
        WeightEntry(date=today - timedelta(days=days_ago), weight=weight)
        for days_ago, weight in weights_by_days_ago.items()
    ]


@pytest.fixture
def today() -> date:
    """Fixed evaluation date."""
    return TODAY


@pytest.fixture
def make_entries():
    """Factory building weight entries from {days_ago: weight} relative to TODAY."""
    return entries_from


@pytest.fixture
def losing_goal() -> WeightGoal:
    """Active goal from 90 kg down to 75 kg."""
    return WeightGoal(start_weight=90.0, target_weight=75.0, start_date=date(2025, 1, 1))


@pytest.fixture
def gaining_goal() -> WeightGoal:
    """Active goal from 60 kg up to 70 kg."""
    return WeightGoal(start_weight=60.0, target_weight=70.0, start_date=date(2025, 1, 1))


@pytest.fixture
def profile(losing_goal) -> UserProfile:
    """85 kg woman on a 2000 kcal cut with an active losing goal."""
    return UserProfile(
        daily_calorie_goal=2000,
        weight=85.0,
        height=175.0,
        age=35,
        gender="female",
        activity_level="moderate",
        goal_type="lose_weight",
        weight_goal=losing_goal,
    )


@pytest.fixture
def flat_history() -> list[WeightEntry]:
    """Five weeks of weekly weigh-ins, all within 0.3 kg of each other."""
    return entries_from({35: 85.0, 28: 85.2, 21: 84.9, 14: 85.1, 7: 85.0, 0: 85.0})


@pytest.fixture
def input_document() -> dict:
    """A complete input document as it would be read from YAML."""
    return {
        "profile": {
            "daily_calorie_goal": 2000,
            "weight": 85.0,
            "height": 175,
            "age": 35,
            "gender": "female",
            "activity_level": "moderate",
            "goal_type": "lose_weight",
            "macro_targets": {"protein": 150, "carbs": 200, "fats": 70},
            "weight_goal": {
                "start_weight": 90.0,
                "target_weight": 75.0,
                "start_date": "2025-01-01",
                "status": "active",
            },
        },
        "history": [
            {"date": "2025-02-08", "weight": 85.0},
            {"date": "2025-02-15", "weight": 85.2},
            {"date": "2025-02-22", "weight": 84.9},
            {"date": "2025-03-01", "weight": 85.1},
            {"date": "2025-03-08", "weight": 85.0},
            {"date": "2025-03-15", "weight": 85.0, "recorded_at": "2025-03-15T07:30:00"},
        ],
    }
