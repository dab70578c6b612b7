"""Load a profile and weight history from a YAML or JSON document.

Expected layout:

    profile:
      daily_calorie_goal: 2000
      weight: 85.0
      height: 175
      age: 35
      gender: female
      activity_level: moderate
      goal_type: lose_weight
      is_clinical_mode: false
      macro_targets: {protein: 150, carbs: 200, fats: 70}
      weight_goal:
        start_weight: 90.0
        target_weight: 75.0
        start_date: 2025-01-01
        status: active
    history:
      - {date: 2025-01-01, weight: 90.0}
      - {date: 2025-01-08, weight: 89.2, recorded_at: 2025-01-08T07:30:00}

JSON is a subset of YAML, so both are read with yaml.safe_load.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import yaml

from caladjust.tracking.models import MacroTargets, UserProfile, WeightEntry, WeightGoal


@dataclass
class AdjustmentInput:
    """Everything needed for one evaluation."""

    profile: UserProfile
    history: list[WeightEntry]
    last_calculated_weight: Optional[float] = None


def _number(value: Any, field_name: str, cast: type = float) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be a number, got {value!r}") from None


def _parse_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"{field_name} must be a YYYY-MM-DD date, got '{value}'") from None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _parse_goal(data: Optional[dict]) -> Optional[WeightGoal]:
    if not data:
        return None
    if not isinstance(data, dict):
        raise ValueError("weight_goal must be a mapping")
    try:
        return WeightGoal(
            start_weight=_number(data["start_weight"], "weight_goal.start_weight"),
            target_weight=_number(data["target_weight"], "weight_goal.target_weight"),
            start_date=(
                _parse_date(data["start_date"], "weight_goal.start_date")
                if data.get("start_date") is not None
                else None
            ),
            status=data.get("status", "active"),
        )
    except KeyError as e:
        raise ValueError(f"weight_goal is missing required field {e}") from None


def _parse_macros(data: Optional[dict]) -> Optional[MacroTargets]:
    if not data:
        return None
    if not isinstance(data, dict):
        raise ValueError("macro_targets must be a mapping")
    return MacroTargets(
        protein=_number(data.get("protein", 0), "macro_targets.protein", int),
        carbs=_number(data.get("carbs", 0), "macro_targets.carbs", int),
        fats=_number(data.get("fats", 0), "macro_targets.fats", int),
    )


def parse_profile(data: dict) -> UserProfile:
    """Build a UserProfile from a mapping. Only daily_calorie_goal is required."""
    if not isinstance(data, dict):
        raise ValueError("profile must be a mapping")
    if "daily_calorie_goal" not in data:
        raise ValueError("profile is missing required field 'daily_calorie_goal'")

    def optional_float(key: str) -> Optional[float]:
        if data.get(key) is None:
            return None
        return _number(data[key], f"profile.{key}")

    return UserProfile(
        daily_calorie_goal=_number(
            data["daily_calorie_goal"], "profile.daily_calorie_goal", int
        ),
        weight=optional_float("weight"),
        height=optional_float("height"),
        age=_number(data["age"], "profile.age", int) if data.get("age") is not None else None,
        gender=data.get("gender"),
        activity_level=data.get("activity_level"),
        goal_type=data.get("goal_type"),
        macro_targets=_parse_macros(data.get("macro_targets")),
        is_clinical_mode=bool(data.get("is_clinical_mode", False)),
        weight_goal=_parse_goal(data.get("weight_goal")),
    )


def parse_history(items: list[dict]) -> list[WeightEntry]:
    """Build weight entries from a list of mappings."""
    if not isinstance(items, list):
        raise ValueError("history must be a list of entries")
    entries = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"history[{i}] must be a mapping with 'date' and 'weight'")
        if "date" not in item or "weight" not in item:
            raise ValueError(f"history[{i}] needs both 'date' and 'weight'")
        entries.append(
            WeightEntry(
                date=_parse_date(item["date"], f"history[{i}].date"),
                weight=_number(item["weight"], f"history[{i}].weight"),
                recorded_at=_parse_datetime(item.get("recorded_at")),
            )
        )
    return entries


def parse_document(data: dict) -> AdjustmentInput:
    """Parse an already-loaded document into an AdjustmentInput."""
    if not isinstance(data, dict) or "profile" not in data:
        raise ValueError("document must be a mapping with a 'profile' section")

    last_weight = data.get("last_calculated_weight")
    return AdjustmentInput(
        profile=parse_profile(data["profile"]),
        history=parse_history(data.get("history") or []),
        last_calculated_weight=(
            _number(last_weight, "last_calculated_weight") if last_weight is not None else None
        ),
    )


def load_document(path: Path) -> AdjustmentInput:
    """Read and parse a YAML/JSON input file."""
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"{path} is not valid YAML/JSON: {e}") from e
    return parse_document(data)
