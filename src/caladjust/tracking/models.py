"""Data models for weight tracking and calorie adjustment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


# Fallbacks for profile fields that were never filled in
DEFAULT_WEIGHT_KG = 70.0
DEFAULT_HEIGHT_CM = 170.0
DEFAULT_AGE = 30


class GoalStatus(Enum):
    ACTIVE = "active"
    ACHIEVED = "achieved"
    ABANDONED = "abandoned"


class AdjustmentReason(Enum):
    """Why a calorie adjustment was (or was not) suggested."""
    WEIGHT_CHANGED = "weight_changed"
    PLATEAU_DETECTED = "plateau_detected"
    FAST_LOSS = "fast_loss"
    SLOW_PROGRESS = "slow_progress"
    GOAL_ACHIEVED = "goal_achieved"
    NONE = "none"


class Severity(Enum):
    """How urgently a recommendation should be surfaced."""
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


class AlertType(Enum):
    FAST_LOSS = "fast_loss"
    FAST_GAIN = "fast_gain"
    SLOW_PROGRESS = "slow_progress"
    ON_TRACK = "on_track"
    GOAL_ACHIEVED = "goal_achieved"


class TriggerKind(Enum):
    """Which signal asked for a recalculation."""
    WEIGHT_DRIFT = "weight_drift"
    PLATEAU = "plateau"


@dataclass(frozen=True)
class WeightEntry:
    """A single weigh-in."""

    date: date
    weight: float  # kg
    recorded_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.weight <= 0:
            raise ValueError(f"weight must be positive, got {self.weight}")


@dataclass(frozen=True)
class WeightGoal:
    """A declared weight target. Direction is derived from the two weights."""

    start_weight: float
    target_weight: float
    start_date: Optional[date] = None
    status: GoalStatus = GoalStatus.ACTIVE

    def __post_init__(self) -> None:
        if self.start_weight <= 0:
            raise ValueError(f"start_weight must be positive, got {self.start_weight}")
        if self.target_weight <= 0:
            raise ValueError(f"target_weight must be positive, got {self.target_weight}")
        if not isinstance(self.status, GoalStatus):
            # Accept raw strings from stored documents
            object.__setattr__(self, "status", GoalStatus(self.status))

    @property
    def is_losing(self) -> bool:
        return self.start_weight > self.target_weight

    @property
    def is_active(self) -> bool:
        return self.status == GoalStatus.ACTIVE


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets in grams."""

    protein: int
    carbs: int
    fats: int

    def to_dict(self) -> dict:
        return {"protein": self.protein, "carbs": self.carbs, "fats": self.fats}


@dataclass
class UserProfile:
    """User profile as loaded from the store.

    Body fields may be missing; consumers fall back to the DEFAULT_* values.
    activity_level and goal_type hold the raw stored strings, which can
    include legacy values, and are normalized before use.
    """

    daily_calorie_goal: int
    weight: Optional[float] = None  # kg
    height: Optional[float] = None  # cm
    age: Optional[int] = None
    gender: Optional[str] = None  # 'male', 'female', 'other'
    activity_level: Optional[str] = None
    goal_type: Optional[str] = None
    macro_targets: Optional[MacroTargets] = None
    is_clinical_mode: bool = False
    weight_goal: Optional[WeightGoal] = None

    @property
    def current_weight(self) -> float:
        return self.weight or DEFAULT_WEIGHT_KG

    @property
    def height_or_default(self) -> float:
        return self.height or DEFAULT_HEIGHT_CM

    @property
    def age_or_default(self) -> int:
        return self.age or DEFAULT_AGE

    @property
    def active_goal(self) -> Optional[WeightGoal]:
        """The weight goal, only if it is still active."""
        if self.weight_goal is not None and self.weight_goal.is_active:
            return self.weight_goal
        return None


@dataclass(frozen=True)
class WeightChangeAlert:
    """Result of classifying the recent rate of weight change."""

    type: AlertType
    weekly_change: float  # kg/week, negative = losing
    message: str
    recommendation: Optional[str] = None


@dataclass(frozen=True)
class RecalculationDecision:
    """Whether calorie targets are stale enough to recompute."""

    trigger: bool
    kind: Optional[TriggerKind] = None
    reason: str = ""


@dataclass(frozen=True)
class CalorieAdjustment:
    """Final recommendation. The caller decides whether to apply it."""

    should_adjust: bool
    reason: AdjustmentReason
    previous_goal: int
    suggested_goal: int
    difference: int
    message: str
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "should_adjust": self.should_adjust,
            "reason": self.reason.value,
            "previous_goal": self.previous_goal,
            "suggested_goal": self.suggested_goal,
            "difference": self.difference,
            "message": self.message,
            "severity": self.severity.value,
        }
