"""Helpers for treating unordered weight entries as a time series.

Both the weekly change estimator and the recalculation trigger look back to
"the newest entry at least N days old". They share most_recent_on_or_before
so the two always agree on what counts as old.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from caladjust.tracking.models import WeightEntry


def sort_by_date_desc(history: Iterable[WeightEntry]) -> list[WeightEntry]:
    """Return a new list, newest entry first. The input is left untouched."""
    return sorted(history, key=lambda e: e.date, reverse=True)


def latest_entry(history: Iterable[WeightEntry]) -> Optional[WeightEntry]:
    """Most recent entry by date, or None for an empty history."""
    return max(history, key=lambda e: e.date, default=None)


def most_recent_on_or_before(
    history: Iterable[WeightEntry],
    cutoff: date,
) -> Optional[WeightEntry]:
    """
    Find the newest entry dated on or before cutoff.

    Args:
        history: Weight entries in any order
        cutoff: Inclusive upper bound on the entry date

    Returns:
        The matching entry, or None if every entry is newer than cutoff
    """
    candidates = [e for e in history if e.date <= cutoff]
    return latest_entry(candidates)


def days_between(later: WeightEntry, earlier: WeightEntry) -> int:
    return (later.date - earlier.date).days
