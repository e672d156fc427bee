"""
Milestone Calculator

Phase offsets and the fixed milestone schedule, both anchored on the deal
close date.
"""

from __future__ import annotations

from datetime import date, timedelta

from dealplan.models.plan import Milestone

# Days from close for each phase
PHASE_OFFSETS: dict[str, int] = {
    "pre_close": -7,
    "day_1": 0,
    "day_30": 30,
    "day_60": 60,
    "day_90": 90,
    "year_1": 365,
}

# (phase, label, days from close), ascending by offset
MILESTONE_SCHEDULE: tuple[tuple[str, str, int], ...] = (
    ("day_1", "Day 1 / Close", 0),
    ("day_30", "Day 30 Checkpoint", 30),
    ("day_60", "Day 60 Review", 60),
    ("day_90", "Day 90 SteerCo", 90),
    ("year_1", "Year 1 Close-Out", 365),
)


def _parse_close_date(close_date: str) -> date:
    # Accepts a plain date or the date part of a full ISO timestamp
    return date.fromisoformat(close_date[:10])


def add_days(close_date: str, days: int) -> str:
    """Return ``close_date + days`` as ``YYYY-MM-DD``."""
    return (_parse_close_date(close_date) + timedelta(days=days)).isoformat()


def phase_date(close_date: str, phase: str) -> str | None:
    """Milestone date for a phase, or None when there is no close date."""
    if not close_date:
        return None
    return add_days(close_date, PHASE_OFFSETS[phase])


def build_milestones(close_date: str) -> list[Milestone]:
    """Return the five fixed milestones, or an empty list without a close date."""
    if not close_date:
        return []
    return [
        Milestone(phase=phase, label=label, date=add_days(close_date, offset), days_from_close=offset)
        for phase, label, offset in MILESTONE_SCHEDULE
    ]
