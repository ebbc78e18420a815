"""Deadline-aware truncation of the aligned day sequence."""
from __future__ import annotations

from datetime import date, timedelta
from typing import List, Sequence

from studyplanner.api.schemas.schedule import TaskPayload
from studyplanner.services.calendar_aligner import AlignedDay

DEFAULT_FLOOR_DAYS = 4
DEFAULT_MAX_DAYS = 10


def horizon_cutoff(tasks: Sequence[TaskPayload], today: date, floor_days: int = DEFAULT_FLOOR_DAYS) -> date:
    """Latest task due date, but never earlier than today + floor_days."""
    floor = today + timedelta(days=floor_days)
    due_dates = [task.due_date for task in tasks if task.due_date]
    return max([floor, *due_dates])


def apply_horizon(
    days: Sequence[AlignedDay],
    cutoff: date,
    max_days: int = DEFAULT_MAX_DAYS,
) -> List[AlignedDay]:
    kept = [day for day in days if day.calendar_date <= cutoff]
    return kept[:max_days]
