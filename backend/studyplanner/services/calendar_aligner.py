"""Anchor model-labelled day entries to a contiguous run of calendar dates."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from dateutil import parser as dateutil_parser

from studyplanner.api.schemas.schedule import DaySchedule

logger = logging.getLogger(__name__)

# 0=Sunday .. 6=Saturday
WEEKDAY_INDEX = {"sun": 0, "mon": 1, "tue": 2, "wed": 3, "thu": 4, "fri": 5, "sat": 6}

_NUMERIC_DATE = re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})(?:/(\d{2}|\d{4}))?(?!\d)")
_YEAR = re.compile(r"\b\d{4}\b")


@dataclass(frozen=True)
class AlignedDay:
    calendar_date: date
    schedule: DaySchedule


def align_days(days: Sequence[DaySchedule], today: date) -> List[AlignedDay]:
    """Assign every entry a date so that the best match for today lands on today.

    Entries are re-dated at fixed one-day steps from the matched entry, so the
    result is strictly increasing even when the model's own labels disagree
    with each other.
    """
    if not days:
        return []

    offset = match_offset(days, today)
    base = today - timedelta(days=offset)
    logger.debug("Aligning %d days: match offset %d, base date %s", len(days), offset, base)

    aligned: List[AlignedDay] = []
    for index, entry in enumerate(days):
        calendar_date = base + timedelta(days=index)
        relabelled = entry.model_copy(
            update={"day": calendar_date.strftime("%a"), "date": format_date_label(calendar_date)}
        )
        aligned.append(AlignedDay(calendar_date=calendar_date, schedule=relabelled))
    return aligned


def match_offset(days: Sequence[DaySchedule], today: date) -> int:
    """Index of the entry judged to be today; 0 when nothing matches."""
    explicit = [parse_explicit_date(entry, today) for entry in days]
    for index, resolved in enumerate(explicit):
        if resolved == today:
            return index

    today_weekday = sunday_based_weekday(today)
    for index, entry in enumerate(days):
        if resolve_weekday(entry.day) == today_weekday:
            return index
    return 0


def parse_explicit_date(entry: DaySchedule, today: date) -> Optional[date]:
    for text in (entry.date, entry.day):
        resolved = parse_date_label(text, today.year)
        if resolved:
            return resolved
    return None


def parse_date_label(text: str, default_year: int) -> Optional[date]:
    """Parse ``10/27``, ``10/27/2025`` or a phrase like ``Sunday, Oct 27``."""
    if not text:
        return None

    numeric = _NUMERIC_DATE.search(text)
    if numeric:
        month, day, year = numeric.groups()
        resolved_year = default_year
        if year:
            resolved_year = int(year) + 2000 if len(year) == 2 else int(year)
        try:
            return date(resolved_year, int(month), int(day))
        except ValueError:
            logger.debug("Ignoring impossible date label %r", text)
            return None

    # Bare weekday names ("Monday") and positional labels ("Day 1") are not dates.
    if not any(char.isdigit() for char in text) or text.strip().lower().startswith("day"):
        return None

    phrase = text if _YEAR.search(text) else f"{text} {default_year}"
    try:
        return dateutil_parser.parse(phrase, default=datetime(default_year, 1, 1)).date()
    except (ValueError, OverflowError):
        logger.debug("Could not parse date label %r", text)
        return None


def resolve_weekday(label: str) -> Optional[int]:
    if not label:
        return None
    return WEEKDAY_INDEX.get(label.strip()[:3].lower())


def sunday_based_weekday(value: date) -> int:
    return (value.weekday() + 1) % 7


def format_date_label(value: date) -> str:
    return f"{value:%b} {value.day}"
