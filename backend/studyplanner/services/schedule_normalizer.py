"""Coerce a decoded model payload into the canonical list of day schedules.

Two shapes are accepted:

* canonical: ``{"days": [{"day": ..., "date": ..., "schedule": [...]}, ...]}``
* flat mapping: ``{"Monday": [...], "Tuesday": [...]}``, one day per key with an
  empty date label.

Anything else is rejected with ParseFailure rather than guessed at. Any ``tips``
the model puts on a block are discarded; tips are attached only by correlation.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from studyplanner.api.schemas.schedule import DaySchedule, ScheduleBlock
from studyplanner.services.schedule_errors import ParseFailure

FALLBACK_LABEL = "Untitled"
LABEL_SOURCES = ("task", "event", "break")


def normalize_schedule(payload: Any) -> List[DaySchedule]:
    if not isinstance(payload, Mapping):
        raise ParseFailure(details=f"Schedule payload must be an object, got {type(payload).__name__}.")

    if "days" in payload:
        raw_days = payload["days"]
        if not isinstance(raw_days, list):
            raise ParseFailure(details="'days' must be a list.")
        return [_normalize_day(entry, index) for index, entry in enumerate(raw_days)]

    if all(isinstance(value, list) for value in payload.values()):
        return [
            _normalize_day({"day": str(label), "date": "", "schedule": blocks}, index)
            for index, (label, blocks) in enumerate(payload.items())
        ]

    raise ParseFailure(details="Schedule payload has neither a 'days' list nor a day-to-blocks mapping.")


def resolve_label(block: Mapping[str, Any]) -> str:
    """Explicit label, else the task/event/break text in that order, else 'Untitled'."""
    for key in ("label", *LABEL_SOURCES):
        value = block.get(key)
        if isinstance(value, str) and value:
            return value
    return FALLBACK_LABEL


def _normalize_day(entry: Any, index: int) -> DaySchedule:
    if not isinstance(entry, Mapping):
        raise ParseFailure(details=f"Day {index} is not an object.")
    raw_blocks = entry.get("schedule")
    if raw_blocks is None:
        raw_blocks = []
    if not isinstance(raw_blocks, list):
        raise ParseFailure(details=f"Day {index} schedule must be a list.")

    blocks = [_normalize_block(block, index) for block in raw_blocks]
    return DaySchedule(
        day=_text(entry.get("day")),
        date=_text(entry.get("date")),
        schedule=blocks,
    )


def _normalize_block(block: Any, day_index: int) -> ScheduleBlock:
    if not isinstance(block, Mapping):
        raise ParseFailure(details=f"Day {day_index} has a schedule entry that is not an object.")

    fields: Dict[str, Any] = {
        "timeStart": _optional_text(block.get("timeStart")),
        "timeEnd": _optional_text(block.get("timeEnd")),
        "task": _optional_text(block.get("task")),
        "event": _optional_text(block.get("event")),
        "break": _optional_text(block.get("break")),
        "priority": _optional_text(block.get("priority")),
        "label": resolve_label(block),
    }
    try:
        return ScheduleBlock.model_validate(fields)
    except ValidationError as exc:
        raise ParseFailure(details=f"Day {day_index} has an invalid schedule entry: {exc.errors()[0]['msg']}") from exc


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, (dict, list)):
        raise ParseFailure(details="Schedule entry fields must be scalar values.")
    return str(value)
