"""Pydantic schemas for the schedule API."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[Union[int, str]] = None
    text: str = Field(..., min_length=1, max_length=500)
    details: Optional[str] = Field(default=None, description="Free-text notes.")
    time: Optional[str] = Field(default=None, description="Duration estimate, e.g. '2 hours'.")
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    priority: Optional[TaskPriority] = None
    splittable: bool = Field(
        default=False,
        validation_alias=AliasChoices("splittable", "completed"),
        description="Whether the task may be split across sessions.",
    )
    done: bool = False

    @field_validator("due_date", "details", "time", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Any:
        if isinstance(value, str):
            cleaned = value.strip().lower()
            return cleaned or None
        return value


class ScheduleRequest(BaseModel):
    tasks: List[TaskPayload] = Field(default_factory=list)
    events: List[str] = Field(default_factory=list)


class StudyTip(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    related_to: str = Field(..., alias="relatedTo")
    title: str
    content: str


class ScheduleBlock(BaseModel):
    """A single activity in a day.

    At most one of task/event/break is expected; when the model sets several,
    `kind` reports the first of task, event, break.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    time_start: Optional[str] = Field(default=None, alias="timeStart")
    time_end: Optional[str] = Field(default=None, alias="timeEnd")
    task: Optional[str] = None
    event: Optional[str] = None
    break_: Optional[str] = Field(default=None, alias="break")
    priority: Optional[str] = None
    label: str = "Untitled"
    tips: List[StudyTip] = Field(default_factory=list)

    @property
    def kind(self) -> Optional[str]:
        if self.task:
            return "task"
        if self.event:
            return "event"
        if self.break_:
            return "break"
        return None


class DaySchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    date: str = ""
    schedule: List[ScheduleBlock] = Field(default_factory=list)


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    days: List[DaySchedule]
    study_tips: List[StudyTip] = Field(default_factory=list, alias="studyTips")


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
