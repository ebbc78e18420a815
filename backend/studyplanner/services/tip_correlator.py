"""Study-tip topic selection and tip-to-block correlation."""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, List, Sequence

from pydantic import ValidationError

from studyplanner.api.schemas.schedule import DaySchedule, ScheduleBlock, StudyTip
from studyplanner.core.config import settings
from studyplanner.services.response_extractor import parse_payload
from studyplanner.services.schedule_errors import ScheduleError, TipParseFailure

logger = logging.getLogger(__name__)

STUDY_KEYWORDS = (
    "study",
    "homework",
    "hw",
    "review",
    "practice",
    "essay",
    "reading",
    "assignment",
    "prepare",
    "research",
)
DEFAULT_MAX_TOPICS = 5


class StudyClassifier:
    """Decides which schedule blocks are eligible for a study tip."""

    def is_study_block(self, block: ScheduleBlock) -> bool:
        raise NotImplementedError


class KeywordStudyClassifier(StudyClassifier):
    """Matches task labels against a keyword set, case-insensitively.

    Only task blocks qualify; an event such as "Soccer practice" never does.
    """

    def __init__(self, keywords: Iterable[str] = STUDY_KEYWORDS) -> None:
        self.keywords = tuple(dict.fromkeys(k.strip().lower() for k in keywords if k.strip()))
        pattern = "|".join(re.escape(keyword) for keyword in self.keywords)
        self._pattern = re.compile(f"({pattern})", re.IGNORECASE) if pattern else None

    def is_study_block(self, block: ScheduleBlock) -> bool:
        if self._pattern is None or block.kind != "task":
            return False
        return bool(self._pattern.search(block.label))


@lru_cache
def get_study_classifier() -> StudyClassifier:
    return KeywordStudyClassifier([*STUDY_KEYWORDS, *settings.extra_study_keywords])


def select_study_topics(
    days: Sequence[DaySchedule],
    classifier: StudyClassifier,
    limit: int = DEFAULT_MAX_TOPICS,
) -> List[str]:
    """Distinct study-relevant labels in first-seen order, at most ``limit``."""
    if limit <= 0:
        return []
    topics: List[str] = []
    for day in days:
        for block in day.schedule:
            if block.label in topics or not classifier.is_study_block(block):
                continue
            topics.append(block.label)
            if len(topics) >= limit:
                return topics
    return topics


def parse_tips(raw: str) -> List[StudyTip]:
    """Decode the tip model's reply; raise TipParseFailure when nothing usable is present.

    Individual malformed entries are skipped.
    """
    try:
        entries = parse_payload(raw, "array")
    except ScheduleError as exc:
        raise TipParseFailure(exc.details or exc.message) from exc

    tips: List[StudyTip] = []
    for entry in entries:
        try:
            tips.append(StudyTip.model_validate(entry))
        except ValidationError:
            logger.debug("Skipping malformed study tip: %r", entry)
    if entries and not tips:
        raise TipParseFailure("No valid study tips in response.")
    return tips


def correlate_tips(days: Sequence[DaySchedule], tips: Sequence[StudyTip]) -> List[DaySchedule]:
    """Attach each tip to every block whose label equals its relatedTo, ignoring case.

    Labels are compared exactly after lowercasing; surrounding whitespace is
    significant.
    """
    if not tips:
        return list(days)

    correlated: List[DaySchedule] = []
    for day in days:
        blocks = [_with_tips(block, tips) for block in day.schedule]
        correlated.append(day.model_copy(update={"schedule": blocks}))
    return correlated


def _with_tips(block: ScheduleBlock, tips: Sequence[StudyTip]) -> ScheduleBlock:
    key = block.label.lower()
    matches = [tip for tip in tips if tip.related_to.lower() == key]
    if not matches:
        return block
    return block.model_copy(update={"tips": [*block.tips, *matches]})
