"""Tests for study-topic selection, tip parsing, and tip correlation."""
from __future__ import annotations

import pytest

from studyplanner.api.schemas.schedule import DaySchedule, ScheduleBlock, StudyTip
from studyplanner.services.schedule_errors import TipParseFailure
from studyplanner.services.tip_correlator import (
    KeywordStudyClassifier,
    StudyClassifier,
    correlate_tips,
    parse_tips,
    select_study_topics,
)


def _task(label: str) -> ScheduleBlock:
    return ScheduleBlock(task=label, label=label)


def _tip(related_to: str, title: str = "Focus") -> StudyTip:
    return StudyTip(relatedTo=related_to, title=title, content="Work in 25 minute sprints.")


def test_selection_dedupes_in_first_seen_order() -> None:
    labels = ["Math HW", "Essay draft", "Math HW", "Review notes", "Essay draft", "Math HW", "Review notes", "Math HW"]
    days = [
        DaySchedule(day="Mon", schedule=[_task(label) for label in labels[:4]]),
        DaySchedule(day="Tue", schedule=[_task(label) for label in labels[4:]]),
    ]

    topics = select_study_topics(days, KeywordStudyClassifier())

    assert topics == ["Math HW", "Essay draft", "Review notes"]


def test_selection_is_capped() -> None:
    days = [DaySchedule(day="Mon", schedule=[_task(f"Study chapter {n}") for n in range(1, 8)])]

    topics = select_study_topics(days, KeywordStudyClassifier(), limit=5)

    assert topics == [f"Study chapter {n}" for n in range(1, 6)]


def test_selection_ignores_non_study_and_non_task_blocks() -> None:
    days = [
        DaySchedule(
            day="Mon",
            schedule=[
                _task("Laundry"),
                ScheduleBlock(event="Soccer practice", label="Soccer practice"),
                ScheduleBlock(break_="Reading break", label="Reading break"),
                _task("Practice piano"),
            ],
        )
    ]

    assert select_study_topics(days, KeywordStudyClassifier()) == ["Practice piano"]


def test_keyword_match_is_case_insensitive() -> None:
    classifier = KeywordStudyClassifier()

    assert classifier.is_study_block(_task("PREPARE slides"))
    assert classifier.is_study_block(_task("chem hw"))
    assert not classifier.is_study_block(_task("Groceries"))


def test_keyword_set_can_be_extended() -> None:
    classifier = KeywordStudyClassifier(["flashcards"])

    assert classifier.is_study_block(_task("Spanish flashcards"))
    assert not classifier.is_study_block(_task("Math homework"))


def test_custom_classifier_is_honoured() -> None:
    class EverythingCounts(StudyClassifier):
        def is_study_block(self, block: ScheduleBlock) -> bool:
            return True

    days = [DaySchedule(day="Mon", schedule=[ScheduleBlock(event="Church", label="Church"), _task("Nap")])]

    assert select_study_topics(days, EverythingCounts()) == ["Church", "Nap"]


def test_correlation_is_case_insensitive_but_exact() -> None:
    days = [
        DaySchedule(day="Mon", schedule=[_task("Math HW"), _task("math hw"), _task("math hw "), _task("Math HW 2")]),
    ]
    tip = _tip("Math HW")

    blocks = correlate_tips(days, [tip])[0].schedule

    assert [len(block.tips) for block in blocks] == [1, 1, 0, 0]
    assert blocks[0].tips[0] == tip


def test_tip_can_attach_to_many_blocks_and_block_to_many_tips() -> None:
    days = [
        DaySchedule(day="Mon", schedule=[_task("Essay draft")]),
        DaySchedule(day="Tue", schedule=[_task("Essay draft"), _task("Laundry")]),
    ]
    tips = [_tip("Essay draft", "Outline first"), _tip("essay draft", "Write ugly"), _tip("Unrelated")]

    correlated = correlate_tips(days, tips)

    assert [tip.title for tip in correlated[0].schedule[0].tips] == ["Outline first", "Write ugly"]
    assert len(correlated[1].schedule[0].tips) == 2
    assert correlated[1].schedule[1].tips == []


def test_correlation_without_tips_returns_days_unchanged() -> None:
    days = [DaySchedule(day="Mon", schedule=[_task("Math HW")])]

    assert correlate_tips(days, []) == days


def test_parse_tips_reads_array_from_prose() -> None:
    raw = 'Here you go:\n[{"relatedTo": "Math HW", "title": "Chunk it", "content": "Do five problems."}]'

    tips = parse_tips(raw)

    assert tips == [StudyTip(relatedTo="Math HW", title="Chunk it", content="Do five problems.")]


def test_parse_tips_skips_malformed_entries() -> None:
    raw = '[{"relatedTo": "Math HW", "title": "Chunk it", "content": "Do five problems."}, {"title": "orphan"}, 7]'

    assert [tip.related_to for tip in parse_tips(raw)] == ["Math HW"]


def test_parse_tips_empty_array_is_empty() -> None:
    assert parse_tips("[]") == []


@pytest.mark.parametrize("raw", ["Sorry, no tips today.", "[{broken", '[{"title": "no topic"}]'])
def test_parse_tips_failure(raw: str) -> None:
    with pytest.raises(TipParseFailure):
        parse_tips(raw)


@pytest.mark.parametrize("limit", [0, -1])
def test_non_positive_limit_selects_nothing(limit: int) -> None:
    days = [DaySchedule(day="Mon", schedule=[_task(f"Study chapter {n}") for n in range(1, 8)])]

    assert select_study_topics(days, KeywordStudyClassifier(), limit=limit) == []


def test_block_with_several_variants_reports_task_kind() -> None:
    block = ScheduleBlock(task="Math HW", event="Class", label="Math HW")

    assert block.kind == "task"
    assert ScheduleBlock(event="Class", break_="Lunch", label="Class").kind == "event"
