"""End-to-end schedule generation: model call, reconciliation, study tips."""
from __future__ import annotations

import logging
from datetime import date
from time import perf_counter
from typing import List, Optional, Sequence

from studyplanner.api.schemas.schedule import ScheduleResponse, StudyTip, TaskPayload
from studyplanner.core.config import settings
from studyplanner.observability.metrics import log_metric
from studyplanner.observability.tracing import annotate, trace
from studyplanner.services.calendar_aligner import align_days, format_date_label
from studyplanner.services.horizon_window import apply_horizon, horizon_cutoff
from studyplanner.services.llm_client import ScheduleModelClient
from studyplanner.services.response_extractor import parse_payload
from studyplanner.services.schedule_errors import InvalidInput, ScheduleError, TipParseFailure, UpstreamError
from studyplanner.services.schedule_normalizer import normalize_schedule
from studyplanner.services.schedule_prompts import (
    SCHEDULE_SYSTEM_PROMPT,
    TIPS_SYSTEM_PROMPT,
    build_schedule_prompt,
    build_tips_prompt,
    load_extra_prompt,
)
from studyplanner.services.tip_correlator import (
    StudyClassifier,
    correlate_tips,
    parse_tips,
    select_study_topics,
)

logger = logging.getLogger(__name__)


def generate_schedule(
    tasks: Sequence[TaskPayload],
    events: Sequence[str],
    today: date,
    *,
    llm: ScheduleModelClient,
    classifier: StudyClassifier,
    request_id: Optional[str] = None,
) -> ScheduleResponse:
    """Ask the model for a plan and reconcile it into a dated, windowed schedule.

    Any failure before the tip phase aborts the request with a ScheduleError.
    Tip generation failures only cost the tips.
    """
    if not tasks and not events:
        raise InvalidInput()

    start = perf_counter()
    metadata = {"task_count": len(tasks), "event_count": len(events), "today": today.isoformat()}

    with trace("schedule.generate", metadata=metadata, request_id=request_id) as span:
        prompt = build_schedule_prompt(
            tasks,
            events,
            today_label=f"{today:%A}, {format_date_label(today)} {today.year}",
            extra_prompt=load_extra_prompt(settings.extra_prompt_path),
        )
        with trace("schedule.model_call", metadata={"model": settings.schedule_model}, request_id=request_id):
            raw = _call_model(llm, settings.schedule_model, SCHEDULE_SYSTEM_PROMPT, prompt)

        days = normalize_schedule(parse_payload(raw, "object"))
        aligned = align_days(days, today)
        cutoff = horizon_cutoff(tasks, today, settings.horizon_floor_days)
        windowed = [entry.schedule for entry in apply_horizon(aligned, cutoff, settings.max_schedule_days)]
        logger.info(
            "Model proposed %d days; kept %d through %s",
            len(days),
            len(windowed),
            cutoff.isoformat(),
        )

        topics = select_study_topics(windowed, classifier, settings.max_tip_topics)
        tips = fetch_study_tips(topics, llm, request_id=request_id) if topics else []
        result = ScheduleResponse(days=correlate_tips(windowed, tips), study_tips=tips)
        annotate(span, days_proposed=len(days), days_kept=len(windowed), topics=len(topics), tips=len(tips))

    log_metric("schedule.generate.success", 1)
    log_metric("schedule.generate.days_kept", len(result.days))
    log_metric("schedule.generate.latency_ms", (perf_counter() - start) * 1000)
    return result


def fetch_study_tips(
    topics: List[str],
    llm: ScheduleModelClient,
    request_id: Optional[str] = None,
) -> List[StudyTip]:
    """Second model round trip; returns [] instead of raising."""
    try:
        with trace("schedule.tips", metadata={"topics": topics}, request_id=request_id):
            raw = _call_model(llm, settings.tips_model, TIPS_SYSTEM_PROMPT, build_tips_prompt(topics))
            tips = parse_tips(raw)
    except (UpstreamError, TipParseFailure) as exc:
        logger.warning("Could not parse AI-generated tips, continuing without them: %s", exc)
        log_metric("schedule.tips.failure", 1, metadata={"reason": type(exc).__name__})
        return []

    log_metric("schedule.tips.count", len(tips))
    return tips


def _call_model(llm: ScheduleModelClient, model: str, system_prompt: str, user_prompt: str) -> str:
    """Invoke the model client, reporting any non-ScheduleError failure as UpstreamError."""
    try:
        return llm.complete(model=model, system_prompt=system_prompt, user_prompt=user_prompt)
    except ScheduleError:
        raise
    except Exception as exc:
        logger.exception("Model client %s failed unexpectedly", type(llm).__name__)
        raise UpstreamError(details=f"{type(exc).__name__}: {exc}") from exc
