"""Schedule generation endpoint."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Request

from studyplanner.api.schemas.schedule import ErrorResponse, ScheduleRequest, ScheduleResponse
from studyplanner.services.llm_client import ScheduleModelClient, get_llm_client
from studyplanner.services.schedule_pipeline import generate_schedule
from studyplanner.services.tip_correlator import StudyClassifier, get_study_classifier

router = APIRouter()


def get_today() -> date:
    """Reference date for alignment; read once per request."""
    return date.today()


@router.post(
    "/api/schedule",
    response_model=ScheduleResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["schedule"],
)
def create_schedule(
    payload: ScheduleRequest,
    request: Request,
    today: date = Depends(get_today),
    llm: ScheduleModelClient = Depends(get_llm_client),
    classifier: StudyClassifier = Depends(get_study_classifier),
) -> ScheduleResponse:
    """Generate a dated multi-day schedule with study tips for the given tasks and events."""
    request_id = getattr(request.state, "request_id", None)
    return generate_schedule(
        payload.tasks,
        payload.events,
        today,
        llm=llm,
        classifier=classifier,
        request_id=request_id,
    )
