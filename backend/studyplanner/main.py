"""Main FastAPI application for the Synapse schedule backend."""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from studyplanner.api.routes.schedule import router as schedule_router
from studyplanner.core.config import settings
from studyplanner.core.logging import configure_logging
from studyplanner.core.middleware import RequestContextMiddleware
from studyplanner.observability.client import init_opik
from studyplanner.observability.tracing import trace
from studyplanner.services.schedule_errors import ScheduleError

configure_logging(log_level=settings.log_level, debug=settings.debug)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestContextMiddleware)
app.include_router(schedule_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.exception_handler(ScheduleError)
async def schedule_error_handler(request: Request, exc: ScheduleError) -> JSONResponse:
    """Render pipeline failures as {error, details}."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log("%s on %s: %s", type(exc).__name__, request.url.path, exc.details or exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
