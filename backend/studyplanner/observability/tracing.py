"""Tracing helpers for the schedule pipeline."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from studyplanner.core.context import get_request_id
from studyplanner.observability.client import get_opik_client

logger = logging.getLogger(__name__)


@contextmanager
def trace(
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> Iterator[Optional[Any]]:
    """
    Open an Opik trace for the duration of the block.

    Yields the trace object, or None when tracing is disabled. Exceptions raised
    inside the block are recorded on the trace and re-raised unchanged.
    """
    client = get_opik_client()
    span = None

    if client:
        payload = {key: value for key, value in (metadata or {}).items() if value is not None}
        current_request = request_id or get_request_id()
        if current_request:
            payload.setdefault("request_id", current_request)
        try:
            span = client.trace(name=name, metadata=payload)
        except Exception as exc:  # pragma: no cover - remote SDK failure
            logger.debug("Could not open trace %s: %s", name, exc)

    try:
        yield span
    except Exception as exc:
        if span:
            try:
                span.update(error_info={"exception_type": type(exc).__name__, "message": str(exc)})
            except Exception:  # pragma: no cover
                logger.debug("Could not record error on trace %s", name, exc_info=True)
        raise
    finally:
        if span:
            try:
                span.end()
            except Exception:  # pragma: no cover
                logger.debug("Could not close trace %s", name, exc_info=True)


def annotate(span: Optional[Any], **metadata: Any) -> None:
    """Attach metadata to an open trace; no-op when tracing is disabled."""
    if not span:
        return
    try:
        span.update(metadata=metadata)
    except Exception:  # pragma: no cover - best-effort
        logger.debug("Could not annotate trace", exc_info=True)
