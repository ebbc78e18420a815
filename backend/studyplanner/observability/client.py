"""Opik client bootstrap."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from opik import Opik

from studyplanner.core.config import settings

logger = logging.getLogger(__name__)

_lock = Lock()
_state: dict = {"client": None, "resolved": False}


def init_opik() -> Optional[Opik]:
    """Create the shared Opik client on first use; return None when tracing is off."""
    with _lock:
        if _state["resolved"]:
            return _state["client"]
        _state["resolved"] = True

        if not settings.opik_enabled:
            logger.debug("Opik tracing disabled by configuration.")
            return None
        if not settings.opik_api_key:
            logger.warning("OPIK_ENABLED is set without OPIK_API_KEY; schedule traces will not be exported.")
            return None

        try:
            _state["client"] = Opik(project_name=settings.opik_project, api_key=settings.opik_api_key)
        except Exception as exc:  # pragma: no cover - depends on remote service
            logger.warning("Opik initialization failed, tracing disabled: %s", exc)
            return None

    logger.info("Opik tracing enabled for project %s.", settings.opik_project)
    return _state["client"]


def get_opik_client() -> Optional[Opik]:
    """Return the shared Opik client, initializing it lazily."""
    client = _state["client"]
    if client is not None:
        return client
    return init_opik()


def reset_opik_client() -> None:
    """Forget the cached client so the next call re-reads settings."""
    with _lock:
        _state["client"] = None
        _state["resolved"] = False
