"""Request context middleware."""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from studyplanner.core.context import request_id_ctx_var, request_path_ctx_var

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind the request id and path to the logging context and echo X-Request-Id."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        request_id = request.headers.get("X-Request-Id") or uuid4().hex
        request.state.request_id = request_id
        id_token = request_id_ctx_var.set(request_id)
        path_token = request_path_ctx_var.set(request.url.path)
        start = perf_counter()

        try:
            response = await call_next(request)
            logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (perf_counter() - start) * 1000,
            )
        finally:
            request_path_ctx_var.reset(path_token)
            request_id_ctx_var.reset(id_token)

        response.headers["X-Request-Id"] = request_id
        return response
