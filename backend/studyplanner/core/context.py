"""Per-request context utilities."""
from __future__ import annotations

from contextvars import ContextVar

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)
request_path_ctx_var: ContextVar[str | None] = ContextVar("request_path", default=None)


def get_request_id() -> str | None:
    """Return the current request id if available."""
    return request_id_ctx_var.get()


def get_request_path() -> str | None:
    """Return the path of the request being served, if any."""
    return request_path_ctx_var.get()
