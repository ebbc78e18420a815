"""Tests ensuring observability wiring is safe by default."""
from __future__ import annotations

import importlib

from studyplanner.core.config import settings
from studyplanner.observability import client as client_module


def test_app_import_succeeds_when_opik_is_disabled(monkeypatch) -> None:
    monkeypatch.setenv("OPIK_ENABLED", "false")
    monkeypatch.delenv("OPIK_API_KEY", raising=False)

    import studyplanner.main as main_module

    client_module.reset_opik_client()
    reloaded_app = importlib.reload(main_module)

    assert hasattr(reloaded_app, "app")
    assert client_module.get_opik_client() is None


def test_opik_requires_api_key(monkeypatch) -> None:
    monkeypatch.setattr(settings, "opik_enabled", True)
    monkeypatch.setattr(settings, "opik_api_key", None)
    client_module.reset_opik_client()

    assert client_module.init_opik() is None

    client_module.reset_opik_client()


def test_opik_client_created_once(monkeypatch) -> None:
    created = []

    class _DummyOpik:
        def __init__(self, **kwargs):
            created.append(kwargs)

    monkeypatch.setattr(settings, "opik_enabled", True)
    monkeypatch.setattr(settings, "opik_api_key", "opik-key")
    monkeypatch.setattr(client_module, "Opik", _DummyOpik)
    client_module.reset_opik_client()

    first = client_module.get_opik_client()
    second = client_module.get_opik_client()

    assert first is second
    assert created == [{"project_name": settings.opik_project, "api_key": "opik-key"}]

    client_module.reset_opik_client()
