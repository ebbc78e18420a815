"""Regression tests for application route registration."""
from fastapi.routing import APIRoute

from studyplanner.main import app


def test_schedule_route_registered_once() -> None:
    """Ensure the schedule endpoint is mounted exactly once and only for POST."""
    schedule_routes = [
        route for route in app.routes if isinstance(route, APIRoute) and route.path == "/api/schedule"
    ]
    assert len(schedule_routes) == 1
    assert schedule_routes[0].methods == {"POST"}
