import inspect

from fastapi.routing import APIRoute
from tenant_api.main import app


def test_database_handlers_run_in_threadpool():
    """Handlers doing blocking DB, hashing and disk work are plain functions"""
    api_routes = [
        route
        for route in app.routes
        if isinstance(route, APIRoute) and route.path.startswith("/api/") and route.path != "/api/health"
    ]

    assert api_routes
    assert [r.path for r in api_routes if inspect.iscoroutinefunction(r.endpoint)] == []
