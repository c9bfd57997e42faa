"""Shared test fixtures."""

import pytest
from fastapi import FastAPI

from vestri.api.routes import admin, health, showtimes
from vestri.config import settings


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    """Retries happen immediately in tests."""
    monkeypatch.setattr(settings, "retry_base_delay", 0.0)


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the scheduler lifespan or admin UI, for API tests."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(showtimes.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")
    return app
