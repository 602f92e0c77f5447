"""
Tests del trigger HTTP de scraping.

Verifica el contrato:
- 200 {"status": "success"} cuando la corrida termina.
- 500 {"status": "error", "error": <mensaje>} ante cualquier error.
- No requiere body y acepta GET o POST.
"""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from rentsync.api.v1.dependencies.use_case_deps import get_scrape_runner
from rentsync.application.use_cases.scrape_use_cases import ScrapeResult
from rentsync.shared.exceptions.scrape import ConfigurationError, HttpError, KeyNotFoundError


@pytest.fixture
def runner() -> AsyncMock:
    return AsyncMock(return_value=ScrapeResult(rents=3, units=3, floorplans=2))


@pytest.fixture
def app_with_mock(runner: AsyncMock):
    """Crea la app FastAPI con el runner mockeado via dependency_overrides."""
    from main import create_application
    app = create_application()
    app.dependency_overrides[get_scrape_runner] = lambda: runner
    yield app
    app.dependency_overrides.clear()


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST"])
async def test_scrape_success(app_with_mock, runner: AsyncMock, method: str) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.request(method, "/api/v1/scrape")

    assert response.status_code == 200
    assert response.json() == {"status": "success"}
    runner.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, message",
    [
        (KeyNotFoundError("https://www.example-apartments.com/"), "Could not find API key"),
        (
            HttpError("https://api.example-realpage.com/v1/floorplans", status_code=500),
            "Request to https://api.example-realpage.com/v1/floorplans failed with status code 500",
        ),
        (RuntimeError("unexpected"), "unexpected"),
    ],
)
async def test_scrape_failure_returns_error_payload(
    app_with_mock, runner: AsyncMock, error: Exception, message: str
) -> None:
    runner.side_effect = error

    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/v1/scrape")

    assert response.status_code == 500
    assert response.json() == {"status": "error", "error": message}


@pytest.mark.asyncio
async def test_app_exception_outside_endpoint_uses_global_handler() -> None:
    from main import create_application

    def broken_runner():
        raise ConfigurationError("HOME_PAGE")

    app = create_application()
    app.dependency_overrides[get_scrape_runner] = broken_runner

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/scrape")

    assert response.status_code == 500
    assert response.json() == {
        "error": "CONFIGURATION_ERROR",
        "message": "Falta configuracion obligatoria: HOME_PAGE",
        "details": {"setting": "HOME_PAGE"},
    }


@pytest.mark.asyncio
async def test_health_check() -> None:
    from main import create_application

    transport = ASGITransport(app=create_application())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
