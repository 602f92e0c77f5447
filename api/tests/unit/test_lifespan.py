"""
Tests del ciclo de vida de la aplicacion (lifespan de FastAPI).

Verifica:
- El scheduler diario arranca al iniciar y se detiene al cerrar.
- Con SCHEDULER_ENABLED=false no se registra ningun job.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from rentsync.core import events
from rentsync.core.config import settings


@pytest.fixture
def patched_resources(monkeypatch):
    """Reemplaza bootstrap y close_db para no tocar la base ni el archivo de log."""
    bootstrap = AsyncMock()
    close_db = AsyncMock()
    monkeypatch.setattr(events, "bootstrap", bootstrap)
    monkeypatch.setattr(events, "close_db", close_db)
    return bootstrap, close_db


@pytest.mark.asyncio
async def test_lifespan_starts_and_stops_scheduler(monkeypatch, patched_resources) -> None:
    from main import create_application
    bootstrap, close_db = patched_resources
    scheduler = MagicMock()
    create_scheduler = MagicMock(return_value=scheduler)
    monkeypatch.setattr(events, "create_scheduler", create_scheduler)
    monkeypatch.setattr(settings, "SCHEDULER_ENABLED", True)
    app = create_application()

    async with events.lifespan(app):
        bootstrap.assert_awaited_once()
        scheduler.start.assert_called_once()
        assert app.state.scheduler is scheduler
        close_db.assert_not_awaited()

    create_scheduler.assert_called_once_with(settings)
    scheduler.shutdown.assert_called_once_with(wait=False)
    close_db.assert_awaited_once()


@pytest.mark.asyncio
async def test_lifespan_without_scheduler(monkeypatch, patched_resources) -> None:
    from main import create_application
    bootstrap, close_db = patched_resources
    create_scheduler = MagicMock()
    monkeypatch.setattr(events, "create_scheduler", create_scheduler)
    monkeypatch.setattr(settings, "SCHEDULER_ENABLED", False)
    app = create_application()

    async with events.lifespan(app):
        assert app.state.scheduler is None

    create_scheduler.assert_not_called()
    close_db.assert_awaited_once()


@pytest.mark.asyncio
async def test_failed_bootstrap_propagates(monkeypatch, patched_resources) -> None:
    from main import create_application
    bootstrap, close_db = patched_resources
    bootstrap.side_effect = RuntimeError("db down")
    app = create_application()

    with pytest.raises(RuntimeError, match="db down"):
        async with events.lifespan(app):
            pass

    close_db.assert_not_awaited()
