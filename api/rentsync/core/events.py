"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from loguru import logger

from rentsync.core.config import settings
from rentsync.infrastructure.database.session import init_db, close_db
from rentsync.infrastructure.scheduler.daily_scrape import create_scheduler

_bootstrapped = False


async def bootstrap() -> None:
    """
    Inicializacion unica del proceso, previa a la primera corrida.

    La usan el startup de FastAPI y el CLI. Llamadas posteriores no hacen nada.
    """
    global _bootstrapped
    if _bootstrapped:
        return

    logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Entorno: {settings.ENVIRONMENT}")

    # Configurar logging a archivo
    logger.add(
        settings.LOG_FILE,
        rotation="500 MB",
        retention="10 days",
        level=settings.LOG_LEVEL
    )

    # Validar configuracion critica
    _validate_config()

    # Inicializar base de datos (crea la tabla documents si no existe)
    await init_db()
    logger.info("Base de datos inicializada")

    _bootstrapped = True


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []
    
    if not settings.HOME_PAGE:
        warnings.append("HOME_PAGE no configurada - el scraping fallara")
    if not settings.REALPAGE_API:
        warnings.append("REALPAGE_API no configurada - el scraping fallara")
    
    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Ciclo de vida de la aplicacion.

    Al iniciar: bootstrap y arranque del job diario (app.state.scheduler).
    Al cerrar: detiene el scheduler y libera las conexiones.

    Args:
        app: Instancia de FastAPI
    """
    try:
        await bootstrap()

        app.state.scheduler = None
        if settings.SCHEDULER_ENABLED:
            scheduler = create_scheduler(settings)
            scheduler.start()
            app.state.scheduler = scheduler
            logger.info("Scheduler iniciado")
        else:
            logger.warning("SCHEDULER_ENABLED=false - el scraping diario esta deshabilitado")

        logger.success("Aplicacion iniciada correctamente")
    except Exception as e:
        logger.error(f"Error durante startup: {e}")
        logger.exception("Detalle del error:")
        raise

    try:
        yield
    finally:
        logger.info("Cerrando aplicacion...")

        scheduler = getattr(app.state, "scheduler", None)
        if scheduler is not None:
            scheduler.shutdown(wait=False)
            logger.info("Scheduler detenido")

        await close_db()
        logger.info("Conexiones de base de datos cerradas")

        logger.success("Aplicacion cerrada correctamente")
