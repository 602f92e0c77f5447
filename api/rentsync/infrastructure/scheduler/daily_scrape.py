"""
Trigger programado: una corrida de scraping por dia.

El job no tiene canal de resultado: los fallos solo quedan en los logs y
no se reintenta hasta la proxima ejecucion.
"""
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from rentsync.application.use_cases.scrape_use_cases import ScrapeRunner, run_scrape
from rentsync.core.config import Settings, settings

DAILY_SCRAPE_JOB_ID = "daily_scrape"


async def scheduled_scrape(runner: ScrapeRunner = run_scrape) -> None:
    """Ejecuta una corrida y registra el resultado."""
    try:
        result = await runner()
    except Exception:
        logger.exception("Fallo el scraping programado")
        return
    logger.info(f"Scraping programado OK: {result}")


def create_scheduler(
    config: Optional[Settings] = None,
    runner: ScrapeRunner = run_scrape,
) -> AsyncIOScheduler:
    """
    Crea el scheduler con el job diario registrado (sin iniciarlo).

    Args:
        config: Settings con SCRAPE_CRON_HOUR/MINUTE y SCRAPE_TIMEZONE
        runner: Corrutina que ejecuta una corrida

    Returns:
        AsyncIOScheduler: Scheduler listo para start()
    """
    config = config or settings
    scheduler = AsyncIOScheduler(timezone=config.SCRAPE_TIMEZONE)
    scheduler.add_job(
        scheduled_scrape,
        trigger=CronTrigger(
            hour=config.SCRAPE_CRON_HOUR,
            minute=config.SCRAPE_CRON_MINUTE,
            timezone=config.SCRAPE_TIMEZONE,
        ),
        id=DAILY_SCRAPE_JOB_ID,
        kwargs={"runner": runner},
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    logger.info(
        f"Job '{DAILY_SCRAPE_JOB_ID}' programado a las "
        f"{config.SCRAPE_CRON_HOUR:02d}:{config.SCRAPE_CRON_MINUTE:02d} ({config.SCRAPE_TIMEZONE})"
    )
    return scheduler
