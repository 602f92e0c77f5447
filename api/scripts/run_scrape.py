"""
CLI: una corrida de scraping RealPage -> document store.

Uso recomendado:
  - Ejecucion manual o desde un cron externo cuando no corre la API.

Variables de entorno requeridas:
  - HOME_PAGE
  - REALPAGE_API
  - DATABASE_URL (o DATABASE_HOST/PORT/USER/PASSWORD/NAME)

Ejecución:
  python scripts/run_scrape.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

# Permite ejecutar este script desde cualquier cwd sin instalar el paquete.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)

from rentsync.application.use_cases.scrape_use_cases import run_scrape
from rentsync.core.events import bootstrap
from rentsync.infrastructure.database.session import close_db


async def _main() -> int:
    await bootstrap()
    try:
        result = await run_scrape()
    except Exception:
        logger.exception("Scraping fallido")
        return 1
    finally:
        await close_db()

    logger.info(
        f"Scraping OK: rents={result.rents}, units={result.units}, floorplans={result.floorplans}"
    )
    return 0


def main() -> int:
    return asyncio.run(_main())


if __name__ == "__main__":
    raise SystemExit(main())
