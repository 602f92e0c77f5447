"""
Caso de uso: scraping completo RealPage -> document store.

Secuencia de una corrida:
1. Obtener el apiKey una sola vez (si falla, no se hace nada mas)
2. En paralelo (corrutinas concurrentes, sin threads):
   a. units -> rents
   b. units -> units
   c. floorplans -> floorplans
3. Esperar las tres ramas. Si alguna fallo, la corrida falla completa.

Las unidades se consultan dos veces, una por rama: cada rama trabaja sobre
sus propios datos y su propia coleccion.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
from loguru import logger

from rentsync.application.services.document_writer import write_records
from rentsync.application.services.field_mapper import (
    map_floorplan,
    map_records,
    map_rent,
    map_unit,
)
from rentsync.core.config import Settings, settings
from rentsync.domain.entities.records import FloorplanRecord, RentRecord, UnitRecord
from rentsync.domain.repositories.document_store import IDocumentStore
from rentsync.infrastructure.external.realpage.key_fetcher import ApiKeyFetcher
from rentsync.infrastructure.external.realpage.realpage_client import RealPageClient
from rentsync.shared.exceptions.scrape import ConfigurationError

RENTS_COLLECTION = "rents"
UNITS_COLLECTION = "units"
FLOORPLANS_COLLECTION = "floorplans"


@dataclass(frozen=True)
class ScrapeResult:
    """Documentos escritos por coleccion en una corrida."""

    rents: int
    units: int
    floorplans: int


class ScrapeUseCases:
    """
    Orquestador de una corrida de scraping.

    No mantiene estado entre corridas: el apiKey y los datos se obtienen
    de nuevo cada vez.
    """

    def __init__(
        self,
        key_fetcher: ApiKeyFetcher,
        api_client: RealPageClient,
        store: IDocumentStore,
    ) -> None:
        self._key_fetcher = key_fetcher
        self._api = api_client
        self._store = store

    async def run(self) -> ScrapeResult:
        """
        Ejecuta la corrida completa.

        Returns:
            ScrapeResult: Conteo de documentos escritos

        Raises:
            ScrapeError: El primer error observado, sin modificar
        """
        logger.info("Iniciando scraping RealPage")
        api_key = await self._key_fetcher.fetch()

        branches = [
            (RENTS_COLLECTION, self._sync_rents(api_key)),
            (UNITS_COLLECTION, self._sync_units(api_key)),
            (FLOORPLANS_COLLECTION, self._sync_floorplans(api_key)),
        ]
        # Sin cancelacion: se espera a todas las ramas antes de reportar
        outcomes = await asyncio.gather(
            *(branch for _, branch in branches), return_exceptions=True
        )

        failures = [
            (name, outcome)
            for (name, _), outcome in zip(branches, outcomes)
            if isinstance(outcome, BaseException)
        ]
        if failures:
            for name, error in failures:
                logger.error(f"Rama '{name}' fallo: {error}")
            raise failures[0][1]

        counts: Dict[str, int] = {name: outcome for (name, _), outcome in zip(branches, outcomes)}
        result = ScrapeResult(**counts)
        logger.info(
            f"Scraping completado: rents={result.rents}, units={result.units}, "
            f"floorplans={result.floorplans}"
        )
        return result

    async def _sync_rents(self, api_key: str) -> int:
        raw_units = await self._api.fetch_units(api_key)
        records = map_records(raw_units, map_rent, entity="rent")
        return await write_records(self._store, records, RENTS_COLLECTION, RentRecord.document_id)

    async def _sync_units(self, api_key: str) -> int:
        raw_units = await self._api.fetch_units(api_key)
        records = map_records(raw_units, map_unit, entity="unit")
        return await write_records(self._store, records, UNITS_COLLECTION, UnitRecord.document_id)

    async def _sync_floorplans(self, api_key: str) -> int:
        raw_floorplans = await self._api.fetch_floorplans(api_key)
        records = map_records(raw_floorplans, map_floorplan, entity="floorplan")
        return await write_records(
            self._store, records, FLOORPLANS_COLLECTION, FloorplanRecord.document_id
        )


ScrapeRunner = Callable[[], Awaitable[ScrapeResult]]


def _require_setting(config: Settings, name: str) -> str:
    value = getattr(config, name)
    if not value:
        raise ConfigurationError(name)
    return value


async def run_scrape(
    store: Optional[IDocumentStore] = None,
    *,
    config: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ScrapeResult:
    """
    Punto de entrada compartido por el scheduler, el endpoint y el CLI.

    Arma los componentes desde la configuracion y usa un unico cliente httpx
    para toda la corrida (sigue redirecciones de HOME_PAGE, p.ej. http ->
    https) que se cierra al terminar.

    Args:
        store: Almacen de documentos. Por defecto SqlDocumentStore.
        config: Settings a usar. Por defecto los globales.
        transport: Transporte httpx alternativo (tests)
    """
    config = config or settings
    home_page = _require_setting(config, "HOME_PAGE")
    api_base = _require_setting(config, "REALPAGE_API")

    if store is None:
        from rentsync.infrastructure.repositories.document_repository import SqlDocumentStore

        store = SqlDocumentStore()

    client_kwargs: Dict[str, Any] = {}
    if transport is not None:
        client_kwargs["transport"] = transport

    async with httpx.AsyncClient(follow_redirects=True, **client_kwargs) as client:
        use_cases = ScrapeUseCases(
            key_fetcher=ApiKeyFetcher(home_page, client=client),
            api_client=RealPageClient(api_base, client=client, site_id=config.REALPAGE_SITE_ID),
            store=store,
        )
        return await use_cases.run()
