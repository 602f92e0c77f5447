"""
Cliente de la API REST de RealPage.

Requisitos cubiertos:
- httpx asincrono
- autenticacion por header x-ws-authkey
- sin reintentos ni backoff: cualquier status no exitoso aborta la corrida
"""
from typing import Any, Dict, List

import httpx
from loguru import logger

from rentsync.infrastructure.external.realpage.http import get_or_raise
from rentsync.shared.exceptions.scrape import TransformError

AUTH_HEADER = "x-ws-authkey"
DEFAULT_SITE_ID = 8448226
# Terminos de contrato de 1 a 18 meses
LEASE_TERMS = ",".join(str(month) for month in range(1, 19))


def _extract_entities(response: httpx.Response, entity: str) -> List[Dict[str, Any]]:
    """
    Extrae la lista `response.<entity>` del sobre que devuelve RealPage:
    {"response": {"floorplans": [...]}}.
    """
    try:
        payload = response.json()
    except ValueError as e:
        raise TransformError(f"La respuesta de {entity} no es JSON valido", entity=entity) from e

    body = payload.get("response") if isinstance(payload, dict) else None
    if not isinstance(body, dict) or entity not in body:
        raise TransformError(f"La respuesta no contiene 'response.{entity}'", entity=entity)

    entities = body[entity]
    if not isinstance(entities, list):
        raise TransformError(f"'response.{entity}' no es una lista", entity=entity)
    return entities


class RealPageClient:
    """
    Cliente HTTP de RealPage. Cada metodo hace exactamente un GET.

    Importante:
    - No hace cast de tipos: eso lo decide el field mapper.
    - El token se pasa por llamada, nunca se cachea entre corridas.
    """

    def __init__(
        self,
        api_base_url: str,
        *,
        client: httpx.AsyncClient,
        site_id: int = DEFAULT_SITE_ID,
    ) -> None:
        self._base_url = api_base_url.rstrip("/")
        self._site_id = site_id
        self._client = client

    @property
    def floorplans_url(self) -> str:
        return f"{self._base_url}/floorplans"

    @property
    def units_url(self) -> str:
        return f"{self._base_url}/units"

    def units_params(self) -> Dict[str, str]:
        """Query fija de units: todas las unidades, mejor precio, terminos 1-18."""
        return {
            "available": "false",
            "honordisplayorder": "true",
            "siteid": str(self._site_id),
            "bestprice": "true",
            "leaseterm": LEASE_TERMS,
        }

    async def fetch_floorplans(self, api_key: str) -> List[Dict[str, Any]]:
        response = await get_or_raise(
            self._client, self.floorplans_url, headers={AUTH_HEADER: api_key}
        )
        floorplans = _extract_entities(response, "floorplans")
        logger.debug(f"RealPage devolvio {len(floorplans)} floorplan(s)")
        return floorplans

    async def fetch_units(self, api_key: str) -> List[Dict[str, Any]]:
        response = await get_or_raise(
            self._client,
            self.units_url,
            params=self.units_params(),
            headers={AUTH_HEADER: api_key},
        )
        units = _extract_entities(response, "units")
        logger.debug(f"RealPage devolvio {len(units)} unit(s)")
        return units
