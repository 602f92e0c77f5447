"""
Extraccion del apiKey de RealPage desde la pagina publica del edificio.

La pagina incluye un script inline con una asignacion del estilo
`apiKey: 'abc123'`. El token es de vida corta, se busca en cada corrida.
"""
import re
from typing import Optional

import httpx
from loguru import logger

from rentsync.infrastructure.external.realpage.http import get_or_raise
from rentsync.shared.exceptions.scrape import KeyNotFoundError

API_KEY_PATTERN = re.compile(r"apiKey:\s*'(?P<api_key>[^']*)'")


def extract_api_key(html: str) -> Optional[str]:
    """Retorna el valor de la primera asignacion apiKey o None si no existe."""
    match = API_KEY_PATTERN.search(html)
    return match.group("api_key") if match else None


class ApiKeyFetcher:
    """
    Obtiene el apiKey desde HOME_PAGE.

    El cliente httpx lo provee quien arma la corrida y se comparte con
    RealPageClient (en tests, un cliente con MockTransport).
    """

    def __init__(self, home_page_url: str, *, client: httpx.AsyncClient):
        self._home_page_url = home_page_url
        self._client = client

    async def fetch(self) -> str:
        """
        Returns:
            str: apiKey tal cual aparece en la pagina

        Raises:
            HttpError: Si la pagina responde con error
            KeyNotFoundError: Si la pagina no contiene el patron
        """
        response = await get_or_raise(self._client, self._home_page_url)

        api_key = extract_api_key(response.text)
        if api_key is None:
            logger.error(f"No se encontro apiKey en {self._home_page_url}")
            raise KeyNotFoundError(self._home_page_url)

        logger.debug("apiKey obtenido desde la pagina principal")
        return api_key
