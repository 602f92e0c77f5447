"""
GET sin reintentos compartido por el key fetcher y el cliente de RealPage.
"""
from typing import Any, Mapping, Optional

import httpx

from rentsync.shared.exceptions.scrape import HttpError


async def get_or_raise(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> httpx.Response:
    """
    Ejecuta un GET y convierte cualquier fallo en HttpError.

    No hay reintentos ni timeout propio: se usan los defaults de httpx.

    Raises:
        HttpError: Status no exitoso o error de transporte
    """
    try:
        response = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as e:
        raise HttpError(url, reason=str(e) or type(e).__name__) from e

    if not response.is_success:
        raise HttpError(url, status_code=response.status_code)
    return response
