"""
Integración con RealPage (LeaseStar).

- key_fetcher: obtiene el apiKey embebido en la pagina publica
- realpage_client: consulta floorplans y units autenticando con ese apiKey
"""
from .key_fetcher import ApiKeyFetcher
from .realpage_client import RealPageClient

__all__ = ["ApiKeyFetcher", "RealPageClient"]
