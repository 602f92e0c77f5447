"""
Excepciones del pipeline de scraping RealPage -> document store.

Ninguna etapa reintenta: cualquier error aborta la corrida completa y
llega sin modificar al trigger que la invoco.
"""
from typing import Any, Dict, Optional

from rentsync.shared.exceptions.base import AppException


class ScrapeError(AppException):
    """Excepción base para errores del pipeline de scraping."""
    
    def __init__(
        self,
        message: str,
        error_code: str = "SCRAPE_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=500,
            error_code=error_code,
            details=details
        )


class ConfigurationError(ScrapeError):
    """Falta configuracion obligatoria para ejecutar el scraping."""
    
    def __init__(self, setting_name: str):
        super().__init__(
            message=f"Falta configuracion obligatoria: {setting_name}",
            error_code="CONFIGURATION_ERROR",
            details={"setting": setting_name}
        )


class KeyNotFoundError(ScrapeError):
    """La pagina principal ya no contiene el apiKey esperado."""
    
    def __init__(self, url: str):
        super().__init__(
            message="Could not find API key",
            error_code="KEY_NOT_FOUND",
            details={"url": url}
        )


class HttpError(ScrapeError):
    """Respuesta no exitosa (o fallo de transporte) de un servicio upstream."""
    
    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        if status_code is not None:
            message = f"Request to {url} failed with status code {status_code}"
        else:
            message = f"Request to {url} failed: {reason}"
        super().__init__(
            message=message,
            error_code="UPSTREAM_HTTP_ERROR",
            details={"url": url, "status_code": status_code}
        )
        self.url = url
        self.status_code_upstream = status_code


class TransformError(ScrapeError):
    """El payload no tiene la forma esperada por la proyeccion."""
    
    def __init__(self, message: str, entity: Optional[str] = None, index: Optional[int] = None):
        details: Dict[str, Any] = {}
        if entity:
            details["entity"] = entity
        if index is not None:
            details["index"] = index
        super().__init__(
            message=message,
            error_code="TRANSFORM_ERROR",
            details=details
        )


class WriteError(ScrapeError):
    """Fallo del almacenamiento al hacer merge-upsert de un documento."""
    
    def __init__(self, collection: str, doc_id: str, reason: str):
        super().__init__(
            message=f"Error al escribir {collection}/{doc_id}: {reason}",
            error_code="WRITE_ERROR",
            details={"collection": collection, "doc_id": doc_id}
        )
        self.collection = collection
        self.doc_id = doc_id
