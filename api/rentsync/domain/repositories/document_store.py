"""
Interfaz del almacen de documentos.
Define el contrato que debe cumplir cualquier implementación.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IDocumentStore(ABC):
    """
    Almacen de documentos agrupados por colección y direccionados por clave.
    """

    @abstractmethod
    async def merge_upsert(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """
        Crea el documento si no existe o mezcla `data` sobre el existente.

        Los campos existentes que no vienen en `data` se conservan; los que
        vienen sobrescriben al valor anterior.

        Args:
            collection: Nombre de la colección (rents, units, floorplans)
            doc_id: Clave de identidad del documento
            data: Campos a escribir

        Raises:
            WriteError: Si el almacenamiento falla
        """
        pass

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """
        Obtiene un documento por su clave.

        Returns:
            Optional[Dict[str, Any]]: Contenido del documento o None
        """
        pass

    @abstractmethod
    async def count(self, collection: str) -> int:
        """Cantidad de documentos de una colección."""
        pass
