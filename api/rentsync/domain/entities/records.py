"""
Entidades de dominio: registros normalizados de RealPage.

Cada registro es el resultado inmutable de proyectar un objeto crudo de la
API. Se re-derivan completos en cada corrida y se escriben con merge, nunca
se modifican en sitio.
"""
from dataclasses import dataclass
from typing import Any, Dict, Union

Number = Union[int, float]


@dataclass(frozen=True)
class RentRecord:
    """Precio publicado de una unidad en un instante (rentModified)."""

    id: int
    rent: Number
    available: bool
    rent_modified: int  # epoch en milisegundos

    def document_id(self) -> str:
        """Clave de identidad: un documento por unidad y modificacion de precio."""
        return f"{self.id}_{self.rent_modified}"

    def to_document(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "rent": self.rent,
            "available": self.available,
            "rentModified": self.rent_modified,
        }


@dataclass(frozen=True)
class UnitRecord:
    """Datos fisicos de una unidad. floorplan_id no se valida contra floorplans."""

    id: int
    floor: Number
    sqrt: Number  # pies cuadrados
    floorplan_id: int

    def document_id(self) -> str:
        return str(self.id)

    def to_document(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "floor": self.floor,
            "sqrt": self.sqrt,
            "floorplanId": self.floorplan_id,
        }


@dataclass(frozen=True)
class FloorplanRecord:
    """Plano de planta con la URL de su imagen principal."""

    id: int
    name: str
    beds: Number
    baths: Number
    floorplan_img: str

    def document_id(self) -> str:
        return str(self.id)

    def to_document(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "beds": self.beds,
            "baths": self.baths,
            "floorplanImg": self.floorplan_img,
        }


Record = Union[RentRecord, UnitRecord, FloorplanRecord]
