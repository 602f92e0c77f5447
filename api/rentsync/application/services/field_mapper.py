"""
Proyecciones de payloads crudos de RealPage a registros normalizados.

Una funcion explicita por tipo de entidad (rent, unit, floorplan). Son
funciones puras: sin I/O ni estado, el mismo input produce siempre el mismo
output. Cualquier desviacion en la forma del payload levanta TransformError
y el lote completo falla (no hay salida parcial).
"""
from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Sequence, TypeVar, Union

from rentsync.domain.entities.records import FloorplanRecord, RentRecord, UnitRecord
from rentsync.shared.exceptions.scrape import TransformError

T = TypeVar("T")
Number = Union[int, float]

LEASED_STATUS = "LEASED"
# Formato de rentModifiedTimestamp, p.ej. "2024-01-15 10:30 +0000"
RENT_MODIFIED_FORMAT = "%Y-%m-%d %H:%M %z"
FLOORPLAN_IMAGE_BASE_URL = "https://capi.myleasestar.com/v2/dimg"
# Strings numericos admitidos: digitos ASCII, sin espacios ni separadores
NUMERIC_STRING_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?([eE][-+]?[0-9]+)?")


def _require(raw: Dict[str, Any], field: str) -> Any:
    if field not in raw:
        raise TransformError(f"Falta el campo requerido '{field}'")
    return raw[field]


def _as_number(value: Any, field: str) -> Number:
    """Acepta numeros o strings numericos. Los booleanos no son numeros."""
    if isinstance(value, bool):
        raise TransformError(f"El campo '{field}' no es numerico: {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        match = NUMERIC_STRING_PATTERN.fullmatch(value)
        if match is None:
            raise TransformError(f"El campo '{field}' no es numerico: {value!r}")
        if match.group(1) is None and match.group(2) is None:
            return int(value)
        number = float(value)
        if not math.isfinite(number):
            raise TransformError(f"El campo '{field}' no es numerico: {value!r}")
        return number
    raise TransformError(f"El campo '{field}' no es numerico: {value!r}")


def _as_int(value: Any, field: str) -> int:
    number = _as_number(value, field)
    if isinstance(number, float):
        if not number.is_integer():
            raise TransformError(f"El campo '{field}' no es entero: {value!r}")
        return int(number)
    return number


def _as_text(value: Any, field: str) -> str:
    """Texto para concatenar en URLs: 400.0 se escribe como '400'."""
    if isinstance(value, str):
        return value
    number = _as_number(value, field)
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def _to_epoch_millis(value: Any, field: str) -> int:
    if not isinstance(value, str):
        raise TransformError(f"El campo '{field}' no es un timestamp: {value!r}")
    try:
        parsed = datetime.strptime(value.strip(), RENT_MODIFIED_FORMAT)
    except ValueError:
        raise TransformError(
            f"El campo '{field}' no tiene el formato 'YYYY-MM-DD HH:mm +HHMM': {value!r}"
        ) from None
    return round(parsed.timestamp() * 1000)


def map_rent(raw: Dict[str, Any]) -> RentRecord:
    """
    Proyecta una unidad cruda al precio publicado.

    Cualquier leaseStatus distinto de LEASED se considera disponible.
    """
    return RentRecord(
        id=_as_int(_require(raw, "name"), "name"),
        rent=_as_number(_require(raw, "rent"), "rent"),
        available=_require(raw, "leaseStatus") != LEASED_STATUS,
        rent_modified=_to_epoch_millis(
            _require(raw, "rentModifiedTimestamp"), "rentModifiedTimestamp"
        ),
    )


def map_unit(raw: Dict[str, Any]) -> UnitRecord:
    """Proyecta una unidad cruda a sus datos fisicos."""
    return UnitRecord(
        id=_as_int(_require(raw, "name"), "name"),
        floor=_as_number(_require(raw, "floorNumber"), "floorNumber"),
        sqrt=_as_number(_require(raw, "squareFeet"), "squareFeet"),
        floorplan_id=_as_int(_require(raw, "floorplanId"), "floorplanId"),
    )


def build_floorplan_image_url(image: Dict[str, Any]) -> str:
    """URL del CDN de LeaseStar para la imagen de un plano."""
    if not isinstance(image, dict):
        raise TransformError(f"Imagen de plano invalida: {image!r}")
    media_id = _as_text(_require(image, "mediaId"), "mediaId")
    width = _as_text(_require(image, "maxWidth"), "maxWidth")
    height = _as_text(_require(image, "maxHeight"), "maxHeight")
    return f"{FLOORPLAN_IMAGE_BASE_URL}/{media_id}/{width}x{height}/{media_id}.jpg"


def map_floorplan(raw: Dict[str, Any]) -> FloorplanRecord:
    """Proyecta un plano crudo. La imagen sale de floorPlanImages[0]."""
    name = _require(raw, "name")
    if not isinstance(name, str):
        raise TransformError(f"El campo 'name' no es texto: {name!r}")

    images = _require(raw, "floorPlanImages")
    if not isinstance(images, list) or not images:
        raise TransformError("El campo 'floorPlanImages' no contiene imagenes")

    return FloorplanRecord(
        id=_as_int(_require(raw, "id"), "id"),
        name=name,
        beds=_as_number(_require(raw, "bedRooms"), "bedRooms"),
        baths=_as_number(_require(raw, "bathRooms"), "bathRooms"),
        floorplan_img=build_floorplan_image_url(images[0]),
    )


def map_records(
    raw_records: Sequence[Dict[str, Any]],
    projection: Callable[[Dict[str, Any]], T],
    *,
    entity: str = "record",
) -> List[T]:
    """
    Aplica una proyeccion a todo el lote.

    Args:
        raw_records: Lista de objetos crudos de la API
        projection: map_rent, map_unit o map_floorplan
        entity: Nombre de la entidad para los mensajes de error

    Returns:
        List: Registros normalizados en el mismo orden del input

    Raises:
        TransformError: Si algun elemento no se puede proyectar
    """
    if not isinstance(raw_records, list):
        raise TransformError(
            f"Se esperaba una lista de {entity}, se recibio {type(raw_records).__name__}",
            entity=entity,
        )

    records: List[T] = []
    for index, raw in enumerate(raw_records):
        if not isinstance(raw, dict):
            raise TransformError(
                f"{entity}[{index}] no es un objeto JSON", entity=entity, index=index
            )
        try:
            records.append(projection(raw))
        except TransformError as e:
            raise TransformError(f"{entity}[{index}]: {e.message}", entity=entity, index=index) from e
    return records
