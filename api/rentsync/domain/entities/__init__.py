"""
Entidades de dominio.
"""
from .records import FloorplanRecord, Record, RentRecord, UnitRecord

__all__ = [
    "FloorplanRecord",
    "Record",
    "RentRecord",
    "UnitRecord",
]
