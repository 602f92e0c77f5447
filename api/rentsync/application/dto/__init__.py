"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .scrape_dto import ScrapeStatusDTO

__all__ = [
    "ScrapeStatusDTO",
]
