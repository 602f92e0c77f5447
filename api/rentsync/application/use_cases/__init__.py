"""
Casos de uso de la aplicacion.
"""
from .scrape_use_cases import ScrapeResult, ScrapeUseCases

__all__ = ["ScrapeResult", "ScrapeUseCases"]
