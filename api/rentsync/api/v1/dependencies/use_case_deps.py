"""
Dependencias para inyeccion de casos de uso.
"""
from rentsync.application.use_cases.scrape_use_cases import ScrapeRunner, run_scrape


def get_scrape_runner() -> ScrapeRunner:
    """
    Dependencia para obtener la corrutina que ejecuta una corrida de scraping.

    Los tests la reemplazan via app.dependency_overrides.

    Returns:
        ScrapeRunner: Funcion asincrona sin argumentos
    """
    return run_scrape
