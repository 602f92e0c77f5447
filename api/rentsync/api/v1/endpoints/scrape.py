"""
Trigger bajo demanda del scraping RealPage.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from rentsync.api.v1.dependencies.use_case_deps import get_scrape_runner
from rentsync.application.dto.scrape_dto import ScrapeStatusDTO
from rentsync.application.use_cases.scrape_use_cases import ScrapeRunner


router = APIRouter(prefix="/scrape", tags=["Scrape"])


@router.api_route(
    "",
    methods=["GET", "POST"],
    response_model=ScrapeStatusDTO,
    response_model_exclude_none=True,
    summary="Ejecutar el scraping de RealPage"
)
async def scrape_unit_data(
    runner: ScrapeRunner = Depends(get_scrape_runner),
):
    """
    Ejecuta una corrida completa de forma sincronica con la request.

    No requiere body. Cualquier error se reporta con status 500 y el mensaje
    del error, sin distinguir el tipo.
    """
    try:
        await runner()
    except Exception as e:
        logger.exception("Error en scraping manual")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ScrapeStatusDTO(status="error", error=str(e)).model_dump(),
        )

    return ScrapeStatusDTO(status="success")
