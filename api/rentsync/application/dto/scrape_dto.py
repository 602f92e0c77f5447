"""
DTOs del trigger de scraping bajo demanda.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ScrapeStatusDTO(BaseModel):
    """
    Respuesta del endpoint de scraping.

    {"status": "success"} o {"status": "error", "error": "<mensaje>"}.
    """

    status: Literal["success", "error"] = Field(..., description="Resultado de la corrida")
    error: Optional[str] = Field(default=None, description="Mensaje del error, solo si fallo")
