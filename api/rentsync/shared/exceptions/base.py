"""
Excepción base de la aplicación.
"""
from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Excepción base de rentsync.
    Todas las excepciones propias heredan de esta clase para que los
    triggers puedan reportarlas con un formato uniforme.
    """
    
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            message: Mensaje de error descriptivo
            status_code: Código de estado HTTP con el que se reporta
            error_code: Código de error estable para logs y clientes
            details: Contexto adicional (url, colección, índice...)
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Representación serializable usada por el handler global."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }
