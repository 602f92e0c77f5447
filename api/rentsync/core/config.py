"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Las URLs de RealPage se leen una sola vez al iniciar el proceso.
"""
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    Origen de datos:
    - HOME_PAGE: pagina publica que contiene el apiKey embebido
    - REALPAGE_API: URL base de la API de RealPage (sin slash final)
    - DATABASE_URL se puede especificar completa o por componentes
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="RentSync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Origen RealPage
    HOME_PAGE: str = Field(default="")
    REALPAGE_API: str = Field(default="")
    REALPAGE_SITE_ID: int = Field(default=8448226)

    # Base de datos - Componentes separados
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="rentsync")
    DATABASE_PASSWORD: str = Field(default="rentsync")
    DATABASE_NAME: str = Field(default="rentsync")

    # Base de datos - URL completa (override de componentes si se proporciona)
    DATABASE_URL: str = Field(default="")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # Scheduler diario
    SCHEDULER_ENABLED: bool = Field(default=True)
    SCRAPE_CRON_HOUR: int = Field(default=0)
    SCRAPE_CRON_MINUTE: int = Field(default=0)
    # Misma zona horaria por defecto que los jobs programados de Cloud Scheduler
    SCRAPE_TIMEZONE: str = Field(default="America/Los_Angeles")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """
        Retorna la URL de base de datos efectiva.
        Si DATABASE_URL esta definida, la usa directamente.
        Si no, construye la URL desde los componentes individuales.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


# Instancia global de configuracion
settings = Settings()
