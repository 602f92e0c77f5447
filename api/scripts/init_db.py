"""
Script para crear la tabla de documentos sin levantar la API.
"""
import asyncio
from loguru import logger

from rentsync.infrastructure.database.session import init_db, close_db


async def main():
    """Crea la tabla documents si no existe."""
    logger.info("Inicializando base de datos...")
    
    try:
        await init_db()
        logger.success("Base de datos inicializada correctamente")
    except Exception as e:
        logger.error(f"Error al inicializar base de datos: {e}")
        raise
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
