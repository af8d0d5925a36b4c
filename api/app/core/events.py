"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable
from fastapi import FastAPI
from loguru import logger

from app.core.config import Settings
from app.core.logging import configure_logging
from app.infrastructure.database.session import Database


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa logging y el pool de conexiones."""
        settings: Settings = app.state.settings
        try:
            log_dir = configure_logging(settings)
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT} | logs en {log_dir}")

            # Validar configuracion critica
            _validate_config(settings)

            if app.state.database is None:
                app.state.database = Database.from_settings(settings)

            # Prueba de conectividad: no aborta el arranque, solo informa
            error = await app.state.database.ping()
            if error:
                logger.error(f"Conexion a base de datos fallida: {error}")
            else:
                logger.info("Conexion a base de datos exitosa")

            logger.success("Aplicacion iniciada correctamente")
            _print_available_urls(settings)

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def _validate_config(settings: Settings) -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not settings.API_KEY:
        warnings.append("API_KEY no configurada - todos los requests a /api/sync seran rechazados")

    if settings.SYNC_ALLOW_CLIENT_CLEAR_MODE:
        warnings.append("SYNC_ALLOW_CLIENT_CLEAR_MODE activo - el cliente decide DELETE o TRUNCATE")

    # Mostrar advertencias
    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def _print_available_urls(settings: Settings) -> None:
    """Imprime las URLs disponibles de la aplicacion."""
    # Determinar la URL base de acceso
    if settings.HOST == "0.0.0.0":
        access_host = "localhost"
    else:
        access_host = settings.HOST

    base_url = f"http://{access_host}:{settings.PORT}"

    logger.info("=" * 70)
    logger.info(f"  Sync:        POST {base_url}/api/sync")
    logger.info(f"  Health:      GET  {base_url}/health")
    logger.info(f"  Swagger UI:  {base_url}/docs")
    logger.info("=" * 70)


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")

        if app.state.database is not None:
            await app.state.database.dispose()
            logger.info("Conexiones de base de datos cerradas")

        logger.success("Aplicacion cerrada correctamente")

    return shutdown


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ciclo de vida de la app: startup antes de servir, shutdown al salir."""
    await startup_handler(app)()
    yield
    await shutdown_handler(app)()
