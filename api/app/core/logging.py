"""
Configuracion de loguru: consola + archivo diario en LOG_DIR.
"""
import sys
from pathlib import Path

from loguru import logger

from app.core.config import Settings


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"


def configure_logging(settings: Settings) -> Path:
    """
    Reemplaza los sinks por defecto.

    Returns:
        Path: Directorio donde se escriben los logs
    """
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL, format=LOG_FORMAT)
    logger.add(
        str(log_dir / "server_{time:YYYY-MM-DD}.log"),
        format=LOG_FORMAT,
        rotation="00:00",
        retention=settings.LOG_RETENTION,
        level=settings.LOG_LEVEL,
        enqueue=True,
    )
    return log_dir
