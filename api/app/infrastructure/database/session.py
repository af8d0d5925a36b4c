"""
Gestión del engine y del pool de conexiones.

`Database` es el recurso de proceso: se construye una vez en el startup,
se guarda en `app.state.database` y se inyecta a los handlers. No hay engine
global a nivel de módulo, así los tests pueden sustituirlo.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from app.core.config import Settings
from app.shared.exceptions.sync import PoolExhaustedException


def _create_engine_args(settings: Settings) -> dict:
    """
    Construye los argumentos del engine segun el tipo de base de datos.
    PostgreSQL usa pool de conexiones acotado, SQLite no lo soporta.
    """
    args = {
        "echo": settings.DEBUG,
    }

    # Configuracion de pool solo para PostgreSQL
    if "postgresql" in settings.effective_database_url:
        args.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,  # Verifica conexion antes de usar
            "connect_args": {"connect_timeout": settings.DB_CONNECT_TIMEOUT},
        })

    return args


class Database:
    """Engine async + pool compartido por todos los requests."""

    def __init__(self, engine: AsyncEngine, pool_timeout: float = 2.0):
        self.engine = engine
        self.pool_timeout = pool_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = create_async_engine(
            settings.effective_database_url, **_create_engine_args(settings)
        )
        return cls(engine, pool_timeout=settings.DB_POOL_TIMEOUT)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """
        Obtiene una conexión dedicada del pool y la devuelve al salir,
        en cualquier camino (éxito o error).

        Raises:
            PoolExhaustedException: Si el pool no entrega conexión a tiempo
        """
        try:
            conn = await self.engine.connect()
        except PoolTimeoutError as e:
            logger.error(f"Pool agotado: sin conexion disponible en {self.pool_timeout}s")
            raise PoolExhaustedException(self.pool_timeout) from e

        try:
            yield conn
        finally:
            await conn.close()

    async def ping(self) -> Optional[str]:
        """
        Prueba de conectividad. Retorna None si la base responde,
        o el mensaje de error si no.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return None
        except Exception as e:
            return str(e)

    async def dispose(self) -> None:
        """Cierra las conexiones del pool."""
        await self.engine.dispose()
