"""
Operaciones SQL sobre la tabla destino dentro de la transacción del sync:
lock por tabla, limpieza (DELETE / TRUNCATE) e inserción por lotes.
"""
from __future__ import annotations

import zlib
from typing import Sequence

from sqlalchemy import delete, text
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.sql import TableClause

from app.domain.entities.sync import ClearMode
from app.infrastructure.sync.batch_inserter import BatchInserter, Row


def table_lock_key(table_name: str) -> int:
    """
    Lock key reproducible para pg_advisory_xact_lock.

    hash() no es estable entre procesos; crc32 si lo es.
    """
    return zlib.crc32(f"table_sync:{table_name}".encode("utf-8")) & 0x7FFFFFFF


class SnapshotTableRepository:
    """
    Escribe el snapshot en la tabla destino. El caller controla la
    transacción (begin/commit/rollback).
    """

    def __init__(self, inserter: BatchInserter) -> None:
        self._inserter = inserter

    async def lock_table(self, conn: AsyncConnection, table_name: str) -> bool:
        """
        Serializa syncs concurrentes sobre la misma tabla (solo PostgreSQL).
        El lock se libera solo al hacer commit o rollback.

        Returns:
            bool: True si se tomo el lock, False si el dialecto no lo soporta
        """
        if conn.dialect.name != "postgresql":
            return False
        await conn.execute(
            text("SELECT pg_advisory_xact_lock(:key)"),
            {"key": table_lock_key(table_name)},
        )
        return True

    async def clear(self, conn: AsyncConnection, target: TableClause, mode: ClearMode) -> None:
        if mode is ClearMode.TRUNCATE_RESET:
            quoted = conn.dialect.identifier_preparer.quote(target.name)
            await conn.execute(text(f"TRUNCATE TABLE {quoted} RESTART IDENTITY"))
        else:
            await conn.execute(delete(target))

    async def insert_rows(
        self,
        conn: AsyncConnection,
        target: TableClause,
        rows: Sequence[Row],
    ) -> int:
        return await self._inserter.insert_all(conn, target, rows)
