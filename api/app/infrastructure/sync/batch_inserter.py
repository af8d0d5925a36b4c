"""
Inserción masiva por lotes.

Un INSERT multi-fila por lote, con un parámetro por (fila, columna). El
tamaño del lote solo acota el tamaño de cada sentencia: no tiene significado
semántico y se puede cambiar sin afectar el resultado.
"""
from __future__ import annotations

from typing import Any, Iterator, Sequence, Tuple

from loguru import logger
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.sql import TableClause


Row = Tuple[Any, ...]


def iter_chunks(rows: Sequence[Row], chunk_size: int) -> Iterator[Sequence[Row]]:
    """Particiona `rows` en tramos contiguos de a lo sumo `chunk_size`."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size debe ser >= 1 (recibido {chunk_size})")
    for start in range(0, len(rows), chunk_size):
        yield rows[start:start + chunk_size]


class BatchInserter:
    def __init__(self, chunk_size: int) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size debe ser >= 1 (recibido {chunk_size})")
        self.chunk_size = chunk_size

    async def insert_all(
        self,
        conn: AsyncConnection,
        target: TableClause,
        rows: Sequence[Row],
    ) -> int:
        """
        Inserta todas las filas en orden, un statement por lote.

        Args:
            conn: Conexión con la transacción ya abierta
            target: Tabla destino (columnas en el mismo orden que cada fila)
            rows: Valores ya coercionados, en orden de columnas

        Returns:
            int: Total de filas insertadas
        """
        column_names = [c.name for c in target.columns]
        total_chunks = (len(rows) + self.chunk_size - 1) // self.chunk_size
        inserted = 0

        for index, chunk in enumerate(iter_chunks(rows, self.chunk_size), start=1):
            values = [dict(zip(column_names, row)) for row in chunk]
            await conn.execute(insert(target).values(values))
            inserted += len(chunk)
            logger.debug(
                f"Lote {index}/{total_chunks} insertado en {target.name}: "
                f"{len(chunk)} filas (acumulado {inserted})"
            )

        return inserted
