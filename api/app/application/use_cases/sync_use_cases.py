"""
Caso de uso: reemplazo atómico de una tabla con un snapshot completo.

Flujo (una sola transacción por request):
    IDLE -> TRANSACTION_OPEN -> CLEARING -> INSERTING -> COMMITTED
Cualquier fallo al limpiar, insertar o confirmar hace rollback completo:
la tabla queda exactamente como estaba antes del request.

No hay reintentos automáticos: reenviar el mismo snapshot es responsabilidad
del cliente (la operación es idempotente porque reemplaza todo).
"""
from typing import Any, Optional, Sequence

from loguru import logger
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.sql import TableClause

from app.application.services.record_coercer import coerce_record
from app.core.config import Settings
from app.domain.entities.sync import ClearMode, SyncRequest, SyncResult, SyncState
from app.domain.entities.table_schema import TableSchema
from app.infrastructure.database.session import Database
from app.infrastructure.sync.batch_inserter import BatchInserter, Row
from app.infrastructure.sync.table_mappings import build_table_clause, get_table_schema
from app.infrastructure.sync.table_repository import SnapshotTableRepository
from app.shared.exceptions.base import AppException
from app.shared.exceptions.sync import SyncTransactionException
from app.shared.utils.identifier_validator import resolve_table_name


def _error_message(exc: BaseException) -> str:
    """
    Mensaje del error de base de datos sin el SQL ni los parámetros
    (un lote de 500 filas haría el mensaje enorme).
    """
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc)


class SnapshotSyncUseCases:
    """Orquestador de la transacción de sincronización."""

    def __init__(
        self,
        database: Database,
        settings: Settings,
        schema: Optional[TableSchema] = None,
        repository: Optional[SnapshotTableRepository] = None,
    ):
        self.database = database
        self.settings = settings
        self.schema = schema or get_table_schema(settings.SYNC_SCHEMA)
        chunk_size = settings.SYNC_CHUNK_SIZE or self.schema.chunk_size
        self.repository = repository or SnapshotTableRepository(BatchInserter(chunk_size))

    def resolve_clear_mode(self, truncate_first: Any = None) -> ClearMode:
        """
        Modo de limpieza efectivo.

        La política del despliegue (SYNC_CLEAR_MODE) manda; el flag del
        cliente solo se respeta si SYNC_ALLOW_CLIENT_CLEAR_MODE está activo.
        """
        configured = ClearMode(self.settings.SYNC_CLEAR_MODE)
        if truncate_first is None:
            return configured
        if not isinstance(truncate_first, bool):
            logger.debug(f"truncateFirst no booleano ignorado: {truncate_first!r}")
            return configured
        if not self.settings.SYNC_ALLOW_CLIENT_CLEAR_MODE:
            logger.debug(f"truncateFirst={truncate_first} ignorado; modo configurado: {configured.value}")
            return configured
        return ClearMode.TRUNCATE_RESET if truncate_first else ClearMode.DELETE_ALL

    async def execute(self, request: SyncRequest) -> SyncResult:
        """
        Reemplaza el contenido de la tabla destino con `request.records`.

        Returns:
            SyncResult: Resultado exitoso con el total insertado

        Raises:
            PoolExhaustedException: Si no hay conexión disponible a tiempo
            SyncTransactionException: Si falla cualquier paso (ya con rollback)
        """
        table_name = resolve_table_name(request.target_table_name, self.settings.SYNC_DEFAULT_TABLE)
        target = build_table_clause(table_name, self.schema)
        rows = [coerce_record(record, self.schema) for record in request.records]

        logger.info(
            f"Sync recibido: {len(rows)} registros -> {table_name} "
            f"(esquema={self.schema.name}, limpieza={request.clear_mode.value})"
        )

        try:
            async with self.database.connection() as conn:
                return await self._replace_table(conn, target, rows, request.clear_mode)
        except AppException:
            raise
        except Exception as e:
            # Fallo al obtener o liberar la conexión (fuera de la transacción)
            message = _error_message(e)
            logger.error(f"Sync fallido en {table_name} (conexion): {message}")
            raise SyncTransactionException(message, table_name) from e

    async def _replace_table(
        self,
        conn: AsyncConnection,
        target: TableClause,
        rows: Sequence[Row],
        clear_mode: ClearMode,
    ) -> SyncResult:
        state = SyncState.IDLE
        transaction = await conn.begin()
        state = self._transition(state, SyncState.TRANSACTION_OPEN, target.name)

        try:
            if self.settings.SYNC_TABLE_LOCK:
                await self.repository.lock_table(conn, target.name)

            state = self._transition(state, SyncState.CLEARING, target.name)
            await self.repository.clear(conn, target, clear_mode)

            state = self._transition(state, SyncState.INSERTING, target.name)
            inserted = await self.repository.insert_rows(conn, target, rows)

            await transaction.commit()
        except Exception as e:
            message = _error_message(e)
            await self._rollback(transaction, target.name)
            self._transition(state, SyncState.ROLLED_BACK, target.name)
            logger.error(f"Sync fallido en {target.name} durante {state.value}: {message}")
            raise SyncTransactionException(message, target.name) from e

        self._transition(state, SyncState.COMMITTED, target.name)
        logger.info(f"Sync completado: {inserted} filas insertadas en {target.name}")
        return SyncResult(
            success=True,
            inserted_count=inserted,
            table_name=target.name,
            final_state=SyncState.COMMITTED,
        )

    @staticmethod
    async def _rollback(transaction, table_name: str) -> None:
        if not transaction.is_active:
            return
        try:
            await transaction.rollback()
        except Exception as rollback_error:
            # La conexión se descarta al cerrarse; el error original se relanza igual
            logger.error(f"Rollback fallido en {table_name}: {rollback_error}")

    @staticmethod
    def _transition(current: SyncState, new: SyncState, table_name: str) -> SyncState:
        logger.debug(f"[{table_name}] {current.value} -> {new.value}")
        return new
