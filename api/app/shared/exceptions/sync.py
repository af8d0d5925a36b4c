"""
Excepciones del ciclo transaccional de sincronización.
"""
from typing import Optional

from app.shared.exceptions.base import AppException


class SyncTransactionException(AppException):
    """
    Fallo durante limpieza, inserción o commit.
    Se lanza siempre después del rollback, con el mensaje del error original.
    """

    def __init__(self, message: str, table_name: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code="SYNC_TRANSACTION_FAILED",
            details={"table": table_name} if table_name else None
        )


class PoolExhaustedException(AppException):
    """No se obtuvo una conexión del pool dentro del tiempo configurado."""

    def __init__(self, timeout: float):
        super().__init__(
            message=f"No database connection available within {timeout}s",
            status_code=500,
            error_code="POOL_EXHAUSTED",
            details={"timeout": timeout}
        )
        self.timeout = timeout
