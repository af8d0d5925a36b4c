"""
Entidades de una corrida de sincronizacion de snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from app.domain.entities.field_value import FieldValue


class ClearMode(Enum):
    """Como se vacia la tabla destino antes de insertar el snapshot."""
    DELETE_ALL = "delete"
    TRUNCATE_RESET = "truncate"  # tambien reinicia secuencias (RESTART IDENTITY)


class SyncState(Enum):
    """
    Estados del orquestador.

    IDLE -> TRANSACTION_OPEN -> CLEARING -> INSERTING -> COMMITTED
    Cualquier fallo en CLEARING/INSERTING (o en el commit) -> ROLLED_BACK
    """
    IDLE = "idle"
    TRANSACTION_OPEN = "transaction_open"
    CLEARING = "clearing"
    INSERTING = "inserting"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


Record = Dict[str, FieldValue]


@dataclass
class SyncRequest:
    """Snapshot completo recibido en un request; se descarta al terminar."""

    records: List[Record]
    credential: str
    target_table_name: Optional[str] = None
    clear_mode: ClearMode = ClearMode.DELETE_ALL


@dataclass
class SyncResult:
    success: bool
    inserted_count: int = 0
    error_message: Optional[str] = None
    table_name: Optional[str] = None
    final_state: SyncState = field(default=SyncState.IDLE)

    @classmethod
    def failed(cls, message: str, table_name: Optional[str] = None) -> "SyncResult":
        return cls(
            success=False,
            inserted_count=0,
            error_message=message,
            table_name=table_name,
            final_state=SyncState.ROLLED_BACK,
        )
