"""
DTOs del endpoint de sincronización.

El contrato HTTP usa camelCase (`apiKey`, `tableName`, `insertedCount`)
porque lo consume el exportador existente.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.domain.entities.field_value import parse_record
from app.domain.entities.sync import ClearMode, SyncRequest
from app.shared.exceptions.domain import InvalidDataFormatException


class SyncRequestDTO(BaseModel):
    """
    Body de POST /api/sync.

    `data` debe ser un arreglo de objetos (puede estar vacío). `tableName`
    se acepta de cualquier tipo: si no es un identificador válido se usa la
    tabla por defecto, no se rechaza el request. Igual `truncateFirst`:
    un valor que no es booleano se ignora.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: List[Dict[str, Any]]
    api_key: str = Field(alias="apiKey")
    table_name: Optional[Any] = Field(default=None, alias="tableName")
    truncate_first: Optional[Any] = Field(default=None, alias="truncateFirst")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SyncRequestDTO":
        """
        Valida la forma del payload (ya autenticado).

        Raises:
            InvalidDataFormatException: Si `data` falta o no es un arreglo de objetos
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            reason = f"{location}: {first.get('msg', '')}"
            logger.warning(f"Payload de sync invalido ({reason})")
            raise InvalidDataFormatException(reason) from e

    def to_domain(self, clear_mode: ClearMode) -> SyncRequest:
        return SyncRequest(
            records=[parse_record(item) for item in self.data],
            credential=self.api_key,
            target_table_name=self.table_name,
            clear_mode=clear_mode,
        )


class SyncResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    inserted_count: int = Field(alias="insertedCount")


class ErrorResponseDTO(BaseModel):
    success: bool = False
    message: str


class HealthResponseDTO(BaseModel):
    status: str = "ok"
