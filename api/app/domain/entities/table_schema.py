"""
Esquema de columnas de una tabla destino.

Cada columna declara su clase de coercion. Los esquemas ancho y angosto son
solo dos configuraciones del mismo motor (ver table_mappings).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CoercionClass(Enum):
    """Regla de normalizacion de un valor antes de persistirlo."""
    STRING_TRIMMED = "string_trimmed"
    INTEGER_OR_NULL = "integer_or_null"
    FLOAT_OR_NULL = "float_or_null"
    DATE_PASSTHROUGH = "date_passthrough"


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    coercion: CoercionClass = CoercionClass.STRING_TRIMMED


@dataclass(frozen=True)
class TableSchema:
    """
    Lista ordenada de columnas mas el tamano de lote por defecto.

    El orden de `columns` es el orden de los valores producidos por la
    coercion y el orden de columnas del INSERT.
    """

    name: str
    columns: Tuple[ColumnSpec, ...]
    chunk_size: int

    def __post_init__(self) -> None:
        if not self.columns:
            raise ValueError(f"El esquema '{self.name}' no define columnas")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size invalido para '{self.name}': {self.chunk_size}")
        names = [c.name for c in self.columns]
        if len(set(names)) != len(names):
            raise ValueError(f"El esquema '{self.name}' tiene columnas duplicadas")

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)
