"""
Entidades del dominio.
"""
from app.domain.entities.field_value import (
    FieldValue,
    StringValue,
    IntegerValue,
    FloatValue,
    NullValue,
    RawDateValue,
    parse_field_value,
    parse_record
)
from app.domain.entities.table_schema import CoercionClass, ColumnSpec, TableSchema
from app.domain.entities.sync import ClearMode, SyncState, SyncRequest, SyncResult

__all__ = [
    "FieldValue",
    "StringValue",
    "IntegerValue",
    "FloatValue",
    "NullValue",
    "RawDateValue",
    "parse_field_value",
    "parse_record",
    "CoercionClass",
    "ColumnSpec",
    "TableSchema",
    "ClearMode",
    "SyncState",
    "SyncRequest",
    "SyncResult"
]
