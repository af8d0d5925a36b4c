"""
Coercion de registros a los tipos que espera cada columna.

Funciones puras: no hacen I/O ni lanzan excepciones. Un numero mal formado
se convierte en NULL en vez de abortar el snapshot completo.
"""
from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Tuple, Union

from app.domain.entities.field_value import (
    NULL,
    FieldValue,
    FloatValue,
    IntegerValue,
    NullValue,
    RawDateValue,
    StringValue,
)
from app.domain.entities.table_schema import CoercionClass, TableSchema


Number = Union[int, float]


def _as_text(value: FieldValue) -> Optional[str]:
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, RawDateValue):
        return value.text
    if isinstance(value, IntegerValue):
        return str(value.value)
    if isinstance(value, FloatValue):
        v = value.value
        # 3.0 -> "3", igual que lo serializa el exportador
        if math.isfinite(v) and v.is_integer():
            return str(int(v))
        return repr(v)
    return None


def to_string_trimmed(value: FieldValue) -> Optional[str]:
    text = _as_text(value)
    if text is None:
        return None
    text = text.strip()
    return text or None


def to_integer_or_null(value: FieldValue) -> Optional[Number]:
    """
    Entero o NULL.

    Los numeros pasan sin cambios. El texto se parsea como entero; si trae
    decimales se trunca hacia cero ("7.9" -> 7). El cero se conserva.
    """
    if isinstance(value, IntegerValue):
        return value.value
    if isinstance(value, FloatValue):
        return value.value if math.isfinite(value.value) else None
    text = _as_text(value)
    if text is None:
        return None
    text = text.strip()
    # int("1_000") y float("1_0") son validos en Python pero no en el origen
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return int(parsed)


def to_float_or_null(value: FieldValue) -> Optional[Number]:
    """Flotante o NULL. NaN/inf se tratan como invalidos. El cero se conserva."""
    if isinstance(value, IntegerValue):
        return value.value
    if isinstance(value, FloatValue):
        # json.loads acepta NaN e Infinity
        return value.value if math.isfinite(value.value) else None
    text = _as_text(value)
    if text is None:
        return None
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        parsed = float(text)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def to_date_passthrough(value: FieldValue) -> Any:
    # El origen ya exporta fechas canonicas; la base hace el cast
    if isinstance(value, NullValue):
        return None
    if isinstance(value, RawDateValue):
        return value.text
    return value.value


_COERCERS = {
    CoercionClass.STRING_TRIMMED: to_string_trimmed,
    CoercionClass.INTEGER_OR_NULL: to_integer_or_null,
    CoercionClass.FLOAT_OR_NULL: to_float_or_null,
    CoercionClass.DATE_PASSTHROUGH: to_date_passthrough,
}


def coerce_value(value: FieldValue, coercion: CoercionClass) -> Any:
    return _COERCERS[coercion](value)


def coerce_record(record: Mapping[str, FieldValue], schema: TableSchema) -> Tuple[Any, ...]:
    """
    Produce los valores de un registro en el orden de columnas del esquema.

    Las columnas ausentes en el registro se tratan como NULL; las claves que
    no pertenecen al esquema se ignoran.
    """
    return tuple(
        coerce_value(record.get(column.name, NULL), column.coercion)
        for column in schema.columns
    )
