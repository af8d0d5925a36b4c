"""
Valores de campo tipados para los registros del snapshot.

El JSON de entrada es de tipado laxo; en el borde HTTP cada valor se convierte
a una de estas variantes cerradas para que la coercion por columna trabaje
sobre un conjunto finito de casos y no sobre `Any`.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union


# Fecha (YYYY-MM-DD) o fecha-hora ISO-8601 con zona opcional
_ISO_DATE_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}(?::?\d{2})?)?)?",
    re.ASCII,
)


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class IntegerValue:
    value: int


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class NullValue:
    pass


@dataclass(frozen=True)
class RawDateValue:
    """Texto con forma de fecha ISO; se conserva tal cual llego."""
    text: str


FieldValue = Union[StringValue, IntegerValue, FloatValue, NullValue, RawDateValue]

NULL = NullValue()


def parse_field_value(raw: Any) -> FieldValue:
    """
    Clasifica un valor JSON en su variante.

    - None -> NullValue
    - bool -> StringValue("true"/"false")
    - int / float -> IntegerValue / FloatValue
    - str con forma de fecha ISO -> RawDateValue, resto -> StringValue
    - listas/objetos anidados -> StringValue con su JSON compacto
    """
    if raw is None:
        return NULL
    # bool es subclase de int: debe evaluarse antes
    if isinstance(raw, bool):
        return StringValue("true" if raw else "false")
    if isinstance(raw, int):
        return IntegerValue(raw)
    if isinstance(raw, float):
        return FloatValue(raw)
    if isinstance(raw, str):
        if _ISO_DATE_RE.fullmatch(raw.strip()):
            return RawDateValue(raw)
        return StringValue(raw)
    return StringValue(json.dumps(raw, separators=(",", ":"), ensure_ascii=False, default=str))


def parse_record(raw: Mapping[str, Any]) -> Dict[str, FieldValue]:
    """Convierte un objeto JSON completo a un registro tipado."""
    return {str(key): parse_field_value(value) for key, value in raw.items()}
