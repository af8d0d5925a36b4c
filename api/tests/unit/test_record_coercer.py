"""
Tests unitarios para la coercion de valores por clase de columna.

Verifica:
- StringTrimmed recorta y convierte vacio en NULL
- IntegerOrNull / FloatOrNull parsean texto y caen a NULL si es invalido
- El cero se conserva (no se confunde con "faltante")
- DatePassthrough no modifica el valor
"""
from __future__ import annotations

import json

import pytest

from app.application.services.record_coercer import (
    coerce_record,
    to_date_passthrough,
    to_float_or_null,
    to_integer_or_null,
    to_string_trimmed,
)
from app.domain.entities.field_value import (
    NULL,
    FloatValue,
    IntegerValue,
    RawDateValue,
    StringValue,
    parse_record,
)
from app.infrastructure.sync.table_mappings import NARROW_SCHEMA, WIDE_SCHEMA


class TestStringTrimmed:

    def test_trims_whitespace(self) -> None:
        assert to_string_trimmed(StringValue("  Acme  ")) == "Acme"

    @pytest.mark.parametrize("value", [NULL, StringValue(""), StringValue("   \t")])
    def test_missing_or_blank_is_null(self, value) -> None:
        assert to_string_trimmed(value) is None

    def test_numbers_become_text(self) -> None:
        assert to_string_trimmed(IntegerValue(42)) == "42"
        assert to_string_trimmed(FloatValue(3.0)) == "3"
        assert to_string_trimmed(FloatValue(2.5)) == "2.5"

    def test_date_text_is_kept(self) -> None:
        assert to_string_trimmed(RawDateValue("2024-01-01")) == "2024-01-01"


class TestIntegerOrNull:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (StringValue("42"), 42),
            (StringValue(" -7 "), -7),
            (StringValue("0"), 0),
            (StringValue("7.9"), 7),
            (IntegerValue(5), 5),
            (IntegerValue(0), 0),
            (FloatValue(2.5), 2.5),
        ],
    )
    def test_parses_or_passes_through(self, value, expected) -> None:
        assert to_integer_or_null(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            NULL,
            StringValue(""),
            StringValue("   "),
            StringValue("abc"),
            StringValue("42abc"),
            StringValue("1_000"),
            StringValue("nan"),
            StringValue("inf"),
            StringValue("true"),
            RawDateValue("2024-01-01"),
            FloatValue(float("nan")),
            FloatValue(float("inf")),
        ],
    )
    def test_invalid_input_is_null(self, value) -> None:
        assert to_integer_or_null(value) is None


class TestFloatOrNull:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (StringValue("3.14"), 3.14),
            (StringValue("0"), 0.0),
            (StringValue("0.0"), 0.0),
            (StringValue("1e3"), 1000.0),
            (IntegerValue(2), 2),
            (FloatValue(1.5), 1.5),
        ],
    )
    def test_parses_or_passes_through(self, value, expected) -> None:
        assert to_float_or_null(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            NULL,
            StringValue(""),
            StringValue("x1"),
            StringValue("NaN"),
            StringValue("-Infinity"),
            FloatValue(float("nan")),
            FloatValue(float("-inf")),
        ],
    )
    def test_invalid_input_is_null(self, value) -> None:
        assert to_float_or_null(value) is None


class TestDatePassthrough:

    def test_forwards_unmodified(self) -> None:
        assert to_date_passthrough(RawDateValue("2024-03-01T10:00:00Z")) == "2024-03-01T10:00:00Z"
        assert to_date_passthrough(StringValue(" 01/03/2024 ")) == " 01/03/2024 "
        assert to_date_passthrough(IntegerValue(20240301)) == 20240301

    def test_null_stays_null(self) -> None:
        assert to_date_passthrough(NULL) is None


def test_coerce_record_follows_column_order_and_ignores_extra_keys() -> None:
    record = parse_record({"branch": " B ", "code": "1", "unknown": "x", "name": "A"})

    assert coerce_record(record, NARROW_SCHEMA) == ("1", "A", None, "B")


def test_coerce_record_wide_schema() -> None:
    record = parse_record(
        {
            "code": "  C-1 ",
            "name": "Acme",
            "installationdate": "2023-07-15",
            "priority": "42",
            "amcamt": "3.14",
            "clients": "",
            "mobile": 9876543210,
        }
    )

    values = dict(zip(WIDE_SCHEMA.column_names, coerce_record(record, WIDE_SCHEMA)))

    assert len(values) == 20
    assert values["code"] == "C-1"
    assert values["installationdate"] == "2023-07-15"
    assert values["priority"] == 42
    assert values["amcamt"] == 3.14
    assert values["clients"] is None
    assert values["mobile"] == "9876543210"
    assert values["district"] is None


def test_json_non_finite_literals_become_null() -> None:
    record = parse_record(json.loads('{"code": "1", "amcamt": NaN, "priority": Infinity}'))

    values = dict(zip(WIDE_SCHEMA.column_names, coerce_record(record, WIDE_SCHEMA)))

    assert values["amcamt"] is None
    assert values["priority"] is None


def test_coercion_is_deterministic() -> None:
    record = parse_record({"code": " 9 ", "name": None})

    assert coerce_record(record, NARROW_SCHEMA) == coerce_record(record, NARROW_SCHEMA)
