"""
Esquemas de las tablas destino.

Este es el punto donde se declaran las columnas que el servicio escribe y la
clase de coercion de cada una. El DDL real de la base debe coincidir con
estas definiciones: el servicio no gestiona migraciones.

- wide: tabla completa de clientes exportada por el ERP
- narrow: tabla reducida de clientes (code, name, address, branch)
"""
from __future__ import annotations

from typing import Dict

from sqlalchemy import BigInteger, Column, Date, Float, Integer, MetaData, Table, Text
from sqlalchemy.sql import TableClause, column, table
from sqlalchemy.sql.sqltypes import NullType

from app.domain.entities.table_schema import CoercionClass, ColumnSpec, TableSchema


_S = CoercionClass.STRING_TRIMMED
_I = CoercionClass.INTEGER_OR_NULL
_F = CoercionClass.FLOAT_OR_NULL
_D = CoercionClass.DATE_PASSTHROUGH


WIDE_SCHEMA = TableSchema(
    name="wide",
    columns=(
        ColumnSpec("code", _S),
        ColumnSpec("name", _S),
        ColumnSpec("address", _S),
        ColumnSpec("branch", _S),
        ColumnSpec("district", _S),
        ColumnSpec("state", _S),
        ColumnSpec("software", _S),
        ColumnSpec("mobile", _S),
        ColumnSpec("installationdate", _D),
        ColumnSpec("priority", _I),
        ColumnSpec("directdealing", _S),
        ColumnSpec("route", _S),
        ColumnSpec("amc", _S),
        ColumnSpec("amcamt", _F),
        ColumnSpec("accountcode", _S),
        ColumnSpec("address3", _S),
        ColumnSpec("lictype", _S),
        ColumnSpec("clients", _I),
        ColumnSpec("sp", _S),
        ColumnSpec("nature", _S),
    ),
    chunk_size=100,
)

NARROW_SCHEMA = TableSchema(
    name="narrow",
    columns=(
        ColumnSpec("code", _S),
        ColumnSpec("name", _S),
        ColumnSpec("address", _S),
        ColumnSpec("branch", _S),
    ),
    chunk_size=500,
)

SCHEMAS: Dict[str, TableSchema] = {
    WIDE_SCHEMA.name: WIDE_SCHEMA,
    NARROW_SCHEMA.name: NARROW_SCHEMA,
}

# Tipos de bind para INSERT. Las fechas van sin tipo para que el driver
# envie el texto tal cual y Postgres haga el cast a date/timestamp.
_BIND_TYPES = {
    _S: Text,
    _I: BigInteger,
    _F: Float,
    _D: NullType,
}

# Tipos para DDL (solo scripts/init_db.py y tests)
_DDL_TYPES = {
    _S: Text,
    _I: BigInteger,
    _F: Float,
    _D: Date,
}


def get_table_schema(name: str) -> TableSchema:
    """Retorna el esquema configurado por nombre ('wide' | 'narrow')."""
    try:
        return SCHEMAS[name]
    except KeyError:
        raise ValueError(
            f"Esquema desconocido '{name}'. Disponibles: {', '.join(sorted(SCHEMAS))}"
        ) from None


def build_table_clause(table_name: str, schema: TableSchema) -> TableClause:
    """
    Construye una referencia liviana a la tabla destino para DELETE/INSERT.

    `table_name` debe venir ya validado por identifier_validator.
    """
    return table(
        table_name,
        *[column(c.name, _BIND_TYPES[c.coercion]()) for c in schema.columns],
    )


def build_table(table_name: str, schema: TableSchema, metadata: MetaData) -> Table:
    """Construye la tabla completa (con tipos DDL) para crearla en desarrollo."""
    return Table(
        table_name,
        metadata,
        Column("id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        *[Column(c.name, _DDL_TYPES[c.coercion], nullable=True) for c in schema.columns],
    )
