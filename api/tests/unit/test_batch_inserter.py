"""
Tests unitarios para la insercion por lotes.

Verifica que cada lote genera exactamente un INSERT multi-fila con un
parametro por (fila, columna), y que los lotes respetan el orden de entrada.
"""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from app.infrastructure.sync.batch_inserter import BatchInserter, iter_chunks
from app.infrastructure.sync.table_mappings import NARROW_SCHEMA, WIDE_SCHEMA, build_table_clause


def _rows(n: int, width: int = 4) -> list[tuple]:
    return [tuple(f"r{i}c{j}" for j in range(width)) for i in range(n)]


def _statements(conn: AsyncMock) -> list:
    return [call.args[0] for call in conn.execute.await_args_list]


def test_iter_chunks_sizes() -> None:
    sizes = [len(c) for c in iter_chunks(_rows(1234), 500)]

    assert sizes == [500, 500, 234]


def test_iter_chunks_rejects_invalid_size() -> None:
    with pytest.raises(ValueError):
        list(iter_chunks(_rows(3), 0))


@pytest.mark.asyncio
async def test_1234_records_issue_three_statements() -> None:
    conn = AsyncMock()
    target = build_table_clause("rrc_clients", NARROW_SCHEMA)

    inserted = await BatchInserter(500).insert_all(conn, target, _rows(1234))

    assert inserted == 1234
    statements = _statements(conn)
    assert len(statements) == 3
    param_counts = [len(stmt.compile().params) for stmt in statements]
    assert param_counts == [500 * 4, 500 * 4, 234 * 4]


@pytest.mark.asyncio
async def test_chunks_preserve_input_order() -> None:
    conn = AsyncMock()
    target = build_table_clause("rrc_clients", NARROW_SCHEMA)
    rows = _rows(5)

    await BatchInserter(2).insert_all(conn, target, rows)

    first_codes = [
        stmt.compile().params["code_m0"] for stmt in _statements(conn)
    ]
    assert first_codes == ["r0c0", "r2c0", "r4c0"]


@pytest.mark.asyncio
async def test_wide_schema_statement_targets_all_columns() -> None:
    conn = AsyncMock()
    target = build_table_clause("clients_2024", WIDE_SCHEMA)

    await BatchInserter(WIDE_SCHEMA.chunk_size).insert_all(conn, target, _rows(150, width=20))

    statements = _statements(conn)
    assert len(statements) == 2
    sql = str(statements[0].compile())
    assert sql.startswith("INSERT INTO clients_2024 (code, name, address, branch, district")
    assert len(statements[1].compile().params) == 50 * 20


@pytest.mark.asyncio
async def test_empty_snapshot_issues_no_statement() -> None:
    conn = AsyncMock()
    target = build_table_clause("rrc_clients", NARROW_SCHEMA)

    inserted = await BatchInserter(500).insert_all(conn, target, [])

    assert inserted == 0
    conn.execute.assert_not_awaited()
