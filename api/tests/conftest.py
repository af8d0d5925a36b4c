"""
Configuración de fixtures para pytest.

Los tests de integración usan SQLite (aiosqlite) en un archivo temporal, así
varias conexiones del pool ven la misma base y el rollback es observable.
"""
from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy import Column, MetaData, Table, Text, text
from sqlalchemy.ext.asyncio import create_async_engine

from app.core.config import Settings
from app.infrastructure.database.session import Database
from app.infrastructure.sync.table_mappings import NARROW_SCHEMA, build_table


TEST_API_KEY = "test-secret"
TEST_TABLE = "rrc_clients"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings aislados del entorno (no leen .env)."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'sync.db'}",
        API_KEY=TEST_API_KEY,
        SYNC_DEFAULT_TABLE=TEST_TABLE,
        SYNC_SCHEMA="narrow",
        SYNC_CLEAR_MODE="delete",
        LOG_DIR=str(tmp_path / "logs"),
    )


def build_test_table(name: str, metadata: MetaData) -> Table:
    """
    Tabla angosta con `code` NOT NULL: un registro sin code viola la
    restricción y sirve para provocar fallos a mitad del sync.
    """
    return Table(
        name,
        metadata,
        Column("code", Text, nullable=False),
        Column("name", Text),
        Column("address", Text),
        Column("branch", Text),
    )


@pytest.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """
    Database real sobre SQLite con la tabla por defecto, una tabla
    `clients_2024` con el esquema angosto y DDL completo.
    """
    engine = create_async_engine(test_settings.effective_database_url, echo=False)
    metadata = MetaData()
    build_test_table(TEST_TABLE, metadata)
    build_table("clients_2024", NARROW_SCHEMA, metadata)

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    db = Database(engine, pool_timeout=test_settings.DB_POOL_TIMEOUT)
    yield db

    await engine.dispose()


@pytest.fixture
def fetch_rows(database: Database):
    """Lee (code, name, address, branch) de una tabla, ordenado por code."""
    async def _fetch(table_name: str = TEST_TABLE) -> list[tuple]:
        async with database.engine.connect() as conn:
            result = await conn.execute(
                text(f"SELECT code, name, address, branch FROM {table_name} ORDER BY code")
            )
            return [tuple(row) for row in result]
    return _fetch


@pytest.fixture
def count_rows(database: Database):
    async def _count(table_name: str = TEST_TABLE) -> int:
        async with database.engine.connect() as conn:
            result = await conn.execute(text(f"SELECT COUNT(*) FROM {table_name}"))
            return result.scalar_one()
    return _count


@pytest.fixture
async def seeded_database(database: Database) -> Database:
    """Tabla por defecto con dos filas previas al sync."""
    async with database.engine.begin() as conn:
        await conn.execute(
            text(f"INSERT INTO {TEST_TABLE} (code, name, address, branch) VALUES (:c, :n, :a, :b)"),
            [
                {"c": "OLD1", "n": "Viejo 1", "a": "Calle 1", "b": "Norte"},
                {"c": "OLD2", "n": "Viejo 2", "a": "Calle 2", "b": "Sur"},
            ],
        )
    return database


@pytest.fixture
def api_key(test_settings: Settings) -> str:
    return test_settings.API_KEY
