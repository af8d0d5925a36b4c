"""
Script para crear la tabla destino en una base de desarrollo.

No es un sistema de migraciones: solo ejecuta CREATE TABLE IF NOT EXISTS con
las columnas del esquema activo (SYNC_SCHEMA). En produccion el DDL lo
gestiona el dueño de la base.

Uso:
  python scripts/init_db.py
  python scripts/init_db.py --table clients_2024 --schema wide
"""
import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger
from sqlalchemy import MetaData

_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))
load_dotenv(_API_ROOT / ".env", override=False)

from app.core.config import Settings
from app.infrastructure.database.session import Database
from app.infrastructure.sync.table_mappings import build_table, get_table_schema
from app.shared.utils.identifier_validator import is_valid_identifier


async def main(table_name: str, schema_name: str) -> None:
    """Crea la tabla si no existe."""
    if not is_valid_identifier(table_name):
        raise SystemExit(f"Nombre de tabla invalido: {table_name!r}")

    settings = Settings()
    database = Database.from_settings(settings)
    metadata = MetaData()
    table = build_table(table_name, get_table_schema(schema_name), metadata)

    logger.info(f"Creando tabla {table_name} (esquema {schema_name}) si no existe...")
    try:
        async with database.engine.begin() as conn:
            await conn.run_sync(metadata.create_all, tables=[table], checkfirst=True)
        logger.success("Tabla lista")
    except Exception as e:
        logger.error(f"Error al crear la tabla: {e}")
        raise
    finally:
        await database.dispose()


if __name__ == "__main__":
    defaults = Settings()
    parser = argparse.ArgumentParser()
    parser.add_argument("--table", default=defaults.SYNC_DEFAULT_TABLE)
    parser.add_argument("--schema", default=defaults.SYNC_SCHEMA, choices=["wide", "narrow"])
    args = parser.parse_args()
    asyncio.run(main(args.table, args.schema))
