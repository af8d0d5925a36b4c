"""
CLI: reemplaza la tabla destino con un snapshot leido de un archivo JSON.

Usa el mismo orquestador que el endpoint (misma transaccion, coercion y
lotes), sin pasar por HTTP ni por la API key. Sirve para reprocesar a mano
un export guardado.

El archivo puede ser un arreglo de registros o un objeto con clave "data".

Uso:
  python scripts/sync_from_file.py export.json
  python scripts/sync_from_file.py export.json --table rrc_clients --truncate
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))
load_dotenv(_API_ROOT / ".env", override=False)

from app.application.use_cases.sync_use_cases import SnapshotSyncUseCases
from app.core.config import Settings
from app.domain.entities.field_value import parse_record
from app.domain.entities.sync import ClearMode, SyncRequest, SyncResult
from app.infrastructure.database.session import Database
from app.shared.exceptions.base import AppException


def _load_records(path: Path) -> list[dict]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("data")
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise SystemExit(f"{path}: se esperaba un arreglo de objetos")
    return raw


async def run(path: Path, table: str | None, truncate: bool) -> SyncResult:
    settings = Settings()
    database = Database.from_settings(settings)
    use_cases = SnapshotSyncUseCases(database, settings)

    request = SyncRequest(
        records=[parse_record(item) for item in _load_records(path)],
        credential="",
        target_table_name=table,
        clear_mode=ClearMode.TRUNCATE_RESET if truncate else ClearMode(settings.SYNC_CLEAR_MODE),
    )
    try:
        return await use_cases.execute(request)
    except AppException as e:
        return SyncResult.failed(e.message, table)
    finally:
        await database.dispose()


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("file", type=Path, help="Archivo JSON con el snapshot")
    parser.add_argument("--table", default=None, help="Tabla destino (default: SYNC_DEFAULT_TABLE)")
    parser.add_argument("--truncate", action="store_true", help="Usar TRUNCATE ... RESTART IDENTITY")
    args = parser.parse_args()

    result = asyncio.run(run(args.file, args.table, args.truncate))
    if not result.success:
        logger.error(f"Sync fallido: {result.error_message}")
        return 1

    logger.success(f"Sync OK: {result.inserted_count} filas en {result.table_name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
