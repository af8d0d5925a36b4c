"""
Dependencias para inyeccion de recursos y casos de uso.

Los recursos de proceso (settings, Database) viven en `app.state`; los tests
pueden construir la app con sustitutos o usar `dependency_overrides`.
"""
import json
from typing import Any, Dict

from fastapi import Depends, Request
from loguru import logger

from app.application.use_cases.sync_use_cases import SnapshotSyncUseCases
from app.core.config import Settings
from app.core.security import ApiKeyGate
from app.infrastructure.database.session import Database
from app.shared.exceptions.domain import PayloadTooLargeException


def get_settings(request: Request) -> Settings:
    """Configuracion con la que se construyo la aplicacion."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """Handle del pool creado en el startup."""
    return request.app.state.database


def get_api_key_gate(settings: Settings = Depends(get_settings)) -> ApiKeyGate:
    return ApiKeyGate(settings.API_KEY)


def get_sync_use_cases(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> SnapshotSyncUseCases:
    """
    Dependencia para obtener el orquestador de sincronizacion.

    Returns:
        SnapshotSyncUseCases: Instancia ligada al pool del proceso
    """
    return SnapshotSyncUseCases(database, settings)


async def read_json_object(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Lee el body como objeto JSON.

    Un body ilegible o que no es objeto se trata como `{}`: asi el request
    falla por autenticacion antes de cualquier validacion de forma.

    Raises:
        PayloadTooLargeException: Si el body supera SYNC_MAX_BODY_MB
    """
    limit = settings.max_body_bytes
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        _reject_oversized(request, limit)

    # Sin Content-Length (chunked) se corta apenas se pasa del limite
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            _reject_oversized(request, limit)

    try:
        payload = json.loads(body) if body else {}
    except (ValueError, RecursionError):
        # JSONDecodeError, UnicodeDecodeError, enteros de mas de 4300 digitos
        return {}
    return payload if isinstance(payload, dict) else {}


def _reject_oversized(request: Request, limit: int) -> None:
    logger.warning(f"Body rechazado desde {client_host(request)}: supera {limit} bytes")
    raise PayloadTooLargeException(limit)


def client_host(request: Request) -> str:
    """Origen de red del caller (para logs de auditoria)."""
    return request.client.host if request.client else "unknown"
