"""
Endpoint de sincronizacion de snapshots.
Reemplaza el contenido de la tabla destino con el arreglo recibido.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from app.application.dto.sync_dto import ErrorResponseDTO, SyncRequestDTO, SyncResponseDTO
from app.application.use_cases.sync_use_cases import SnapshotSyncUseCases
from app.api.v1.dependencies.use_case_deps import (
    client_host,
    get_api_key_gate,
    get_sync_use_cases,
    read_json_object,
)
from app.core.security import ApiKeyGate


router = APIRouter(tags=["Sync"])


@router.post(
    "/sync",
    response_model=SyncResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Reemplazar la tabla destino con un snapshot",
    responses={
        401: {"model": ErrorResponseDTO, "description": "API key invalida"},
        400: {"model": ErrorResponseDTO, "description": "`data` no es un arreglo"},
        413: {"model": ErrorResponseDTO, "description": "Body demasiado grande"},
        500: {"model": ErrorResponseDTO, "description": "Fallo transaccional (con rollback)"},
    },
)
async def sync_snapshot(
    request: Request,
    payload: Dict[str, Any] = Depends(read_json_object),
    gate: ApiKeyGate = Depends(get_api_key_gate),
    use_cases: SnapshotSyncUseCases = Depends(get_sync_use_cases),
) -> SyncResponseDTO:
    """
    Sincroniza un snapshot completo.

    Orden de validacion:
    1. API key (401) - antes de mirar el resto del body
    2. Forma del payload (400) - antes de abrir transaccion
    3. Transaccion: limpiar + insertar por lotes + commit (500 con rollback)
    """
    gate.verify(payload.get("apiKey"), client_host(request))

    dto = SyncRequestDTO.from_payload(payload)
    clear_mode = use_cases.resolve_clear_mode(dto.truncate_first)

    result = await use_cases.execute(dto.to_domain(clear_mode))

    return SyncResponseDTO(success=True, inserted_count=result.inserted_count)
