"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import SyncRequestDTO, SyncResponseDTO, ErrorResponseDTO, HealthResponseDTO

__all__ = [
    "SyncRequestDTO",
    "SyncResponseDTO",
    "ErrorResponseDTO",
    "HealthResponseDTO",
]
