"""
Casos de uso de la aplicacion.
"""
from .sync_use_cases import SnapshotSyncUseCases

__all__ = ["SnapshotSyncUseCases"]
