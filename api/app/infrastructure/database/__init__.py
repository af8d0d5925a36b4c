"""
Configuración de base de datos.
"""
from app.infrastructure.database.session import Database

__all__ = ["Database"]
