"""
Servicios de aplicacion.

Logica pura reutilizable por los casos de uso.
"""
from app.application.services.record_coercer import coerce_record

__all__ = [
    "coerce_record",
]
