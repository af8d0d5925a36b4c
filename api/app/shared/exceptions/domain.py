"""
Excepciones relacionadas con la validación del payload de sincronización.
"""
from app.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de validación de requests."""

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class InvalidDataFormatException(DomainException):
    """El campo `data` falta o no es un arreglo de objetos."""

    def __init__(self, reason: str = ""):
        super().__init__(
            message="Invalid data format",
            error_code="INVALID_DATA_FORMAT",
            details={"reason": reason} if reason else None
        )


class PayloadTooLargeException(AppException):
    """El body supera el límite configurado."""

    def __init__(self, limit_bytes: int):
        super().__init__(
            message="Payload too large",
            status_code=413,
            error_code="PAYLOAD_TOO_LARGE",
            details={"limit_bytes": limit_bytes}
        )
