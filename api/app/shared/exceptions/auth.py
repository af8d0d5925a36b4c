"""
Excepciones relacionadas con autenticación.
"""
from app.shared.exceptions.base import AppException


class AuthException(AppException):
    """Excepción base para errores de autenticación."""

    def __init__(self, message: str, error_code: str = "AUTH_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=401,
            error_code=error_code,
            details=details
        )


class InvalidApiKeyException(AuthException):
    """La API key del request no coincide con la configurada."""

    def __init__(self, client_host: str = "unknown"):
        super().__init__(
            message="Invalid API key",
            error_code="INVALID_API_KEY",
            details={"client_host": client_host}
        )
