"""
Autenticación por clave compartida (API key).
"""
import hmac
from typing import Any

from loguru import logger

from app.shared.exceptions.auth import InvalidApiKeyException


def _encode(value: str) -> bytes:
    # JSON admite surrogates sueltos ("\ud800") que UTF-8 estricto no codifica
    return value.encode("utf-8", "surrogatepass")


class ApiKeyGate:
    """
    Valida la API key del request contra la configurada.

    Es una decisión terminal por request: si falla, nada más del payload se
    inspecciona. Con la clave configurada vacía se rechaza todo.
    """

    def __init__(self, api_key: str):
        self._api_key = _encode(api_key) if api_key else b""

    def is_authorized(self, credential: Any) -> bool:
        if not self._api_key or not isinstance(credential, str):
            return False
        return hmac.compare_digest(_encode(credential), self._api_key)

    def verify(self, credential: Any, client_host: str = "unknown") -> None:
        """
        Raises:
            InvalidApiKeyException: Si la credencial falta o no coincide
        """
        if not self.is_authorized(credential):
            logger.warning(f"API key invalida desde {client_host}")
            raise InvalidApiKeyException(client_host)
