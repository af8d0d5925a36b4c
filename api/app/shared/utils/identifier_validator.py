"""
Validacion de nombres de tabla enviados por el cliente.

Los identificadores no se pueden parametrizar en SQL, asi que esta lista
blanca es la unica defensa contra inyeccion en la ruta de tabla dinamica.
"""
import re
from typing import Any

from loguru import logger


# Solo ASCII: letras, digitos y guion bajo. Sin re.IGNORECASE ni \w (unicode).
_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_]+")


def is_valid_identifier(candidate: Any) -> bool:
    """True si `candidate` es un str compuesto solo por [A-Za-z0-9_]."""
    return isinstance(candidate, str) and _IDENTIFIER_RE.fullmatch(candidate) is not None


def resolve_table_name(candidate: Any, default: str) -> str:
    """
    Retorna `candidate` sin cambios si pasa la lista blanca; si no, `default`.

    Args:
        candidate: Nombre de tabla enviado por el cliente (puede faltar)
        default: Tabla configurada para el despliegue

    Returns:
        str: Nombre de tabla a usar
    """
    if candidate is None:
        return default
    if is_valid_identifier(candidate):
        return candidate
    logger.warning(f"Nombre de tabla rechazado {candidate!r}; se usa '{default}'")
    return default
