from typing import Optional

from app.core.config import Settings
from app.core.errors import MissingCredential


def resolve_api_key(user_api_key: Optional[str] = None, default_api_key: Optional[str] = None) -> str:
    """Return the caller's key if given, otherwise the service default."""
    if user_api_key:
        return user_api_key
    if default_api_key:
        return default_api_key
    raise MissingCredential("API key is required")


def default_key_for_origin(settings: Settings, origin: Optional[str]) -> Optional[str]:
    """
    La clave por defecto del servicio solo se ofrece al origen permitido.
    Sin ALLOWED_ORIGIN configurado, cualquier origen puede usarla.
    """
    if not settings.allowed_origin:
        return settings.openai_api_key
    if origin and origin.rstrip("/") == settings.allowed_origin.rstrip("/"):
        return settings.openai_api_key
    return None
