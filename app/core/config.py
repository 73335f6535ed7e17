import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Cargar variables de entorno
load_dotenv()

# Presupuesto de tokens de contexto por proveedor
DEFAULT_MAX_TOKENS = 15000


def _split_list(value: Optional[str], default: List[str]) -> List[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    """Configuración del servicio, construida una sola vez al arrancar el proceso."""

    model_config = ConfigDict(frozen=True)

    app_version: str = "1.0.0"
    openai_api_key: Optional[str] = None
    # Si está definido, solo este origen puede usar la clave por defecto del servicio
    allowed_origin: Optional[str] = None
    provider_max_tokens: Dict[str, int] = Field(default_factory=lambda: {"openai": DEFAULT_MAX_TOKENS})
    summary_model: str = "gpt-4o"
    summary_max_tokens: int = 150
    transcription_model: str = "whisper-1"
    transcript_languages: List[str] = Field(default_factory=lambda: ["en"])
    download_dir: Path = Path("downloads")
    audio_format: str = "mp3"
    metadata_timeout: float = 10.0
    log_level: str = "INFO"

    def max_tokens_for(self, provider: str) -> int:
        return self.provider_max_tokens.get(provider, DEFAULT_MAX_TOKENS)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            allowed_origin=os.getenv("ALLOWED_ORIGIN") or None,
            provider_max_tokens={
                "openai": int(os.getenv("OPENAI_MAX_TOKENS", DEFAULT_MAX_TOKENS)),
            },
            summary_model=os.getenv("SUMMARY_MODEL", "gpt-4o"),
            summary_max_tokens=int(os.getenv("SUMMARY_MAX_TOKENS", 150)),
            transcription_model=os.getenv("TRANSCRIPTION_MODEL", "whisper-1"),
            transcript_languages=_split_list(os.getenv("TRANSCRIPT_LANGUAGES"), ["en"]),
            metadata_timeout=float(os.getenv("METADATA_TIMEOUT", 10.0)),
            download_dir=Path(os.getenv("DOWNLOAD_DIR", Path.cwd() / "downloads")),
            audio_format=os.getenv("AUDIO_FORMAT", "mp3"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
