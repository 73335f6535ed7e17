import os
import uuid
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def generate_prefix() -> str:
    """Genera un prefijo único para los archivos temporales de una petición."""
    return uuid.uuid4().hex


def cleanup_files(directory: PathLike, prefix: str) -> int:
    """
    Elimina todos los archivos del directorio cuyo nombre empieza por el prefijo.

    Es best-effort: los errores se registran pero nunca se propagan.

    Returns:
        Número de archivos eliminados
    """
    if not prefix:
        return 0

    removed = 0
    try:
        entries = list(os.scandir(directory))
    except OSError as e:
        logger.warning(f"No se pudo listar {directory} para limpieza: {str(e)}")
        return 0

    for entry in entries:
        if not entry.name.startswith(prefix) or not entry.is_file():
            continue
        try:
            os.remove(entry.path)
            removed += 1
        except OSError as e:
            logger.warning(f"No se pudo eliminar el archivo temporal {entry.path}: {str(e)}")

    if removed:
        logger.info(f"Eliminados {removed} archivos temporales con prefijo {prefix}")
    return removed


@dataclass(frozen=True)
class AudioArtifact:
    """Audio descargado para una única petición; se borra al salir del bloque ``with``."""

    path: Path
    prefix: str
    directory: Path

    def cleanup(self) -> int:
        return cleanup_files(self.directory, self.prefix)

    def __enter__(self) -> "AudioArtifact":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
