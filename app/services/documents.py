import io
import os
import logging
from typing import Callable, Dict

import docx
import pdfplumber

from app.core.errors import EmptyContent, InvalidInput, UnsupportedFormat

logger = logging.getLogger(__name__)


def extract_plain_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def extract_pdf_text(content: bytes) -> str:
    """Extrae el texto de todas las páginas de un PDF."""
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        return "\n".join((page.extract_text() or "") for page in pdf.pages)


def extract_docx_text(content: bytes) -> str:
    """Extrae el texto de los párrafos de un documento DOCX."""
    document = docx.Document(io.BytesIO(content))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


# Extensión -> extractor
EXTRACTORS: Dict[str, Callable[[bytes], str]] = {
    ".txt": extract_plain_text,
    ".pdf": extract_pdf_text,
    ".docx": extract_docx_text,
}


def extract_text(filename: str, content: bytes) -> str:
    """
    Extrae el texto de un archivo subido según su extensión.

    Args:
        filename: Nombre original del archivo (se usa su extensión)
        content: Bytes del archivo

    Returns:
        El texto extraído, sin recortar

    Raises:
        UnsupportedFormat: si la extensión no es .txt, .pdf ni .docx
        InvalidInput: si el archivo no se puede leer
    """
    ext = os.path.splitext(filename or "")[1].lower()
    extractor = EXTRACTORS.get(ext)
    if extractor is None:
        raise UnsupportedFormat("Unsupported file format. Only PDF, TXT, and DOCX are allowed.")

    try:
        return extractor(content)
    except Exception as e:
        logger.warning(f"No se pudo leer el archivo {filename}: {str(e)}")
        raise InvalidInput(f"Could not read {ext[1:].upper()} file: {str(e)}") from e


def extract_required_text(filename: str, content: bytes) -> str:
    """Like extract_text, but trimmed and guaranteed non-empty."""
    text = extract_text(filename, content).strip()
    if not text:
        raise EmptyContent("Could not extract text from the file.")
    return text
