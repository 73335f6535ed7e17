import time
import logging
from typing import Any, Callable, Dict, Optional

from openai import OpenAI

from app.core.config import Settings
from app.core.errors import EmptyContent, InvalidInput, SummarizationFailed
from app.schemas.summary import SummarizationOptions, SummaryFormat, SummaryLength
from app.services.credentials import resolve_api_key
from app.services.documents import extract_required_text
from app.services.options import OptionsInput, resolve_options
from app.services.transcription import TranscriptPipeline
from app.services.youtube import fetch_video_metadata, is_valid_youtube_url

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a summarization expert who extracts key details from long texts."
FALLBACK_SUMMARY = "Could not generate a summary."

# Instrucciones en lenguaje natural para cada opción
LENGTH_INSTRUCTIONS = {
    SummaryLength.SHORT: "Keep it brief: a few sentences covering only the main idea.",
    SummaryLength.STANDARD: "Cover the main points in a few short paragraphs.",
    SummaryLength.LONG: "Be thorough and cover every important point and supporting detail.",
}

FORMAT_INSTRUCTIONS = {
    SummaryFormat.NARRATIVE: "Write it as flowing prose.",
    SummaryFormat.BULLET: "Write it as a list of concise bullet points.",
}


def build_prompt(text: str, options: SummarizationOptions) -> str:
    length = options.length
    fmt = options.format
    return (
        f"Summarize the following text in a {length.value} format, in {fmt.value} style. "
        f"{LENGTH_INSTRUCTIONS[length]} {FORMAT_INSTRUCTIONS[fmt]}\n\n{text}"
    )


def summarize_text(
    text: str,
    options: OptionsInput,
    api_key: Optional[str],
    settings: Settings,
    client_factory: Callable[..., Any] = OpenAI,
) -> str:
    """
    Genera un resumen de un texto utilizando la API de OpenAI.

    Args:
        text: Texto a resumir
        options: Preferencias de resumen (longitud, formato...)
        api_key: Clave de OpenAI ya resuelta
        settings: Configuración del servicio

    Returns:
        El resumen generado, o un texto fijo si la API no devuelve contenido
    """
    api_key = resolve_api_key(api_key)
    resolved = resolve_options(options)
    start_time = time.monotonic()

    try:
        logger.info(f"Summarizing text ({len(text)} characters) with {settings.summary_model}")
        client = client_factory(api_key=api_key)
        response = client.chat.completions.create(
            model=settings.summary_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(text, resolved)},
            ],
            max_tokens=settings.summary_max_tokens,
        )
    except Exception as e:
        logger.error(f"Summarization failed after {time.monotonic() - start_time:.1f}s: {str(e)}")
        raise SummarizationFailed(f"Failed to summarize text: {str(e)}") from e

    logger.info(f"Summarization finished in {time.monotonic() - start_time:.1f}s")
    choices = getattr(response, "choices", None) or []
    if not choices or choices[0].message is None:
        return FALLBACK_SUMMARY
    return choices[0].message.content or FALLBACK_SUMMARY


def summarize_youtube_video(
    video_url: str,
    options: OptionsInput,
    user_api_key: Optional[str],
    default_api_key: Optional[str],
    settings: Settings,
    pipeline: TranscriptPipeline,
    client_factory: Callable[..., Any] = OpenAI,
) -> Dict[str, Any]:
    """
    Resume un video de YouTube, ya sea con sus subtítulos o transcribiendo el audio.

    Returns:
        Diccionario con la transcripción, el resumen, el origen de la
        transcripción, las opciones resueltas y los metadatos del video
    """
    video_url = (video_url or "").strip()
    if not is_valid_youtube_url(video_url):
        raise InvalidInput("Invalid YouTube URL")

    resolved = resolve_options(options)
    # Se valida la clave antes de cualquier descarga
    api_key = resolve_api_key(user_api_key, default_api_key)

    logger.info(f"Fetching transcript for video: {video_url}")
    result = pipeline.acquire(video_url, api_key, settings.max_tokens_for(resolved.model.value))
    transcript = result.transcript.strip()
    if not transcript:
        raise EmptyContent("Could not extract a transcript from the video.")

    summary = summarize_text(transcript, resolved, api_key, settings, client_factory)
    metadata = fetch_video_metadata(video_url, settings.metadata_timeout)

    return {
        "transcript": transcript,
        "summary": summary,
        "video_id": result.video_id,
        "video_url": video_url,
        "source": result.source,
        "options": resolved,
        "metadata": metadata,
    }


def summarize_file(
    filename: str,
    content: bytes,
    options: OptionsInput,
    user_api_key: Optional[str],
    default_api_key: Optional[str],
    settings: Settings,
    client_factory: Callable[..., Any] = OpenAI,
) -> Dict[str, Any]:
    """Resume el contenido de un archivo subido (PDF, DOCX o TXT)."""
    logger.info(f"Processing file: {filename} ({len(content)} bytes)")
    resolved = resolve_options(options)
    text = extract_required_text(filename, content)
    api_key = resolve_api_key(user_api_key, default_api_key)

    summary = summarize_text(text, resolved, api_key, settings, client_factory)
    return {
        "summary": summary,
        "filename": filename,
        "options": resolved,
    }
