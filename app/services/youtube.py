import re
import logging
from typing import Optional

import requests

from app.schemas.summary import VideoMetadata

logger = logging.getLogger(__name__)

YOUTUBE_URL_RE = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.?be)/.+")

# Orden importante: el patrón canónico (v=) se prueba primero
VIDEO_ID_PATTERNS = (
    re.compile(r"(?:v=|/)([\w-]{11})(?:\?|&|/|$)"),
    re.compile(r"youtu\.be/([\w-]{11})(?:\?|&|$)"),
    re.compile(r"/shorts/([\w-]{11})(?:\?|&|$)"),
)

OEMBED_URL = "https://www.youtube.com/oembed"
THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


def is_valid_youtube_url(url: str) -> bool:
    """Check whether the URL points to youtube.com or youtu.be."""
    if not url:
        return False
    return YOUTUBE_URL_RE.match(url.strip()) is not None


def extract_video_id(url: str) -> Optional[str]:
    """Extract the 11-character video ID from a YouTube URL, or None."""
    if not url:
        return None
    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def fetch_video_metadata(url: str, timeout: float = 10.0) -> VideoMetadata:
    """
    Obtiene miniatura, título y canal del video usando el endpoint oEmbed de YouTube.
    Nunca falla: ante cualquier error devuelve metadatos vacíos.
    """
    video_id = extract_video_id(url)
    if not video_id:
        return VideoMetadata()

    try:
        response = requests.get(
            OEMBED_URL,
            params={
                "url": f"https://www.youtube.com/watch?v={video_id}",
                "format": "json",
            },
            timeout=timeout,
        )
        response.raise_for_status()
        data = response.json()
        return VideoMetadata(
            thumbnail=THUMBNAIL_URL.format(video_id=video_id),
            title=data.get("title") or "Unknown Title",
            channel_name=data.get("author_name") or "Unknown Channel",
        )
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Error extracting YouTube video metadata for {video_id}: {str(e)}")
        return VideoMetadata()
