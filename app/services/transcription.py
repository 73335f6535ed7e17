import time
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

import yt_dlp
from openai import OpenAI
from youtube_transcript_api import NoTranscriptFound, YouTubeTranscriptApi

from app.core.config import Settings
from app.core.errors import AudioDownloadFailed, TranscriptionFailed
from app.schemas.summary import TranscriptSource
from app.services.temp_files import AudioArtifact, cleanup_files, generate_prefix
from app.services.youtube import extract_video_id

logger = logging.getLogger(__name__)

# Relación aproximada caracteres/token usada para recortar transcripciones
CHARS_PER_TOKEN = 4

# Idioma fijo para la transcripción de audio
TRANSCRIPTION_LANGUAGE = "en"


@dataclass(frozen=True)
class TranscriptOutcome:
    """Result of the direct transcript attempt: either a transcript or the reason it failed."""

    transcript: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.transcript is not None

    @classmethod
    def succeeded(cls, transcript: str) -> "TranscriptOutcome":
        return cls(transcript=transcript)

    @classmethod
    def failed(cls, reason: str) -> "TranscriptOutcome":
        return cls(error=reason)


@dataclass(frozen=True)
class TranscriptResult:
    transcript: str
    source: TranscriptSource
    video_id: Optional[str] = None


def select_transcript(transcript_list, video_id: str, languages: Iterable[str]):
    """
    Pick a caption track: the requested languages first, then any
    auto-generated track, then the first one available.
    """
    languages = list(languages)
    try:
        return transcript_list.find_transcript(languages)
    except NoTranscriptFound:
        logger.info(f"No transcript in {languages} for {video_id}, looking for alternatives")

    available_transcripts = list(transcript_list)
    for transcript in available_transcripts:
        if transcript.is_generated:
            logger.info(f"Using auto-generated transcript in {transcript.language_code}")
            return transcript

    if available_transcripts:
        transcript = available_transcripts[0]
        logger.info(f"Using first available transcript in {transcript.language_code}")
        return transcript

    raise NoTranscriptFound(video_id, languages, transcript_list)


def fetch_transcript_segments(video_id: str, languages: Iterable[str]) -> List[str]:
    """Fetch the best caption track of a video and return the text of each segment."""
    transcript_list = YouTubeTranscriptApi().list(video_id)
    transcript_data = select_transcript(transcript_list, video_id, languages).fetch()

    segments = []
    for entry in transcript_data:
        # Los segmentos pueden llegar como diccionarios o como objetos con atributos
        if isinstance(entry, dict):
            segments.append(entry.get('text', ''))
        else:
            segments.append(getattr(entry, 'text', ''))
    return segments


def run_yt_dlp(video_url: str, ydl_opts: Dict[str, Any]) -> None:
    with yt_dlp.YoutubeDL(ydl_opts) as ydl:
        ydl.download([video_url])


def build_ydl_options(output_template: str, audio_format: str) -> Dict[str, Any]:
    """Audio-only download options; certificate checks are skipped since videos are public."""
    return {
        "format": "bestaudio/best",
        "outtmpl": output_template,
        "postprocessors": [{
            "key": "FFmpegExtractAudio",
            "preferredcodec": audio_format,
        }],
        "prefer_free_formats": True,
        "nocheckcertificate": True,
        "no_warnings": True,
        "quiet": True,
        "noplaylist": True,
    }


def join_segments(segments: Iterable[str]) -> str:
    cleaned = (segment.strip() for segment in segments if segment)
    return " ".join(text for text in cleaned if text)


def truncate_words(text: str, max_tokens: int) -> str:
    """Keep the first ``max_tokens // 4`` words of the text."""
    safe_length = max_tokens // CHARS_PER_TOKEN
    words = text.split()
    if len(words) > safe_length:
        logger.info(f"Transcript too long ({len(words)} words), truncating to {safe_length} words")
    return " ".join(words[:safe_length])


class TranscriptPipeline:
    """
    Obtains the transcript of a YouTube video.

    The captions are fetched directly when the URL has a video ID. If that is
    not possible, the audio is downloaded with yt-dlp and transcribed with
    Whisper; the downloaded files are always removed afterwards.
    """

    def __init__(
        self,
        settings: Settings,
        fetch_segments: Callable[[str, Iterable[str]], List[str]] = fetch_transcript_segments,
        download_runner: Callable[[str, Dict[str, Any]], None] = run_yt_dlp,
        client_factory: Callable[..., Any] = OpenAI,
    ):
        self.settings = settings
        self.fetch_segments = fetch_segments
        self.download_runner = download_runner
        self.client_factory = client_factory

    def fetch_direct(self, video_id: str, max_tokens: int) -> TranscriptOutcome:
        try:
            segments = self.fetch_segments(video_id, self.settings.transcript_languages)
        except Exception as e:
            return TranscriptOutcome.failed(f"Could not fetch transcript from YouTube: {str(e)}")

        transcript = truncate_words(join_segments(segments), max_tokens)
        if not transcript:
            return TranscriptOutcome.failed("YouTube returned an empty transcript")
        return TranscriptOutcome.succeeded(transcript)

    def download_audio(self, video_url: str) -> AudioArtifact:
        """
        Download the audio track of a video into the download directory.

        Raises:
            AudioDownloadFailed: if yt-dlp fails or no audio file was produced
        """
        directory = Path(self.settings.download_dir)
        prefix = generate_prefix()
        audio_format = self.settings.audio_format
        audio_path = directory / f"{prefix}.{audio_format}"
        ydl_opts = build_ydl_options(str(directory / f"{prefix}.%(ext)s"), audio_format)

        start_time = time.monotonic()
        logger.info(f"Downloading audio for {video_url}")
        try:
            directory.mkdir(parents=True, exist_ok=True)
            self.download_runner(video_url, ydl_opts)
        except Exception as e:
            cleanup_files(directory, prefix)
            logger.error(f"Error downloading audio after {time.monotonic() - start_time:.1f}s: {str(e)}")
            raise AudioDownloadFailed(f"Failed to download audio: {str(e)}") from e

        if not audio_path.exists():
            cleanup_files(directory, prefix)
            raise AudioDownloadFailed("Failed to download audio: audio file was not created.")

        logger.info(f"Downloaded audio to {audio_path} in {time.monotonic() - start_time:.1f}s")
        return AudioArtifact(path=audio_path, prefix=prefix, directory=directory)

    def transcribe_audio(self, artifact: AudioArtifact, api_key: str) -> str:
        """
        Transcribe a downloaded audio file with the speech-to-text API.

        Raises:
            TranscriptionFailed: on any service or file error, or an empty result
        """
        start_time = time.monotonic()
        logger.info(f"Transcribing audio {artifact.path.name}")
        try:
            client = self.client_factory(api_key=api_key)
            with open(artifact.path, "rb") as audio_file:
                response = client.audio.transcriptions.create(
                    file=audio_file,
                    model=self.settings.transcription_model,
                    language=TRANSCRIPTION_LANGUAGE,
                    response_format="json",
                )
        except Exception as e:
            logger.error(f"Transcription failed after {time.monotonic() - start_time:.1f}s: {str(e)}")
            raise TranscriptionFailed(f"Failed to transcribe audio: {str(e)}") from e

        text = (getattr(response, "text", None) or "").strip()
        if not text:
            raise TranscriptionFailed("Failed to transcribe audio: the transcription is empty.")

        logger.info(f"Transcription finished in {time.monotonic() - start_time:.1f}s")
        return text

    def transcribe_from_audio(self, video_url: str, api_key: str) -> str:
        artifact = self.download_audio(video_url)
        with artifact:
            return self.transcribe_audio(artifact, api_key)

    def acquire(self, video_url: str, api_key: str, max_tokens: Optional[int] = None) -> TranscriptResult:
        """
        Get the transcript of a video, falling back to audio transcription.

        Args:
            video_url: URL of the YouTube video
            api_key: Resolved key for the speech-to-text service
            max_tokens: Token budget used to truncate fetched captions

        Returns:
            The transcript with the branch that produced it
        """
        if max_tokens is None:
            max_tokens = self.settings.max_tokens_for("openai")

        video_id = extract_video_id(video_url)
        if video_id is None:
            logger.info(f"No video ID found in {video_url}, falling back to audio download")
        else:
            outcome = self.fetch_direct(video_id, max_tokens)
            if outcome.ok:
                return TranscriptResult(outcome.transcript, TranscriptSource.CAPTIONS, video_id)
            logger.warning(f"Direct transcript fetch failed for {video_id}, falling back to audio download: {outcome.error}")

        transcript = self.transcribe_from_audio(video_url, api_key)
        return TranscriptResult(transcript, TranscriptSource.AUDIO, video_id)
