from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Optional


class SummaryLength(str, Enum):
    SHORT = "short"
    STANDARD = "standard"
    LONG = "long"


class SummaryFormat(str, Enum):
    NARRATIVE = "narrative"
    BULLET = "bullet"


class SummarizationModel(str, Enum):
    OPENAI = "openai"


class SummarizationSpeed(str, Enum):
    SLOW = "slow"
    FAST = "fast"


class TranscriptSource(str, Enum):
    CAPTIONS = "captions"
    AUDIO = "audio"


class SummarizationOptionsRequest(BaseModel):
    """Preferencias enviadas por el usuario; cualquier campo puede faltar."""
    length: Optional[SummaryLength] = None
    format: Optional[SummaryFormat] = None
    listen: Optional[bool] = None
    model: Optional[SummarizationModel] = None
    speed: Optional[SummarizationSpeed] = None


class SummarizationOptions(BaseModel):
    """Opciones ya resueltas con sus valores por defecto. Inmutables."""
    model_config = ConfigDict(frozen=True)

    length: SummaryLength = SummaryLength.STANDARD
    format: SummaryFormat = SummaryFormat.NARRATIVE
    listen: bool = False
    model: SummarizationModel = SummarizationModel.OPENAI
    speed: SummarizationSpeed = SummarizationSpeed.SLOW


class VideoMetadata(BaseModel):
    thumbnail: Optional[str] = None
    title: Optional[str] = None
    channel_name: Optional[str] = None


class VideoSummaryRequest(BaseModel):
    video_url: str
    options: Optional[SummarizationOptionsRequest] = None


class VideoSummaryResponse(BaseModel):
    transcript: Optional[str] = None
    summary: str
    video_id: Optional[str] = None
    video_url: str
    source: TranscriptSource
    options: SummarizationOptions
    metadata: VideoMetadata = VideoMetadata()


class FileSummaryResponse(BaseModel):
    summary: str
    filename: str
    options: SummarizationOptions
