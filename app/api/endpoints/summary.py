import asyncio
import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, File, Form, Header, HTTPException, UploadFile
from openai import OpenAI

from app.core.config import Settings, get_settings
from app.core.errors import UnsupportedFormat
from app.schemas.summary import (
    FileSummaryResponse,
    SummarizationModel,
    SummarizationOptionsRequest,
    SummarizationSpeed,
    SummaryFormat,
    SummaryLength,
    VideoSummaryRequest,
    VideoSummaryResponse,
)
from app.services.credentials import default_key_for_origin
from app.services.summary import summarize_file, summarize_youtube_video
from app.services.transcription import TranscriptPipeline

logger = logging.getLogger(__name__)

router = APIRouter()


def get_client_factory() -> Callable[..., Any]:
    return OpenAI


def get_pipeline(
    settings: Settings = Depends(get_settings),
    client_factory: Callable[..., Any] = Depends(get_client_factory),
) -> TranscriptPipeline:
    return TranscriptPipeline(settings, client_factory=client_factory)


def options_form(
    length: Optional[SummaryLength] = Form(None),
    format: Optional[SummaryFormat] = Form(None),
    listen: Optional[bool] = Form(None),
    model: Optional[SummarizationModel] = Form(None),
    speed: Optional[SummarizationSpeed] = Form(None),
) -> SummarizationOptionsRequest:
    return SummarizationOptionsRequest(length=length, format=format, listen=listen, model=model, speed=speed)


@router.post("/youtube", response_model=VideoSummaryResponse)
async def summarize_youtube(
    request: VideoSummaryRequest,
    x_api_key: Optional[str] = Header(None),
    origin: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    pipeline: TranscriptPipeline = Depends(get_pipeline),
    client_factory: Callable[..., Any] = Depends(get_client_factory),
):
    """
    Resume un video de YouTube.

    - Intenta obtener los subtítulos directamente
    - Si no es posible, descarga el audio y lo transcribe
    - Devuelve la transcripción junto con el resumen
    """
    try:
        return await asyncio.to_thread(
            summarize_youtube_video,
            request.video_url,
            request.options,
            x_api_key,
            default_key_for_origin(settings, origin),
            settings,
            pipeline,
            client_factory,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to summarize video: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/file", response_model=FileSummaryResponse)
async def summarize_uploaded_file(
    file: UploadFile = File(...),
    options: SummarizationOptionsRequest = Depends(options_form),
    x_api_key: Optional[str] = Header(None),
    origin: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    client_factory: Callable[..., Any] = Depends(get_client_factory),
):
    """Resume un archivo subido (.txt, .pdf o .docx)."""
    try:
        content = await file.read()
        return await asyncio.to_thread(
            summarize_file,
            file.filename or "",
            content,
            options,
            x_api_key,
            default_key_for_origin(settings, origin),
            settings,
            client_factory,
        )
    except UnsupportedFormat as e:
        raise HTTPException(status_code=415, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to summarize file: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
