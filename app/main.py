import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints.summary import router as summary_router
from .core.config import Settings, get_settings


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Video Summarizer API",
        description="API para resumir videos de YouTube y documentos (PDF, DOCX, TXT)",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure CORS
    allowed_origins = [settings.allowed_origin] if settings.allowed_origin else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=bool(settings.allowed_origin),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include summary router
    app.include_router(
        summary_router,
        prefix="/api/v1/summary",
        tags=["summary"]
    )

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "version": settings.app_version,
            "openai_configured": bool(settings.openai_api_key),
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
