"""
FastAPI router for the media generation operations
==================================================

Thin HTTP adapter: request bodies are the pydantic request models, responses
are the typed results. Domain errors are rendered by the handler registered
in ``core.app_state``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter

from config import config
from core.generation_processor import analyze_media, generate_social_images, generate_video_script
from models import (
    AnalysisRequest,
    AnalysisResult,
    ImageBatchResult,
    ImageRequest,
    ScriptRequest,
    ScriptResult,
    option_catalog,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generation"])


@router.post("/analysis", response_model=AnalysisResult)
async def analysis_endpoint(request: AnalysisRequest) -> AnalysisResult:
    """Summarize a URL, extract its verbatim content and optionally its comments."""
    logger.info(f"Analysis requested for {request.url} ({request.conciseness.value}, {request.language.value})")
    return await analyze_media(request)


@router.post("/script", response_model=ScriptResult)
async def script_endpoint(request: ScriptRequest) -> ScriptResult:
    """Generate a viral video script."""
    logger.info(
        f"Script requested: styles={[style.value for style in request.styles]}, "
        f"fact_check={request.fact_check}, safety_check={request.safety_check}"
    )
    return await generate_video_script(request)


@router.post("/images", response_model=ImageBatchResult)
async def images_endpoint(request: ImageRequest) -> ImageBatchResult:
    """Generate a batch of social media images (base64 encoded in the response)."""
    logger.info(f"Image batch requested: {request.count} x {request.style.value} @ {request.ratio.value}")
    return await generate_social_images(request)


@router.get("/options")
async def options_endpoint() -> Dict[str, Any]:
    """Enumerated choices for every request field."""
    return option_catalog()


health_router = APIRouter(tags=["health"])


@health_router.get("/health")
async def health_endpoint() -> Dict[str, Any]:
    return {"status": "ok", "credential_configured": bool(config.refresh_credentials())}
