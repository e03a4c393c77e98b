"""
AI Media Studio - HTTP application state
========================================

Creates the FastAPI application, configures logging once for the process and
maps the engine's error taxonomy onto HTTP responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from config import config
from media_errors import MediaStudioError, RequestValidationError
from models import format_validation_errors

# Setup logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)

# Silence noisy third-party loggers
_noisy_loggers = [
    'httpcore',
    'httpcore.connection',
    'httpcore.http11',
    'httpx',
    'urllib3',
    'google.auth',
    'google.auth.transport',
    'google_genai',
    'google_genai.models',
]
for _logger_name in _noisy_loggers:
    logging.getLogger(_logger_name).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

from core.generation_routes import health_router, router as generation_router  # noqa: E402

app = FastAPI(
    title="AI Media Studio",
    description="Media analysis, video script and social image generation backed by Gemini",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Base64 image batches compress well
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.exception_handler(MediaStudioError)
async def media_studio_error_handler(request: Request, exc: MediaStudioError) -> JSONResponse:
    logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.user_message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(BodyValidationError)
async def body_validation_error_handler(request: Request, exc: BodyValidationError) -> JSONResponse:
    # Same {"detail", "error"} shape as the engine's own validation failures
    error = RequestValidationError(format_validation_errors(exc.errors()), errors=list(exc.errors()))
    return await media_studio_error_handler(request, error)


app.include_router(generation_router)
app.include_router(health_router)

if not config.has_credentials:
    logger.warning("Gemini API key not found; generation requests will fail until it is configured")
