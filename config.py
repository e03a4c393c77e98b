"""
Configuration for the AI Media Studio engine
=============================================

Central configuration for the Gemini credential, model identifiers and the
request orchestration limits. Values come from the process environment
(optionally seeded from a .env file). A missing credential is not an error
here: it is detected when the generation client is constructed.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

TRUTHY_ENV_VALUES = {"1", "true", "yes", "on"}

# Environment variables checked for the Gemini credential, in priority order
CREDENTIAL_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def _read_positive_int(name: str) -> Optional[int]:
    """Return a positive integer override from the environment, or None."""
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        parsed = int(raw)
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def _read_credential() -> str:
    for name in CREDENTIAL_ENV_VARS:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


class Config(BaseModel):
    """Configuration settings for the AI Media Studio engine."""

    model_config = {"populate_by_name": True}

    # Credential (loaded from environment variables)
    GOOGLE_API_KEY: str = Field(default="", description="Google Gemini API key")

    # Models
    ANALYSIS_MODEL: str = Field(
        default="gemini-3-pro-preview",
        description="Model used for media analysis (summary + verbatim transcript)",
    )
    SCRIPT_MODEL: str = Field(
        default="gemini-3-pro-preview",
        description="Model used for video script generation",
    )
    IMAGE_MODEL: str = Field(
        default="gemini-2.5-flash-image",
        description="Model used for social media image generation",
    )

    # Orchestration limits
    REQUEST_TIMEOUT: int = Field(default=120, description="Per-call timeout in seconds")
    IMAGE_BATCH_SIZE: int = Field(
        default=3,
        ge=1,
        description="Maximum image calls in flight at once (one concurrency group)",
    )
    MIN_IMAGE_COUNT: int = Field(default=1, ge=1, description="Minimum images per request")
    MAX_IMAGE_COUNT: int = Field(default=15, ge=1, description="Maximum images per request")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    EXTRA_VERBOSE: bool = Field(
        default=False,
        description="Log full prompts and raw backend responses",
    )

    # Server
    APP_HOST: str = Field(default="0.0.0.0", description="FastAPI host")
    APP_PORT: int = Field(default=8000, description="FastAPI port")
    APP_RELOAD: bool = Field(default=False, description="FastAPI reload mode")

    def __init__(self):
        super().__init__()
        self.load_from_environment()

    def load_from_environment(self):
        """Load configuration from environment variables."""
        self.refresh_credentials()

        self.ANALYSIS_MODEL = os.getenv("ANALYSIS_MODEL", self.ANALYSIS_MODEL)
        self.SCRIPT_MODEL = os.getenv("SCRIPT_MODEL", self.SCRIPT_MODEL)
        self.IMAGE_MODEL = os.getenv("IMAGE_MODEL", self.IMAGE_MODEL)

        timeout_override = _read_positive_int("REQUEST_TIMEOUT")
        if timeout_override:
            self.REQUEST_TIMEOUT = timeout_override

        batch_override = _read_positive_int("IMAGE_BATCH_SIZE")
        if batch_override:
            self.IMAGE_BATCH_SIZE = batch_override

        max_images_override = _read_positive_int("MAX_IMAGE_COUNT")
        if max_images_override and max_images_override >= self.MIN_IMAGE_COUNT:
            self.MAX_IMAGE_COUNT = max_images_override

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", self.LOG_LEVEL).upper()
        self.EXTRA_VERBOSE = os.getenv("EXTRA_VERBOSE", "").lower() in TRUTHY_ENV_VALUES

        self.APP_HOST = os.getenv("APP_HOST", self.APP_HOST)
        port_override = _read_positive_int("APP_PORT")
        if port_override:
            self.APP_PORT = port_override
        reload_override = os.getenv("APP_RELOAD")
        if reload_override:
            self.APP_RELOAD = reload_override.lower() in TRUTHY_ENV_VALUES

    def refresh_credentials(self) -> str:
        """Re-read the Gemini credential from the environment and return it."""
        self.GOOGLE_API_KEY = _read_credential()
        return self.GOOGLE_API_KEY

    @property
    def has_credentials(self) -> bool:
        return bool(self.GOOGLE_API_KEY)


# Global configuration instance
config = Config()
