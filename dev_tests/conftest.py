"""Shared pytest fixtures for AI Media Studio tests."""

import asyncio
import os
import sys
from typing import Any, List, Optional, Sequence
from unittest.mock import patch

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json_utils as json
from ai_service import InlineImage, RawPayload


CREDENTIAL_KEYS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide a configured credential."""
    env = {"GEMINI_API_KEY": "test-gemini-key-12345"}
    with patch.dict(os.environ, env, clear=False):
        yield env


@pytest.fixture
def clean_env():
    """Provide an environment without any Gemini credential."""
    with patch.dict(os.environ, {}, clear=False):
        for key in CREDENTIAL_KEYS:
            os.environ.pop(key, None)
        yield


@pytest.fixture
def reset_singleton():
    """Reset the shared AIService before and after a test."""
    import ai_service
    ai_service._shared_ai_service = None
    yield
    ai_service._shared_ai_service = None


# ============================================================================
# Fake generation client
# ============================================================================

class FakeAIService:
    """
    Scripted stand-in for AIService.

    ``outcomes`` is consumed in dispatch order: a RawPayload is returned, an
    exception instance is raised. ``delays`` (seconds, per dispatch index)
    controls completion order inside a concurrency group.
    """

    def __init__(
        self,
        outcomes: Optional[Sequence[Any]] = None,
        default: Optional[Any] = None,
        delays: Optional[Sequence[float]] = None,
    ):
        self.outcomes = list(outcomes or [])
        self.default = default
        self.delays = list(delays or [])
        self.calls: List[dict] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.group_sizes: List[int] = []

    async def generate(self, prompt, schema=None, tool_config=None):
        index = len(self.calls)
        self.calls.append({"prompt": prompt, "schema": schema, "tool_config": tool_config})
        if self.in_flight == 0:
            self.group_sizes.append(0)
        self.group_sizes[-1] += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays[index] if index < len(self.delays) else 0.001
            await asyncio.sleep(delay)
            outcome = self.outcomes[index] if index < len(self.outcomes) else self.default
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake_ai_service_factory():
    """Return the FakeAIService class for building scripted clients."""
    return FakeAIService


# ============================================================================
# Payload helpers
# ============================================================================

def make_payload(record: dict, grounding_urls: Optional[List[str]] = None, model: str = "fake-model") -> RawPayload:
    return RawPayload(text=json.dumps(record), grounding_urls=list(grounding_urls or []), model=model)


def make_image_payload(data: bytes = b"fake-image-0", caption: Optional[str] = None, mime_type: str = "image/png") -> RawPayload:
    return RawPayload(
        text=caption,
        images=[InlineImage(data=data, mime_type=mime_type)] if data else [],
        model="fake-image-model",
    )


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def image_payload_factory():
    return make_image_payload


# ============================================================================
# Sample requests and payload records
# ============================================================================

@pytest.fixture
def analysis_request():
    from models import AnalysisRequest, ConcisenessLevel, OutputLanguage
    return AnalysisRequest(
        url="https://www.youtube.com/watch?v=abc123",
        conciseness=ConcisenessLevel.BRIEF,
        language=OutputLanguage.ENGLISH,
        include_comments=True,
    )


@pytest.fixture
def script_request():
    from models import OutputLanguage, ScriptRequest, VideoStyle
    return ScriptRequest(
        topic="5 tips for growing tomatoes",
        styles=[VideoStyle.EDUCATIONAL, VideoStyle.HUMOROUS],
        custom_instructions="Talk like a grumpy gardener",
        duration="60 seconds",
        language=OutputLanguage.ENGLISH,
        safety_check=True,
        fact_check=True,
    )


@pytest.fixture
def image_request():
    from models import AspectRatio, ImageRequest, ImageStyle
    return ImageRequest(
        prompt="A futuristic neon city street",
        style=ImageStyle.CYBERPUNK,
        ratio=AspectRatio.VERTICAL,
        count=3,
        generate_caption=True,
    )


@pytest.fixture
def analysis_record():
    return {
        "summary": "  Key findings with 3 statistics.  ",
        "original_content": "\nFull verbatim transcript text.\n",
        "comments_summary": " Viewers corrected the date. ",
    }


@pytest.fixture
def script_record():
    return {
        "titles": [" Tomato Hacks ", "Grow Better Tomatoes", "Tomato Hacks", ""],
        "hook": " Stop watering your tomatoes! ",
        "script_body": "[Visual: garden] Tip one...",
        "closing": "Follow for more.",
        "description": "Tomato tips #garden",
        "strategy": "Curiosity gap in the hook.",
        "fact_check_report": " All claims verified. ",
        "safety_report": " No policy concerns. ",
    }
