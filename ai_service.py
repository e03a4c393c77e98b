"""
AI Service Module for the AI Media Studio engine
================================================

Thin adapter over the Google GenAI SDK. One ``generate`` call is exactly one
round-trip to Gemini: a structured JSON call steered by an output schema, or
an image call shaped by an aspect ratio hint.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from google import genai as google_genai
from google.genai import types

from config import config
from media_errors import BackendUnavailable, ConfigurationError, EmptyResponse, GenerationTimeout
from models import Operation
from schema_builder import OutputSchema


logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class ToolConfig:
    """Auxiliary capabilities for one backend call."""
    use_search: bool = False
    aspect_ratio: Optional[str] = None

    @property
    def is_image_call(self) -> bool:
        return self.aspect_ratio is not None


@dataclass
class InlineImage:
    data: bytes
    mime_type: str = DEFAULT_IMAGE_MIME_TYPE


@dataclass
class RawPayload:
    """Untyped backend output plus side-channel grounding metadata."""
    text: Optional[str] = None
    grounding_urls: List[str] = field(default_factory=list)
    images: List[InlineImage] = field(default_factory=list)
    model: Optional[str] = None


_shared_ai_service: Optional["AIService"] = None
_ai_service_init_lock = threading.Lock()


def get_ai_service() -> "AIService":
    """Return the shared AIService instance, creating it on first use."""
    global _shared_ai_service
    if _shared_ai_service is None:
        with _ai_service_init_lock:
            if _shared_ai_service is None:
                _shared_ai_service = AIService()
    return _shared_ai_service


class AIService:
    """Gemini generation client"""

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """
        Build the SDK client.

        Raises ConfigurationError before any network activity when no
        credential is configured.
        """
        api_key = api_key or config.refresh_credentials()
        if not api_key:
            raise ConfigurationError()

        self.timeout = timeout or config.REQUEST_TIMEOUT
        self.google_client = google_genai.Client(api_key=api_key)
        logger.info("Google GenAI client initialized")

    def model_for(self, schema: Optional[OutputSchema], tool_config: ToolConfig) -> str:
        if tool_config.is_image_call:
            return config.IMAGE_MODEL
        if schema is not None and schema.operation == Operation.SCRIPT:
            return config.SCRIPT_MODEL
        return config.ANALYSIS_MODEL

    async def generate(
        self,
        prompt: str,
        schema: Optional[OutputSchema] = None,
        tool_config: Optional[ToolConfig] = None,
    ) -> RawPayload:
        """
        Send one (prompt, schema, tool-config) triple to Gemini.

        Args:
            prompt: Instruction text
            schema: Output schema for structured calls (ignored for image calls)
            tool_config: Search augmentation / image aspect ratio

        Returns:
            RawPayload with text, inline images and grounding URLs

        Raises:
            GenerationTimeout: the call exceeded ``self.timeout``
            BackendUnavailable: the SDK raised (network, quota, auth)
            EmptyResponse: the backend returned no usable body
        """
        tool_config = tool_config or ToolConfig()
        model_id = self.model_for(schema, tool_config)
        generate_config = self._build_generate_config(schema, tool_config)

        try:
            response = await asyncio.wait_for(
                self.google_client.aio.models.generate_content(
                    model=model_id,
                    contents=prompt,
                    config=generate_config,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.error(f"Gemini call to {model_id} timed out after {self.timeout}s")
            raise GenerationTimeout(self.timeout, model=model_id) from exc
        except Exception as exc:
            logger.error(f"Gemini SDK error ({model_id}): {exc}")
            raise BackendUnavailable(
                f"The generation service failed: {exc}",
                model=model_id,
                cause=exc,
            ) from exc

        payload = self._extract_payload(response, model_id, first_text_only=tool_config.is_image_call)
        if not payload.text and not payload.images:
            raise EmptyResponse()
        return payload

    @staticmethod
    def _build_generate_config(
        schema: Optional[OutputSchema],
        tool_config: ToolConfig,
    ) -> types.GenerateContentConfig:
        config_params: Dict[str, Any] = {}

        if tool_config.is_image_call:
            config_params["image_config"] = types.ImageConfig(aspect_ratio=tool_config.aspect_ratio)
        elif schema is not None:
            config_params["response_mime_type"] = "application/json"
            config_params["response_schema"] = schema.to_response_schema()

        if tool_config.use_search:
            config_params["tools"] = [types.Tool(google_search=types.GoogleSearch())]

        return types.GenerateContentConfig(**config_params)

    @staticmethod
    def _extract_payload(response: Any, model_id: str, first_text_only: bool = False) -> RawPayload:
        """
        Pull text, inline images and grounding URIs out of an SDK response.

        Structured calls may stream their JSON over several text parts, which
        are joined. Image calls keep only the first text part as the caption.
        """
        payload = RawPayload(model=model_id)

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return payload
        candidate = candidates[0]

        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) or []
        text_parts: List[str] = []
        for part in parts:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and getattr(inline_data, "data", None):
                payload.images.append(
                    InlineImage(
                        data=inline_data.data,
                        mime_type=getattr(inline_data, "mime_type", None) or DEFAULT_IMAGE_MIME_TYPE,
                    )
                )
                continue
            text = getattr(part, "text", None)
            # Thought summaries are not part of the answer
            if text and not getattr(part, "thought", False):
                text_parts.append(text)
        if text_parts:
            payload.text = text_parts[0] if first_text_only else "".join(text_parts)

        grounding_metadata = getattr(candidate, "grounding_metadata", None)
        chunks = getattr(grounding_metadata, "grounding_chunks", None) or []
        for chunk in chunks:
            uri = getattr(getattr(chunk, "web", None), "uri", None)
            if uri:
                payload.grounding_urls.append(uri)

        return payload
