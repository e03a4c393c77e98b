"""
Batch orchestration for social image generation.

Issues ``request.count`` independent image calls in sequential concurrency
groups of at most ``IMAGE_BATCH_SIZE`` in-flight calls, records per-call
failures without aborting, and aggregates whatever images came back.
"""

import asyncio
import logging
from typing import List, Optional

from ai_service import AIService, ToolConfig
from config import config
from core.prompt_templates import build_image_prompt
from logging_utils import PhaseLogger
from media_errors import MediaStudioError, NoArtifactsProduced
from models import GeneratedImage, ImageBatchResult, ImageRequest
from response_normalizer import normalize_image_call


logger = logging.getLogger(__name__)


def plan_groups(count: int, group_size: int) -> List[int]:
    """Sizes of the sequential concurrency groups for ``count`` calls."""
    return [min(group_size, count - start) for start in range(0, count, group_size)]


class ImageBatchCollector:
    """Accumulates per-call outcomes in completion order."""

    def __init__(self):
        self.images: List[GeneratedImage] = []
        self.captions: List[str] = []
        self.failed_calls = 0
        self.last_error: Optional[str] = None

    def record_failure(self, message: Optional[str] = None):
        self.failed_calls += 1
        if message:
            self.last_error = message

    def record(self, images: List[GeneratedImage], caption: Optional[str]):
        if images:
            # One image per call, as the prompt asks for a single image
            self.images.append(images[0])
        else:
            self.failed_calls += 1
        if caption:
            self.captions.append(caption)

    @property
    def caption(self) -> Optional[str]:
        # Last non-empty caption observed wins
        return self.captions[-1] if self.captions else None


async def run_image_batch(
    request: ImageRequest,
    ai_service: AIService,
    phase_logger: Optional[PhaseLogger] = None,
    group_size: Optional[int] = None,
) -> ImageBatchResult:
    """
    Generate ``request.count`` images and aggregate them.

    Args:
        request: Validated image request
        ai_service: Generation client (one call per image)
        phase_logger: Optional phase logger for progress output
        group_size: Concurrency cap override (defaults to IMAGE_BATCH_SIZE)

    Returns:
        ImageBatchResult with every image that was produced, in arrival order

    Raises:
        NoArtifactsProduced: no call produced an image
    """
    group_size = group_size or config.IMAGE_BATCH_SIZE
    prompt = build_image_prompt(request)
    tool_config = ToolConfig(aspect_ratio=request.ratio.value)
    collector = ImageBatchCollector()

    if phase_logger:
        phase_logger.log_prompt("image", prompt, aspect_ratio=request.ratio.value, count=request.count)

    async def generate_single(call_number: int):
        try:
            raw = await ai_service.generate(prompt, None, tool_config)
        except MediaStudioError as exc:
            logger.warning(f"Image call {call_number}/{request.count} failed: {exc.user_message}")
            collector.record_failure(exc.user_message)
            return
        images, caption = normalize_image_call(raw, request)
        if not images:
            logger.warning(f"Image call {call_number}/{request.count} returned no image")
        collector.record(images, caption)

    groups = plan_groups(request.count, group_size)
    dispatched = 0
    for group_index, size in enumerate(groups, start=1):
        if phase_logger:
            phase_logger.info(f"Dispatching group {group_index}/{len(groups)} ({size} calls)")
        # Let the whole group settle before surfacing an unexpected error
        outcomes = await asyncio.gather(
            *(generate_single(dispatched + offset + 1) for offset in range(size)),
            return_exceptions=True,
        )
        dispatched += size
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

    if not collector.images:
        raise NoArtifactsProduced(attempted=request.count, last_error=collector.last_error)

    if collector.failed_calls and phase_logger:
        phase_logger.warning(
            f"{collector.failed_calls}/{request.count} image calls produced no image; returning partial batch"
        )

    return ImageBatchResult(
        images=collector.images,
        caption=collector.caption,
        requested_count=request.count,
        failed_count=collector.failed_calls,
    )
