"""
Request orchestration for the three media operations.

Each entry point resolves the generation client first (so a missing
credential fails before anything else happens), composes prompt and schema,
issues the backend call(s) and normalizes the response into a typed result.
"""

import logging
from typing import Any, Mapping, Optional, Union

from ai_service import AIService, ToolConfig, get_ai_service
from config import config
from core.image_batch import run_image_batch
from core.prompt_templates import build_analysis_prompt, build_script_prompt
from logging_utils import Phase, create_phase_logger
from models import (
    AnalysisRequest,
    AnalysisResult,
    ImageBatchResult,
    ImageRequest,
    Operation,
    ScriptRequest,
    ScriptResult,
    build_request,
)
from response_normalizer import normalize_analysis, normalize_script
from schema_builder import build_output_schema


logger = logging.getLogger(__name__)


def _resolve_service(ai_service: Optional[AIService]) -> AIService:
    return ai_service if ai_service is not None else get_ai_service()


def _extra_verbose(value: Optional[bool]) -> bool:
    return config.EXTRA_VERBOSE if value is None else value


async def analyze_media(
    request: AnalysisRequest,
    ai_service: Optional[AIService] = None,
    extra_verbose: Optional[bool] = None,
) -> AnalysisResult:
    """Summarize a URL and extract its verbatim content (search-grounded)."""
    service = _resolve_service(ai_service)
    phase_logger = create_phase_logger("analysis", extra_verbose=_extra_verbose(extra_verbose))

    with phase_logger.phase(Phase.PROMPT):
        schema = build_output_schema(Operation.ANALYSIS)
        prompt = build_analysis_prompt(request)
        tool_config = ToolConfig(use_search=True)

    with phase_logger.phase(Phase.GENERATION):
        phase_logger.log_prompt("analysis", prompt, use_search=tool_config.use_search)
        raw = await service.generate(prompt, schema, tool_config)
        phase_logger.log_response(raw.model or "analysis", raw.text or "", {"grounding_urls": len(raw.grounding_urls)})

    with phase_logger.phase(Phase.NORMALIZATION):
        result = normalize_analysis(raw, request)

    phase_logger.info(
        f"Analysis complete: {len(result.summary)} summary chars, "
        f"{len(result.original_content)} content chars, {len(result.grounding_urls)} sources"
    )
    phase_logger.log_timing_summary()
    return result


async def generate_video_script(
    request: ScriptRequest,
    ai_service: Optional[AIService] = None,
    extra_verbose: Optional[bool] = None,
) -> ScriptResult:
    """Write a video script; search augmentation is used only for fact-checks."""
    service = _resolve_service(ai_service)
    phase_logger = create_phase_logger("script", extra_verbose=_extra_verbose(extra_verbose))

    with phase_logger.phase(Phase.PROMPT):
        schema = build_output_schema(Operation.SCRIPT)
        prompt = build_script_prompt(request)
        tool_config = ToolConfig(use_search=request.fact_check)

    with phase_logger.phase(Phase.GENERATION):
        phase_logger.log_prompt("script", prompt, use_search=tool_config.use_search)
        raw = await service.generate(prompt, schema, tool_config)
        phase_logger.log_response(raw.model or "script", raw.text or "")

    with phase_logger.phase(Phase.NORMALIZATION):
        result = normalize_script(raw, request)

    phase_logger.info(f"Script complete: {len(result.titles)} titles")
    phase_logger.log_timing_summary()
    return result


async def generate_social_images(
    request: ImageRequest,
    ai_service: Optional[AIService] = None,
    extra_verbose: Optional[bool] = None,
) -> ImageBatchResult:
    """Generate ``request.count`` images in concurrency groups."""
    service = _resolve_service(ai_service)
    phase_logger = create_phase_logger("image", extra_verbose=_extra_verbose(extra_verbose))

    with phase_logger.phase(Phase.IMAGE_BATCH, sub_label=f"{request.count} x {request.style.value} {request.ratio.value}"):
        result = await run_image_batch(request, service, phase_logger=phase_logger)

    phase_logger.info(f"Image batch complete: {len(result.images)}/{request.count} images")
    phase_logger.log_timing_summary()
    return result


async def run_generation(
    request: Union[AnalysisRequest, ScriptRequest, ImageRequest, Mapping[str, Any]],
    ai_service: Optional[AIService] = None,
    extra_verbose: Optional[bool] = None,
):
    """
    Dispatch any request variant to its operation.

    Plain mappings are validated into a request first (``kind`` selects the
    variant); invalid input raises RequestValidationError.
    """
    if isinstance(request, Mapping):
        request = build_request(request)

    if isinstance(request, AnalysisRequest):
        return await analyze_media(request, ai_service, extra_verbose)
    if isinstance(request, ScriptRequest):
        return await generate_video_script(request, ai_service, extra_verbose)
    if isinstance(request, ImageRequest):
        return await generate_social_images(request, ai_service, extra_verbose)
    raise TypeError(f"Unsupported request type: {type(request).__name__}")
