"""
Response normalization for the AI Media Studio engine.

Turns a RawPayload into a typed result: parse, enforce the schema's required
fields, trim strings, gate optional fields on the request toggles and dedupe
collections. No I/O; the output depends only on the payload and the request.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import json_utils as json
from ai_service import RawPayload
from media_errors import IncompleteResponse, MalformedResponse, NoArtifactsProduced
from models import (
    AnalysisRequest,
    AnalysisResult,
    GeneratedImage,
    ImageBatchResult,
    ImageRequest,
    Operation,
    ScriptRequest,
    ScriptResult,
)
from schema_builder import FieldType, OutputSchema, build_output_schema


logger = logging.getLogger(__name__)

# Values the model uses to say "nothing here"
PLACEHOLDER_VALUES = frozenset({"", "n/a", "na", "none", "null", "not applicable", "not requested"})

NO_COMMENTS_FALLBACK = "No comments found."


def is_placeholder(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in PLACEHOLDER_VALUES


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop repeated entries, keeping first-seen order."""
    return list(dict.fromkeys(items))


def parse_payload(raw: RawPayload) -> Dict[str, Any]:
    """Parse the payload text into a JSON object."""
    if not isinstance(raw.text, str) or not raw.text.strip():
        raise MalformedResponse("The model returned an empty document instead of JSON.")
    try:
        record = json.loads_object(raw.text)
    except json.JSONDecodeError as exc:
        logger.warning(f"Unparseable model output from {raw.model}: {exc}")
        raise MalformedResponse() from exc
    if not isinstance(record, dict):
        raise MalformedResponse("The model returned JSON that is not an object.")
    return record


def _is_missing(value: Any, field_type: FieldType) -> bool:
    if value is None:
        return True
    if field_type == FieldType.STRING_ARRAY and isinstance(value, list):
        return not any(isinstance(item, str) and item.strip() for item in value)
    if isinstance(value, str):
        return not value.strip()
    return False


def check_required_fields(record: Dict[str, Any], schema: OutputSchema) -> None:
    """Raise IncompleteResponse naming every required field that is missing or empty."""
    missing = [
        item.name
        for item in schema.fields
        if item.required and _is_missing(record.get(item.name), item.type)
    ]
    if missing:
        raise IncompleteResponse(missing)


def clean_string(record: Dict[str, Any], name: str) -> Optional[str]:
    value = record.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedResponse(f"The model returned an invalid value for '{name}'.")
    return value.strip()


def clean_string_list(record: Dict[str, Any], name: str) -> List[str]:
    value = record.get(name)
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MalformedResponse(f"The model returned an invalid value for '{name}'.")
    return dedupe(item.strip() for item in value if item.strip())


def clean_urls(urls: Iterable[str]) -> List[str]:
    return dedupe(url.strip() for url in urls if url and url.strip())


def gated_field(
    record: Dict[str, Any],
    name: str,
    enabled: bool,
    fallback: Optional[str] = None,
) -> Optional[str]:
    """
    Resolve a toggle-gated optional field.

    Disabled toggles always yield None. With ``fallback`` set, an absent or
    placeholder value is replaced by the fallback; otherwise the trimmed value
    is returned as the model wrote it.
    """
    if not enabled:
        return None
    value = clean_string(record, name)
    if fallback is not None and is_placeholder(value):
        return fallback
    return value


def normalize_analysis(raw: RawPayload, request: AnalysisRequest) -> AnalysisResult:
    record = parse_payload(raw)
    check_required_fields(record, build_output_schema(Operation.ANALYSIS))
    return AnalysisResult(
        summary=clean_string(record, "summary"),
        original_content=clean_string(record, "original_content"),
        comments_summary=gated_field(
            record, "comments_summary", request.include_comments, fallback=NO_COMMENTS_FALLBACK
        ),
        grounding_urls=clean_urls(raw.grounding_urls),
    )


def normalize_script(raw: RawPayload, request: ScriptRequest) -> ScriptResult:
    record = parse_payload(raw)
    check_required_fields(record, build_output_schema(Operation.SCRIPT))
    return ScriptResult(
        titles=clean_string_list(record, "titles"),
        hook=clean_string(record, "hook"),
        script_body=clean_string(record, "script_body"),
        closing=clean_string(record, "closing"),
        description=clean_string(record, "description"),
        strategy=clean_string(record, "strategy"),
        fact_check_report=gated_field(record, "fact_check_report", request.fact_check),
        safety_report=gated_field(record, "safety_report", request.safety_check),
        grounding_urls=clean_urls(raw.grounding_urls),
    )


def normalize_image_call(raw: RawPayload, request: ImageRequest) -> Tuple[List[GeneratedImage], Optional[str]]:
    """Extract the images and the caption (if requested) from one image call."""
    images = [GeneratedImage(data=image.data, mime_type=image.mime_type) for image in raw.images]
    caption = None
    if request.generate_caption and raw.text:
        caption = json.strip_code_fence(raw.text) or None
    return images, caption


def normalize(raw: RawPayload, request):
    """Normalize a payload into the result type matching the request variant."""
    if isinstance(request, AnalysisRequest):
        return normalize_analysis(raw, request)
    if isinstance(request, ScriptRequest):
        return normalize_script(raw, request)
    if isinstance(request, ImageRequest):
        images, caption = normalize_image_call(raw, request)
        if not images:
            raise NoArtifactsProduced(attempted=1)
        return ImageBatchResult(images=images, caption=caption, requested_count=1)
    raise TypeError(f"Unsupported request type: {type(request).__name__}")
