"""
Data Models for the AI Media Studio engine
==========================================

Pydantic models for the three request variants, their typed results and the
enumerated option sets the presentation layer offers to users.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from config import config
from media_errors import RequestValidationError


class Operation(str, Enum):
    """Operation tag shared by requests, results and output schemas"""
    ANALYSIS = "analysis"
    SCRIPT = "script"
    IMAGE = "image"


class ConcisenessLevel(str, Enum):
    """Summary detail tier for media analysis"""
    BRIEF = "brief"
    MODERATE = "moderate"
    DETAILED = "detailed"

    @property
    def label(self) -> str:
        return CONCISENESS_LABELS[self]

    @property
    def target_words(self) -> str:
        return CONCISENESS_WORD_TARGETS[self]


CONCISENESS_LABELS = {
    ConcisenessLevel.BRIEF: "Brief (Key Highlights, ~500 words)",
    ConcisenessLevel.MODERATE: "Moderate (In-depth Analysis, ~1000 words)",
    ConcisenessLevel.DETAILED: "Detailed (Full Comprehensive Report, ~2000+ words)",
}

CONCISENESS_WORD_TARGETS = {
    ConcisenessLevel.BRIEF: "~500 words",
    ConcisenessLevel.MODERATE: "~1000 words",
    ConcisenessLevel.DETAILED: "~2000+ words",
}


class OutputLanguage(str, Enum):
    CHINESE = "Chinese (Simplified)"
    ENGLISH = "English"
    JAPANESE = "Japanese"
    SPANISH = "Spanish"
    FRENCH = "French"


class VideoStyle(str, Enum):
    HUMOROUS = "Humorous"
    CONCISE = "Concise"
    EDUCATIONAL = "Educational"
    TUTORIAL = "Tutorial"
    COOL = "Cool"
    SHOCKING = "Shocking"
    SOCIAL_TOPIC = "Social Topic"
    EMOTIONAL = "Emotional"
    STORYTELLING = "Storytelling"
    CONTROVERSIAL = "Controversial"
    MOTIVATIONAL = "Motivational"
    BEHIND_THE_SCENES = "Behind-the-scenes"
    QA = "Q&A"
    UNBOXING = "Unboxing"
    REVIEW = "Review"
    LISTICLE = "Listicle"
    NEWS = "News"
    RANT = "Rant"
    CINEMATIC = "Cinematic"


class ImageStyle(str, Enum):
    REALISTIC = "Realistic"
    ANIME = "Anime"
    RENDER_3D = "3D Render"
    MINIMALIST = "Minimalist"
    CYBERPUNK = "Cyberpunk"
    WATERCOLOR = "Watercolor"
    OIL_PAINTING = "Oil Painting"
    POP_ART = "Pop Art"
    VINTAGE = "Vintage"
    SKETCH = "Sketch"
    FLAT_DESIGN = "Flat Design"
    NEON = "Neon"
    CINEMATIC = "Cinematic"
    SURREAL = "Surreal"
    PIXEL_ART = "Pixel Art"
    STICKER = "Sticker"
    VECTOR = "Vector"
    GHIBLI = "Ghibli"
    PIXAR = "Pixar"
    ABSTRACT = "Abstract"


class AspectRatio(str, Enum):
    SQUARE = "1:1"
    PORTRAIT = "3:4"
    STANDARD = "4:3"
    VERTICAL = "9:16"
    HORIZONTAL = "16:9"


class AspectRatioInfo(BaseModel):
    value: AspectRatio
    label: str
    description: str


ASPECT_RATIOS: List[AspectRatioInfo] = [
    AspectRatioInfo(value=AspectRatio.SQUARE, label="Square", description="Instagram Post"),
    AspectRatioInfo(value=AspectRatio.VERTICAL, label="Vertical", description="TikTok / Reels / RedNote"),
    AspectRatioInfo(value=AspectRatio.HORIZONTAL, label="Horizontal", description="YouTube Cover"),
    AspectRatioInfo(value=AspectRatio.PORTRAIT, label="Portrait", description="Instagram / Post"),
    AspectRatioInfo(value=AspectRatio.STANDARD, label="Standard", description="Blog / Article"),
]


def aspect_ratio_info(ratio: AspectRatio) -> AspectRatioInfo:
    for info in ASPECT_RATIOS:
        if info.value == ratio:
            return info
    raise KeyError(ratio)


def _require_text(value: str, field_name: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{field_name} must not be empty")
    return cleaned


# ============================================================================
# Requests
# ============================================================================

class AnalysisRequest(BaseModel):
    """Summarize a URL and extract its verbatim transcript or article text"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["analysis"] = "analysis"
    url: str = Field(..., description="URL of the video or article to analyze")
    conciseness: ConcisenessLevel = Field(default=ConcisenessLevel.MODERATE, description="Summary detail tier")
    language: OutputLanguage = Field(default=OutputLanguage.ENGLISH, description="Output language")
    include_comments: bool = Field(default=False, description="Also analyze user comments/discussion")

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _require_text(value, "url")


class ScriptRequest(BaseModel):
    """Write a short-form video script on a topic"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["script"] = "script"
    topic: str = Field(..., description="Video topic or key points")
    styles: List[VideoStyle] = Field(default_factory=list, description="Selected video styles")
    custom_instructions: str = Field(default="", description="Free-text creative inspiration, merged with styles")
    duration: str = Field(default="60 seconds", description="Target length, free-form (e.g. '60 seconds', '300 words')")
    language: OutputLanguage = Field(default=OutputLanguage.ENGLISH, description="Output language")
    safety_check: bool = Field(default=False, description="Request a platform policy safety report")
    fact_check: bool = Field(default=False, description="Request a search-backed fact-check report")

    @field_validator("topic")
    @classmethod
    def _validate_topic(cls, value: str) -> str:
        return _require_text(value, "topic")

    @field_validator("custom_instructions", "duration")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("styles")
    @classmethod
    def _dedupe_styles(cls, value: List[VideoStyle]) -> List[VideoStyle]:
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def _require_style_guidance(self) -> "ScriptRequest":
        if not self.styles and not self.custom_instructions:
            raise ValueError("select at least one style or provide custom instructions")
        return self


class ImageRequest(BaseModel):
    """Generate a batch of social media images"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    prompt: str = Field(..., description="Image subject / description")
    style: ImageStyle = Field(default=ImageStyle.REALISTIC, description="Art style")
    ratio: AspectRatio = Field(default=AspectRatio.SQUARE, description="Aspect ratio of the cover")
    count: int = Field(default=1, description="Number of images to generate")
    generate_caption: bool = Field(default=False, description="Also write a short social caption")

    @field_validator("prompt")
    @classmethod
    def _validate_prompt(cls, value: str) -> str:
        return _require_text(value, "prompt")

    @field_validator("count")
    @classmethod
    def _validate_count(cls, value: int) -> int:
        if not config.MIN_IMAGE_COUNT <= value <= config.MAX_IMAGE_COUNT:
            raise ValueError(
                f"count must be between {config.MIN_IMAGE_COUNT} and {config.MAX_IMAGE_COUNT}"
            )
        return value


GenerationRequest = Annotated[
    Union[AnalysisRequest, ScriptRequest, ImageRequest],
    Field(discriminator="kind"),
]

_request_adapter = TypeAdapter(GenerationRequest)


# Location segments that name the variant or the HTTP body rather than a field
_HIDDEN_LOCATIONS = {"analysis", "script", "image", "body"}


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Render pydantic error dicts as one readable message."""
    parts = []
    for error in errors:
        location = ".".join(str(item) for item in error.get("loc", ()) if item not in _HIDDEN_LOCATIONS)
        message = error.get("msg", "invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        parts.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(parts)


def build_request(data: Mapping[str, Any]) -> Union[AnalysisRequest, ScriptRequest, ImageRequest]:
    """
    Parse a plain mapping into the matching request variant.

    The ``kind`` key selects the variant. Pydantic validation failures are
    converted into RequestValidationError with a readable message.
    """
    try:
        return _request_adapter.validate_python(dict(data))
    except ValidationError as exc:
        raise RequestValidationError(
            format_validation_errors(exc.errors()),
            errors=exc.errors(include_url=False, include_context=False),
        ) from exc


# ============================================================================
# Results
# ============================================================================

class AnalysisResult(BaseModel):
    kind: Literal["analysis"] = "analysis"
    summary: str
    original_content: str
    comments_summary: Optional[str] = None
    grounding_urls: List[str] = Field(default_factory=list)


class ScriptResult(BaseModel):
    kind: Literal["script"] = "script"
    titles: List[str]
    hook: str
    script_body: str
    closing: str
    description: str
    strategy: str
    fact_check_report: Optional[str] = None
    safety_report: Optional[str] = None
    grounding_urls: List[str] = Field(default_factory=list)


class GeneratedImage(BaseModel):
    """One generated image; bytes serialize as base64 in JSON output"""
    model_config = ConfigDict(ser_json_bytes="base64")

    data: bytes
    mime_type: str = "image/png"


class ImageBatchResult(BaseModel):
    model_config = ConfigDict(ser_json_bytes="base64")

    kind: Literal["image"] = "image"
    images: List[GeneratedImage]
    caption: Optional[str] = None
    requested_count: int = 0
    failed_count: int = 0


GenerationResult = Annotated[
    Union[AnalysisResult, ScriptResult, ImageBatchResult],
    Field(discriminator="kind"),
]


def option_catalog() -> Dict[str, Any]:
    """Enumerated choices offered to users for each operation."""
    return {
        "languages": [language.value for language in OutputLanguage],
        "conciseness_levels": [
            {"value": level.value, "label": level.label} for level in ConcisenessLevel
        ],
        "video_styles": [style.value for style in VideoStyle],
        "image_styles": [style.value for style in ImageStyle],
        "aspect_ratios": [info.model_dump(mode="json") for info in ASPECT_RATIOS],
        "image_count": {"min": config.MIN_IMAGE_COUNT, "max": config.MAX_IMAGE_COUNT},
    }
