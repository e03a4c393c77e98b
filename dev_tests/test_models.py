"""
Tests for models.py - request validation, tagged unions and result serialization.
"""

import base64

import pytest
from pydantic import ValidationError

from media_errors import RequestValidationError
from models import (
    ASPECT_RATIOS,
    AnalysisRequest,
    AspectRatio,
    ConcisenessLevel,
    GeneratedImage,
    ImageBatchResult,
    ImageRequest,
    ScriptRequest,
    VideoStyle,
    aspect_ratio_info,
    build_request,
    option_catalog,
)


class TestRequestValidation:

    def test_blank_url_rejected(self):
        with pytest.raises(ValidationError):
            AnalysisRequest(url="   ")

    def test_url_is_trimmed(self):
        assert AnalysisRequest(url="  https://example.com/a  ").url == "https://example.com/a"

    def test_unknown_enum_value_rejected(self):
        with pytest.raises(ValidationError):
            AnalysisRequest(url="https://example.com", conciseness="verbose")

    def test_blank_topic_rejected(self):
        with pytest.raises(ValidationError):
            ScriptRequest(topic="", styles=[VideoStyle.NEWS])

    def test_no_styles_and_no_custom_instructions_rejected(self):
        """
        Given: Zero styles and empty custom instructions
        When: ScriptRequest is built
        Then: Validation fails
        """
        with pytest.raises(ValidationError):
            ScriptRequest(topic="Tomatoes", styles=[], custom_instructions="   ")

    def test_custom_instructions_alone_are_enough(self):
        request = ScriptRequest(topic="Tomatoes", styles=[], custom_instructions="Noir narration")
        assert request.styles == []
        assert request.custom_instructions == "Noir narration"

    def test_duplicate_styles_collapsed_in_order(self):
        request = ScriptRequest(
            topic="Tomatoes",
            styles=[VideoStyle.NEWS, VideoStyle.RANT, VideoStyle.NEWS],
        )
        assert request.styles == [VideoStyle.NEWS, VideoStyle.RANT]

    @pytest.mark.parametrize("count", [0, 16, -1])
    def test_image_count_out_of_range(self, count):
        with pytest.raises(ValidationError):
            ImageRequest(prompt="A cat", count=count)

    @pytest.mark.parametrize("count", [1, 15])
    def test_image_count_bounds_inclusive(self, count):
        assert ImageRequest(prompt="A cat", count=count).count == count

    def test_requests_are_immutable(self, analysis_request):
        with pytest.raises(ValidationError):
            analysis_request.url = "https://other.example"


class TestBuildRequest:

    def test_selects_variant_by_kind(self):
        request = build_request({"kind": "image", "prompt": "A dog", "count": 2, "ratio": "16:9"})
        assert isinstance(request, ImageRequest)
        assert request.ratio == AspectRatio.HORIZONTAL

    def test_analysis_variant(self):
        request = build_request({"kind": "analysis", "url": "https://example.com", "conciseness": "detailed"})
        assert isinstance(request, AnalysisRequest)
        assert request.conciseness == ConcisenessLevel.DETAILED

    def test_invalid_input_raises_request_validation_error(self):
        """
        Given: An image request with count 0
        When: build_request() is called
        Then: RequestValidationError with a readable message naming the field
        """
        with pytest.raises(RequestValidationError) as exc_info:
            build_request({"kind": "image", "prompt": "A dog", "count": 0})
        assert "count" in exc_info.value.user_message
        assert exc_info.value.status_code == 422
        assert exc_info.value.errors

    def test_unknown_kind_rejected(self):
        with pytest.raises(RequestValidationError):
            build_request({"kind": "podcast", "topic": "x"})


class TestOptionsAndLabels:

    def test_conciseness_labels(self):
        assert ConcisenessLevel.BRIEF.label.startswith("Brief")
        assert ConcisenessLevel.DETAILED.target_words == "~2000+ words"

    def test_every_ratio_has_info(self):
        assert {info.value for info in ASPECT_RATIOS} == set(AspectRatio)
        assert aspect_ratio_info(AspectRatio.VERTICAL).description == "TikTok / Reels / RedNote"

    def test_option_catalog(self):
        catalog = option_catalog()
        assert "Q&A" in catalog["video_styles"]
        assert "Ghibli" in catalog["image_styles"]
        assert catalog["image_count"] == {"min": 1, "max": 15}
        assert catalog["aspect_ratios"][0] == {"value": "1:1", "label": "Square", "description": "Instagram Post"}


class TestResultSerialization:

    def test_image_bytes_serialize_as_base64(self):
        result = ImageBatchResult(images=[GeneratedImage(data=b"fake-image-0")], requested_count=1)
        dumped = result.model_dump(mode="json")
        assert base64.b64decode(dumped["images"][0]["data"]) == b"fake-image-0"
        assert dumped["images"][0]["mime_type"] == "image/png"
        assert dumped["caption"] is None
