"""
Tests for core/prompt_templates.py - prompt composition per operation.
"""

import pytest

from core.prompt_templates import (
    build_analysis_prompt,
    build_image_prompt,
    build_script_prompt,
    compose_prompt,
)
from models import (
    AnalysisRequest,
    AspectRatio,
    ConcisenessLevel,
    ImageRequest,
    OutputLanguage,
    ScriptRequest,
    VideoStyle,
)


class TestDeterminism:

    def test_identical_requests_render_identical_prompts(self, analysis_request, script_request, image_request):
        """
        Given: The same request rendered twice (and an equal copy)
        When: compose_prompt() is called
        Then: The prompts are byte-identical
        """
        for request in (analysis_request, script_request, image_request):
            copy = type(request).model_validate(request.model_dump())
            assert compose_prompt(request) == compose_prompt(request) == compose_prompt(copy)

    def test_unknown_request_type(self):
        with pytest.raises(TypeError):
            compose_prompt(object())


class TestAnalysisPrompt:

    def test_embeds_configuration(self, analysis_request):
        prompt = build_analysis_prompt(analysis_request)
        assert "Target URL: https://www.youtube.com/watch?v=abc123" in prompt
        assert "Output Language: English" in prompt
        assert ConcisenessLevel.BRIEF.label in prompt
        assert "Target length: ~500 words" in prompt

    @pytest.mark.parametrize(
        "level, band",
        [
            (ConcisenessLevel.BRIEF, "~500 words"),
            (ConcisenessLevel.MODERATE, "~1000 words"),
            (ConcisenessLevel.DETAILED, "~2000+ words"),
        ],
    )
    def test_detail_tier_word_bands(self, level, band):
        prompt = build_analysis_prompt(AnalysisRequest(url="https://example.com", conciseness=level))
        assert f"Target length: {band}" in prompt

    def test_verbatim_extraction_is_a_hard_constraint(self, analysis_request):
        prompt = build_analysis_prompt(analysis_request)
        assert "VERBATIM" in prompt
        assert "DO NOT SUMMARIZE" in prompt
        assert "DO NOT SHORTEN" in prompt
        assert "DO NOT PARAPHRASE" in prompt

    def test_comment_clause_only_when_enabled(self):
        with_comments = build_analysis_prompt(AnalysisRequest(url="https://example.com", include_comments=True))
        without = build_analysis_prompt(AnalysisRequest(url="https://example.com", include_comments=False))
        assert "Analyze Comments: YES" in with_comments
        assert "CORRECT errors" in with_comments
        assert "Analyze Comments: NO" in without
        assert "CORRECT errors" not in without

    def test_language_is_embedded(self):
        prompt = build_analysis_prompt(
            AnalysisRequest(url="https://example.com", language=OutputLanguage.CHINESE)
        )
        assert "Output Language: Chinese (Simplified)" in prompt


class TestScriptPrompt:

    def test_embeds_configuration(self, script_request):
        prompt = build_script_prompt(script_request)
        assert "**Topic**: 5 tips for growing tomatoes" in prompt
        assert "**Target Styles**: Educational, Humorous" in prompt
        assert "**Custom Inspiration/Instructions**: Talk like a grumpy gardener" in prompt
        assert "**Target Length/Duration**: 60 seconds" in prompt
        assert "**Output Language**: English" in prompt

    def test_custom_instructions_merge_with_styles(self, script_request):
        prompt = build_script_prompt(script_request)
        assert "together with the selected styles" in prompt
        assert "Educational, Humorous" in prompt

    def test_check_clauses_enabled(self, script_request):
        prompt = build_script_prompt(script_request)
        assert "**Perform Fact Check**: YES - Use Google Search to verify claims" in prompt
        assert "**Perform Safety Check**: YES" in prompt
        assert "platform policies" in prompt

    def test_check_clauses_disabled(self):
        request = ScriptRequest(topic="Tomatoes", styles=[VideoStyle.NEWS])
        prompt = build_script_prompt(request)
        assert "**Perform Fact Check**: NO" in prompt
        assert "**Perform Safety Check**: NO" in prompt
        assert "Google Search to verify every objective claim" not in prompt
        assert "**Custom Inspiration/Instructions**: None provided." in prompt

    def test_custom_only_request(self):
        request = ScriptRequest(topic="Tomatoes", custom_instructions="Film-noir voice over")
        prompt = build_script_prompt(request)
        assert "**Target Styles**: None selected" in prompt
        assert "Film-noir voice over" in prompt


class TestImagePrompt:

    def test_embeds_subject_style_and_ratio(self, image_request):
        prompt = build_image_prompt(image_request)
        assert "Create a high-quality Cyberpunk style image." in prompt
        assert "Subject: A futuristic neon city street." in prompt
        assert "social media cover in 9:16" in prompt
        assert "TikTok / Reels / RedNote" in prompt

    @pytest.mark.parametrize("ratio", list(AspectRatio))
    def test_ratio_rendered_as_plain_value(self, ratio):
        """
        Given: An image request for each aspect ratio
        When: build_image_prompt() is called
        Then: The ratio string itself appears, never the enum member name
        """
        prompt = build_image_prompt(ImageRequest(prompt="A cat", ratio=ratio))
        assert f"social media cover in {ratio.value} " in prompt
        assert "AspectRatio." not in prompt

    def test_caption_instruction_is_conditional(self):
        base = dict(prompt="A cat", ratio=AspectRatio.SQUARE)
        with_caption = build_image_prompt(ImageRequest(generate_caption=True, **base))
        without = build_image_prompt(ImageRequest(generate_caption=False, **base))
        assert "caption" in with_caption
        assert "caption" not in without
