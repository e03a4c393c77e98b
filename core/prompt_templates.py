"""
Prompt templates for the three generation operations.

Every builder is a pure function of its request: identical requests render
byte-identical prompts.
"""

from models import (
    AnalysisRequest,
    ImageRequest,
    ScriptRequest,
    aspect_ratio_info,
)


def build_analysis_prompt(request: AnalysisRequest) -> str:
    """
    Build the media analysis prompt.

    Embeds the URL, the detail tier with its word-count band, the output
    language and, only when requested, the comment analysis instructions.
    """
    comments_flag = "YES" if request.include_comments else "NO"
    if request.include_comments:
        comments_instructions = """4. **Comments**: Look for user comments or discussions related to this content.
   - Focus specifically on comments that CORRECT errors in the original content.
   - Highlight "brilliant" or highly upvoted insights.
   - If no comments can be found, set this field to "N/A"."""
    else:
        comments_instructions = """4. **Comments**: Comment analysis was NOT requested. Set this field to "N/A"."""

    return f"""You are an expert AI Media Assistant. Your task is to analyze the content at the provided URL.

Target URL: {request.url}

Configuration:
1. Output Language: {request.language.value}
2. Summary Detail Level: {request.conciseness.label}
3. Analyze Comments: {comments_flag}

Instructions:
1. Use the Google Search tool to find the FULL content of the URL.
2. **Summary**: Generate a structured summary at the requested detail level.
   - Target length: {request.conciseness.target_words} (Brief: ~500 words, Moderate: ~1000 words, Detailed: ~2000+ words).
   - CRITICAL: Do NOT omit specific data, numbers, statistics, or key facts.
   - CRITICAL: Capture content that is designed to evoke emotion or audience reaction.
3. **Original Content**: EXTRACT THE FULL TRANSCRIPT OR ARTICLE TEXT VERBATIM.
   - **DO NOT SUMMARIZE**.
   - **DO NOT SHORTEN**.
   - **DO NOT PARAPHRASE**.
   - If it is a video, provide the complete spoken transcript.
   - If it is an article, provide the full body text.
{comments_instructions}

Write the summary and comments in {request.language.value}. Keep the original content in its source language.
Return the result in JSON format matching the schema."""


def build_script_prompt(request: ScriptRequest) -> str:
    """Build the video script prompt (styles, custom guidance, checks)."""
    styles = ", ".join(style.value for style in request.styles) or "None selected"
    custom = request.custom_instructions or "None provided."
    if request.fact_check:
        fact_check_flag = "YES - Use Google Search to verify claims"
        fact_check_instructions = (
            "5. **Fact Check**: Use Google Search to verify every objective claim in your script. "
            "Report any potential inaccuracies or confirm validity in the fact-check report."
        )
    else:
        fact_check_flag = "NO"
        fact_check_instructions = "5. **Fact Check**: Not requested. Set the fact-check report to \"N/A\"."
    safety_flag = "YES" if request.safety_check else "NO"
    if request.safety_check:
        safety_instructions = (
            "6. **Safety**: Analyze whether the content might violate common platform policies "
            "(YouTube/TikTok/Instagram) regarding hate speech, violence, or dangerous acts, and "
            "write the findings in the safety report."
        )
    else:
        safety_instructions = "6. **Safety**: Not requested. Set the safety report to \"N/A\"."

    return f"""You are a professional viral video strategist and scriptwriter.
Create a script based on the following requirements:

**Topic**: {request.topic}
**Target Styles**: {styles}
**Custom Inspiration/Instructions**: {custom}
**Target Length/Duration**: {request.duration}
**Output Language**: {request.language.value}
**Perform Safety Check**: {safety_flag}
**Perform Fact Check**: {fact_check_flag}

**Instructions**:
1. **Titles**: Generate 3-5 high CTR (Click-Through Rate) titles.
2. **Hook**: Create a scroll-stopping hook (first 3 seconds).
3. **Content**: Write the script body in the tone of the selected 'Target Styles'.
   - INCORPORATE the 'Custom Inspiration/Instructions' together with the selected styles; they add to the style guidance and do not replace it.
   - Fit the script to the 'Target Length/Duration'.
   - Include visual cues in brackets, e.g., [Cut to b-roll of...].
4. **Strategy**: Explain the psychological triggers used.
{fact_check_instructions}
{safety_instructions}

Write every field in {request.language.value}.
Return JSON matching the schema."""


def build_image_prompt(request: ImageRequest) -> str:
    """Build the prompt for one image of a batch."""
    ratio = aspect_ratio_info(request.ratio)
    lines = [
        f"Create a high-quality {request.style.value} style image.",
        f"Subject: {request.prompt}.",
        (
            f"Ensure the composition is suitable for a social media cover in {request.ratio.value} "
            f"{ratio.label.lower()} format ({ratio.description}): keep the main subject clear of the edges "
            "and leave breathing room for overlaid text."
        ),
    ]
    if request.generate_caption:
        lines.append(
            "Also, generate a short, engaging caption for this image suitable for social media. "
            "Return the caption as plain text."
        )
    return "\n".join(lines)


def compose_prompt(request) -> str:
    """Render the prompt for any request variant."""
    if isinstance(request, AnalysisRequest):
        return build_analysis_prompt(request)
    if isinstance(request, ScriptRequest):
        return build_script_prompt(request)
    if isinstance(request, ImageRequest):
        return build_image_prompt(request)
    raise TypeError(f"Unsupported request type: {type(request).__name__}")
