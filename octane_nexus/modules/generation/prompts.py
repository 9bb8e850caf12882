"""Prompt text for the Gemini generators"""

from typing import List, Optional

BLUEPRINT_RULES = """Rules:
- The JSON must be valid and parseable.
- Do not include backticks or comments.
- "meat" MUST be an array of exactly 2 bullet strings.
- Keep each line short, concrete, and easy to film within 30-60 seconds."""


def brand_voice_instruction(brand_voice: Optional[str], target: str) -> str:
    if not brand_voice:
        return ""
    return (
        "\n\nIMPORTANT: Study this creator's successful past content and match their voice, "
        f"tone, and style:\n\n{brand_voice}\n\nGenerate {target} that sound authentically like this creator wrote them."
    )


def community_instruction(context: Optional[str]) -> str:
    return f"\n\n{context}" if context else ""


def bios_prompt(niche: str, vibe: str, voice: str) -> str:
    return f"""Create 3 short, SEO-friendly social media bios for a {niche} creator with a "{vibe}" style. Each bio should be:
- Under 150 characters
- No hashtags
- Professional yet authentic
- Clear value proposition

Return each bio as a separate line.{voice}"""


def vision_bios_prompt(vision: str, refinement: Optional[str], voice: str) -> str:
    refine = f'\n\nThe creator asked for this refinement: "{refinement}". Apply it to all three bios.' if refinement else ""
    return f"""Based on this creator's vision, generate 3 high-detail social media bios:

Vision: "{vision}"

Create:
1. AUTHORITY BIO: Position them as an expert with credentials, results, and credibility. Make it commanding and impressive.
2. RELATABILITY BIO: Make them feel like a friend who gets it. Show vulnerability, real experiences, and approachability.
3. MYSTERY BIO: Create intrigue and curiosity. Hint at something special without revealing everything.

Each bio should be 120-150 characters, no hashtags, authentic to their voice.{refine}{voice}

Return as JSON:
{{
  "authority": "bio text here",
  "relatability": "bio text here",
  "mystery": "bio text here"
}}"""


def brand_brief_prompt(content_history: Optional[str], vision: Optional[str]) -> str:
    history = (
        f"\n\nUser's previous content context:\n{content_history}\n\nUse this to inform niche and vibe suggestions."
        if content_history else ""
    )
    vision_text = (
        f'\n\nUser\'s Brand Vision:\n"{vision}"\n\nUse this vision to inform niche, vibe, and name suggestions.'
        if vision else ""
    )
    return f"""Analyze the user's context and suggest:
1. A specific niche (e.g., "fitness for busy parents", "crypto education", "book reviews")
2. A vibe/voice (e.g., "confident", "playful", "calm", "bold", "authentic")
3. Five name/handle options (short, memorable, brandable)
{history}{vision_text}

Return as JSON:
{{
  "niche": "specific niche description",
  "vibe": "voice descriptor",
  "name_options": ["option1", "option2", "option3", "option4", "option5"]
}}"""


def vision_handles_prompt(vision: str) -> str:
    return f"""Suggest 5 short, brandable social media handles for a creator with this vision:

"{vision}"

Rules: lowercase letters and numbers only, no @, no spaces, under 15 characters each.
Return each handle on its own line and nothing else."""


def description_options_prompt(vision: str, platform: str, refinement: Optional[str]) -> str:
    refine = f'\nApply this refinement: "{refinement}".' if refinement else ""
    return f"""Write 3 different {platform} profile descriptions for a creator with this vision:

"{vision}"
{refine}
Each description must fit {platform}'s bio limit and use a different strategy (authority, relatability, curiosity).

Return as JSON:
{{
  "options": [
    {{"text": "description", "strategy_tags": ["tag1", "tag2"]}}
  ]
}}"""


def logo_concepts_prompt(vision: str) -> str:
    return f"""Design 3 distinct logo concepts for a creator brand with this vision:

"{vision}"

Return a JSON array with exactly 3 objects:
[
  {{"title": "concept name", "description": "one sentence", "visual_prompt": "detailed image generation prompt"}}
]"""


def banner_concepts_prompt(niche: str, vibe: str, platform: str) -> str:
    return f"""Create 3 {platform} banner concepts for a {niche} creator with a "{vibe}" vibe.

Return as JSON:
{{
  "concepts": [
    {{
      "style_name": "short style name",
      "color_palette": ["#hex1", "#hex2", "#hex3"],
      "reasoning": "why this works for the audience",
      "visual_description": "what the banner looks like"
    }}
  ]
}}"""


def video_ideas_prompt(niche: str, voice: str, community: str) -> str:
    return f"""Create 3 unique, filmable video script ideas for a social media creator in the "{niche}" niche. Each idea should be:
- Specific and actionable
- Suitable for short-form video (30-60 seconds)
- Clear enough to film immediately
- Engaging and shareable

Return each idea as a separate, concise sentence. No numbering, no hashtags, just the idea itself.{voice}{community}"""


def blueprint_prompt(idea: str, voice: str, community: str) -> str:
    return f"""You are helping a creator film a short-form social video based on this idea: "{idea}".

Return a SINGLE JSON object with this exact shape and nothing else:
{{
  "hook": "3-second opening line spoken on camera",
  "meat": [
    "first simple bullet point for the middle",
    "second simple bullet point for the middle"
  ],
  "cta": "clear closing call to action line",
  "setup_tip": "one tip on lighting or camera placement"
}}

{BLUEPRINT_RULES}{voice}{community}"""


def platform_blueprints_prompt(idea: str, voice: str, community: str) -> str:
    return f"""You are helping a creator turn this idea into three platform-specific scripts: "{idea}".

Return a SINGLE JSON object with keys "tiktok", "instagram" and "x". Each value has this shape:
{{
  "hook": "opening line",
  "meat": ["first key point", "second key point"],
  "cta": "call to action",
  "setup_tip": "platform-specific setup tip"
}}

- TikTok: Focus on VISUAL HOOKS and fast-paced content (vertical format, trending sounds).
- Instagram: Focus on ENGAGEMENT (comments, shares, saves).
- X: Focus on VIRAL TEXT and shareability (thread structure, character count).

{BLUEPRINT_RULES}{voice}{community}"""


def profile_image_prompt(niche: str, vibe: str, refine_prompt: Optional[str]) -> str:
    refine = (
        f'\n\nIMPORTANT REFINEMENT: The user wants to refine this image with: "{refine_prompt}". '
        "Incorporate this refinement into the prompt."
        if refine_prompt else ""
    )
    return f"""Create a detailed, professional prompt for generating a profile picture for a social media creator. The creator's niche is "{niche}" and their vibe is "{vibe}".{refine}

Return a SINGLE JSON object with this exact shape:
{{
  "prompt": "detailed image generation prompt describing a professional, modern profile picture that matches the niche and vibe"
}}

The prompt should describe:
- Professional headshot style
- Colors and mood that match the vibe
- Subtle elements that hint at the niche
- Clean, modern aesthetic suitable for social media profiles

Return ONLY the JSON, no other text."""


def librarian_insight_prompt(saved_ideas: List[str], user_name: Optional[str]) -> str:
    ideas_text = "\n".join(f"{index + 1}. {idea}" for index, idea in enumerate(saved_ideas))
    creator = f"The creator, {user_name}," if user_name else "The creator"
    example_name = user_name or "Your"
    return f"""You are the Active Librarian, an AI Talent Manager analyzing a creator's content library.

{creator} has saved {len(saved_ideas)} video ideas:

{ideas_text}

Analyze these ideas and provide a concise, actionable insight (2-3 sentences max) that:
1. Identifies their strongest content pillar or theme
2. Provides specific, actionable guidance on what to do more of

Format: Address them by name if provided, then give the insight. Example: "{example_name}, your gardening tips are your strongest pillar. Let's do more of those."

Return ONLY the insight text, no extra formatting or explanation."""


def analyze_idea_prompt(idea: str, niche: str) -> str:
    return f"""You are a viral content strategist. Rate this short-form video idea for a {niche or "general"} creator:

"{idea}"

Return a SINGLE JSON object:
{{
  "score": 0-100 integer viral potential,
  "feedback": "one or two sentences on strengths and weaknesses",
  "viral_tweak": "one concrete change that would raise the score",
  "prediction": "one sentence predicting how the audience will react",
  "tasks": ["3 short action items to prepare the video"]
}}"""


def trending_topic_prompt(niche: str) -> str:
    return f"""Give me one trending, filmable short-form video idea for a {niche} creator right now.
Return only the idea as a single sentence."""


def social_caption_prompt(context: str, platform: str, tone: str, has_image: bool) -> str:
    media = "the attached image" if has_image else "the post"
    return f"""Write {platform} captions for {media}. Context from the creator: "{context}". Tone: {tone}.

Return as JSON:
{{
  "captions": ["caption 1", "caption 2", "caption 3"],
  "hashtags": ["#tag1", "#tag2", "#tag3", "#tag4", "#tag5"],
  "strategy_note": "one sentence on why these will perform"
}}"""


def video_inspiration_prompt(niche: str) -> str:
    return f"""Suggest 3 YouTube videos a {niche} creator should study for inspiration.

Return a JSON array:
[
  {{"title": "video title", "channel_name": "channel", "views": "e.g. 1.2M views", "thumbnail_color": "6-digit hex without #"}}
]"""


def video_concepts_prompt(niche: str) -> str:
    return f"""Create 3 short-form video concepts for a {niche} creator.

Return a JSON array:
[
  {{"title": "video title", "angle": "the content angle", "visual": "how it should look on screen"}}
]"""


def script_prompt(title: str, angle: str, visual: str) -> str:
    return f"""Write a 30-60 second video script.
Title: "{title}"
Angle: {angle}
Visual style: {visual}

Return as JSON:
{{"hook": "opening line", "body": "the main script", "cta": "closing call to action"}}"""


def top_creators_prompt(niche: str) -> str:
    return f"""List 3 creators in the {niche} space worth following and studying.

Return a JSON array:
[
  {{"name": "creator name", "handle": "@handle", "why_follow": "one sentence"}}
]"""


def tool_recommendations_prompt(niche: str) -> str:
    return f"""Recommend 3 tools a {niche} creator should use to make content faster and better.

Return a JSON array:
[
  {{"name": "tool name", "category": "e.g. Editing", "why_use": "one sentence"}}
]"""


def post_assets_prompt(media_type: str, vibe: str, platform: str, goal: str) -> str:
    return f"""Create post copy for a {media_type} on {platform}. Vibe: {vibe}. Goal: {goal}.

Return as JSON:
{{
  "hook_caption": "scroll-stopping caption",
  "story_caption": "longer storytelling caption",
  "minimalist_caption": "very short caption",
  "hashtags": ["#tag1", "#tag2", "#tag3", "#tag4", "#tag5"],
  "first_comment": "comment to pin under the post"
}}"""
