"""
Static fallbacks for every generator.

Returned when GEMINI_API_KEY is missing or the live reply cannot be used, so the
product keeps working offline. Values only depend on the inputs.
"""

import re
import base64
from datetime import datetime, timezone
from octane_nexus.modules.generation.schemas import (
    VisionBios, BrandBrief, DescriptionOption, DescriptionOptions, LogoConcept,
    BannerConcept, BannerConcepts, Blueprint, PlatformBlueprints, ProfileImage,
    IdeaAnalysis, CaptionResult, VideoInspiration, VideoConcept, VideoScript,
    CreatorRecommendation, ToolRecommendation, PostAssets
)
from typing import List, Optional


def _slug(text: str, fallback: str = "creator") -> str:
    slug = re.sub(r"[^a-z0-9]", "", text.lower())
    return slug[:15] or fallback


def _svg_data_url(svg: str) -> str:
    return "data:image/svg+xml;base64," + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def mock_bios(niche: str, vibe: str) -> List[str]:
    niche, vibe = niche.strip(), vibe.strip()
    return [
        f"Helping you grow as a {niche} creator with a {vibe} twist. Easy tips, real results.",
        f"Your go-to {niche} corner on the internet. {vibe} stories, simple playbooks, steady growth.",
        f"Building a {vibe} space for {niche} lovers. Clear ideas, smart posts, and steady momentum.",
    ]


def mock_vision_bios() -> VisionBios:
    return VisionBios(
        authority="Expert insights and proven strategies for creators who want to build real authority.",
        relatability="Real talk from someone who's been there. No fluff, just honest stories and practical advice.",
        mystery="Behind the scenes of building something different. Join the journey.",
    )


def mock_brand_brief() -> BrandBrief:
    return BrandBrief(
        niche="content creation",
        vibe="confident",
        name_options=["creator", "builder", "maker", "studio", "lab"],
    )


def mock_vision_handles(vision: str) -> List[str]:
    base = _slug(vision.split(".")[0].replace(" ", "")[:12])
    return [f"{base}hq", f"the{base}", f"{base}lab", f"{base}studio", f"real{base}"]


def mock_description_options(platform: str) -> DescriptionOptions:
    return DescriptionOptions(options=[
        DescriptionOption(
            text=f"Turning big ideas into simple wins on {platform}. New breakdowns every week.",
            strategy_tags=["clarity", "consistency"],
        ),
        DescriptionOption(
            text="Documenting the messy middle of building something real. Come learn with me.",
            strategy_tags=["relatability", "story"],
        ),
        DescriptionOption(
            text="The playbook nobody handed me. Proven frameworks, zero fluff.",
            strategy_tags=["authority", "curiosity"],
        ),
    ])


def mock_logo_concepts(vision: str) -> List[LogoConcept]:
    initial = (re.sub(r"\W", "", vision)[:1] or "N").upper()
    styles = [
        ("Monogram Mark", "A bold single-letter monogram inside a rounded square.", "#f59e0b"),
        ("Signal Wave", "A minimalist wave line suggesting momentum and reach.", "#38bdf8"),
        ("Badge Seal", "A circular badge with a clean wordmark for instant trust.", "#a78bfa"),
    ]
    concepts = []
    for title, description, color in styles:
        svg = (
            f'<svg width="200" height="200" xmlns="http://www.w3.org/2000/svg">'
            f'<rect width="200" height="200" rx="32" fill="#0f172a"/>'
            f'<text x="100" y="125" font-family="Arial" font-size="72" fill="{color}" '
            f'text-anchor="middle">{initial}</text></svg>'
        )
        concepts.append(LogoConcept(
            title=title,
            description=description,
            visual_prompt=f"{description} Flat vector logo, {color} on deep navy, no text besides '{initial}'.",
            placeholder_image=_svg_data_url(svg),
        ))
    return concepts


def mock_banner_concepts(niche: str, vibe: str, platform: str) -> BannerConcepts:
    return BannerConcepts(concepts=[
        BannerConcept(
            style_name="Clean Authority",
            color_palette=["#0f172a", "#f59e0b", "#f8fafc"],
            reasoning=f"High contrast reads instantly on {platform} and signals {niche} expertise.",
            visual_description="Dark background, bold headline left, subtle grid texture right.",
        ),
        BannerConcept(
            style_name="Warm Story",
            color_palette=["#7c2d12", "#fdba74", "#fff7ed"],
            reasoning=f"Warm tones match a {vibe} voice and invite people into the story.",
            visual_description="Soft gradient with a candid photo cut-out and handwritten accent.",
        ),
        BannerConcept(
            style_name="Bold Signal",
            color_palette=["#111827", "#22d3ee", "#e5e7eb"],
            reasoning="Neon accent creates a memorable brand cue across thumbnails and headers.",
            visual_description="Minimal layout, single neon stripe, oversized channel name.",
        ),
    ])


def padding_video_idea(niche: str) -> str:
    return f"Create a quick tutorial showing one essential {niche.strip()} technique in under 60 seconds."


def mock_video_ideas(niche: str) -> List[str]:
    niche = niche.strip()
    return [
        f"Share the one {niche} mistake you made early on and the simple fix that changed everything.",
        f"Film a 30-second before-and-after showing a {niche} transformation step by step.",
        padding_video_idea(niche),
    ]


def mock_blueprint(idea: str) -> Blueprint:
    idea = idea.strip()
    return Blueprint(
        hook=f"Stop scrolling if you've ever wondered about this: {idea}",
        meat=[
            "Show the problem in one quick visual so viewers instantly relate.",
            "Walk through the fix in two simple steps, on camera, in real time.",
        ],
        cta="Follow for the next part and save this so you don't forget it.",
        setup_tip="Face a window for soft natural light and keep the camera at eye level.",
    )


def mock_platform_blueprints(idea: str) -> PlatformBlueprints:
    idea = idea.strip()
    return PlatformBlueprints(
        tiktok=Blueprint(
            hook=f"POV: you finally figured out {idea}",
            meat=[
                "Open on the result, then jump-cut back to the starting point.",
                "Text overlay each step so it works with the sound off.",
            ],
            cta="Follow for part 2.",
            setup_tip="Shoot vertical 9:16 and pair with a trending sound at low volume.",
        ),
        instagram=Blueprint(
            hook=f"Save this before you try {idea}",
            meat=[
                "Give the single most useful takeaway in the first 5 seconds.",
                "Ask viewers to comment their own version to drive replies.",
            ],
            cta="Comment 'GUIDE' and share this with a friend who needs it.",
            setup_tip="Use a clean background and add captions in the safe zone for Reels.",
        ),
        x=Blueprint(
            hook=f"Most people get {idea} wrong. Here's what actually works:",
            meat=[
                "One concrete lesson per post, under 240 characters.",
                "End the thread with a surprising stat or personal result.",
            ],
            cta="Repost if this helped and follow for more threads like it.",
            setup_tip="Write it as a 4-post thread and pin the first post.",
        ),
    )


def mock_profile_image(niche: str, vibe: str, refine_prompt: Optional[str] = None) -> ProfileImage:
    niche, vibe = niche.strip(), vibe.strip()
    prompt = (
        f"Professional headshot of a {niche} creator, {vibe} mood, soft studio lighting, "
        f"clean modern background with subtle {niche} elements, high quality photography"
    )
    if refine_prompt and refine_prompt.strip():
        prompt += f", {refine_prompt.strip()}"
    return ProfileImage(image_url=profile_image_placeholder(niche), prompt=prompt)


def profile_image_placeholder(niche: str) -> str:
    label = re.sub(r"[<>&\"']", "", niche.strip())
    svg = (
        '<svg width="400" height="400" xmlns="http://www.w3.org/2000/svg">'
        '<rect width="400" height="400" fill="#1e293b"/>'
        '<circle cx="200" cy="180" r="60" fill="#f59e0b" opacity="0.3"/>'
        '<text x="200" y="280" font-family="Arial" font-size="16" fill="#f59e0b" text-anchor="middle">Profile Image</text>'
        f'<text x="200" y="300" font-family="Arial" font-size="12" fill="#94a3b8" text-anchor="middle">{label}</text>'
        '</svg>'
    )
    return _svg_data_url(svg)


def mock_librarian_insight(saved_ideas: List[str], user_name: Optional[str] = None) -> str:
    lead = f"{user_name}, your" if user_name else "Your"
    first = saved_ideas[0].strip() if saved_ideas else "latest"
    return (
        f"{lead} library is building a clear pillar around ideas like \"{first}\". "
        f"Let's double down on that theme with {min(len(saved_ideas), 3) or 1} more scripts this week."
    )


def heuristic_score(idea: str, niche: str) -> int:
    """Rough virality guess for offline mode"""
    text = idea.strip()
    words = text.split()
    score = 60
    if re.search(r"\d", text):
        score += 10
    if "?" in text or "!" in text:
        score += 8
    if 6 <= len(words) <= 16:
        score += 7
    if niche.strip() and niche.strip().lower() in text.lower():
        score += 5
    if re.search(r"\b(secret|mistake|never|stop|why|how)\b", text.lower()):
        score += 5
    return score


def mock_idea_analysis(score: int, grade: str, idea: str) -> IdeaAnalysis:
    if grade in ("S", "A"):
        feedback = "Strong hook with a clear payoff. This has real share potential."
    elif grade == "B":
        feedback = "Solid concept, but the opening needs more tension to stop the scroll."
    else:
        feedback = "The idea is too broad. Narrow it to one specific outcome."
    return IdeaAnalysis(
        score=score,
        grade=grade,
        feedback=feedback,
        viral_tweak=f"Add a number or a bold claim up front: \"3 things nobody tells you about {idea.strip()}\"",
        prediction=f"Predicted Viral Score: {score}/100",
        tasks=[
            "Rewrite the first line as a question or a bold claim.",
            "Show the end result in the first 3 seconds.",
            "Close with one clear call to action.",
        ],
    )


def mock_trending_topic(niche: str) -> str:
    return f"The biggest {niche.strip()} myth of {datetime.now(timezone.utc).year}, debunked in 30 seconds."


def mock_social_caption(context: str, platform: str) -> CaptionResult:
    topic = context.strip() or "this moment"
    tag = _slug(platform, "social")
    return CaptionResult(
        captions=[
            f"Nobody talks about {topic}. So I will.",
            f"Here's the part of {topic} I almost didn't share.",
            f"{topic.capitalize()}. That's it. That's the post.",
        ],
        hashtags=["#creator", "#behindthescenes", f"#{tag}tips", "#contentcreator", "#growth"],
        strategy_note="Lead with curiosity, keep the caption short, and ask one question to drive comments.",
    )


def mock_video_inspiration(niche: str) -> List[VideoInspiration]:
    niche = niche.strip()
    return [
        VideoInspiration(title=f"I tried {niche} for 30 days. Here's what happened", channel_name="The Daily Build", views="1.2M views", thumbnail_color="f59e0b"),
        VideoInspiration(title=f"The {niche} system nobody talks about", channel_name="Creator Lab", views="845K views", thumbnail_color="38bdf8"),
        VideoInspiration(title=f"Beginner vs pro: {niche} edition", channel_name="Level Up Studio", views="2.1M views", thumbnail_color="a78bfa"),
    ]


def mock_video_concepts(niche: str) -> List[VideoConcept]:
    niche = niche.strip()
    return [
        VideoConcept(title=f"3 {niche} myths that waste your time", angle="Myth-busting", visual="Fast cuts with bold text overlays"),
        VideoConcept(title=f"My {niche} routine in 60 seconds", angle="Day in the life", visual="Handheld POV with time stamps"),
        VideoConcept(title=f"The {niche} tool I can't live without", angle="Recommendation", visual="Close-up product shots and screen recording"),
    ]


def mock_script(title: str) -> VideoScript:
    return VideoScript(
        hook=f"{title.strip()}, and why it matters more than you think.",
        body="Start with the problem, show one clear example, then reveal the simple fix step by step.",
        cta="Follow for more and tell me in the comments what you want next.",
    )


def mock_top_creators(niche: str) -> List[CreatorRecommendation]:
    slug = _slug(niche, "niche")
    return [
        CreatorRecommendation(name=f"{niche.strip().title()} Daily", handle=f"@{slug}daily", why_follow="Consistent short-form breakdowns with strong hooks."),
        CreatorRecommendation(name="The Builder Notes", handle="@buildernotes", why_follow="Transparent about growth numbers and what actually worked."),
        CreatorRecommendation(name="Studio Signal", handle="@studiosignal", why_follow="Great example of a recognisable visual brand."),
    ]


def mock_tool_recommendations() -> List[ToolRecommendation]:
    return [
        ToolRecommendation(name="CapCut", category="Editing", why_use="Fast captions and templates for short-form video."),
        ToolRecommendation(name="Canva", category="Design", why_use="Quick thumbnails, banners and carousels on brand."),
        ToolRecommendation(name="Notion", category="Planning", why_use="Keep your content calendar and ideas in one place."),
    ]


def mock_post_assets(vibe: str, platform: str) -> PostAssets:
    vibe = vibe.strip() or "authentic"
    tag = _slug(platform, "social")
    return PostAssets(
        hook_caption="You're going to want to save this one.",
        story_caption=f"A quick {vibe} look at what went into this post and what I learned along the way.",
        minimalist_caption="Less noise. More signal.",
        hashtags=["#contentcreator", f"#{tag}", "#creatorlife", "#behindthescenes", "#growth"],
        first_comment="What should I break down next? Drop it below.",
    )
