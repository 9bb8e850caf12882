import logging
from octane_nexus.modules.generation import mocks, prompts
from octane_nexus.modules.generation.calibration import ScoreCalibration, calibration, grade_for
from octane_nexus.modules.generation.client import GeminiClient, GeminiError
from octane_nexus.modules.generation.context import ContextService
from octane_nexus.modules.generation.parsing import (
    extract_json_object, extract_json_array, split_lines, require_text, require_text_list
)
from octane_nexus.modules.generation.schemas import (
    VisionBios, BrandBrief, DescriptionOption, DescriptionOptions, LogoConcept,
    BannerConcept, BannerConcepts, Blueprint, PlatformBlueprints, ProfileImage,
    IdeaAnalysis, CaptionResult, VideoInspiration, CalibrationState, VideoConcept,
    VideoScript, CreatorRecommendation, ToolRecommendation, PostAssets
)
from fastapi import HTTPException
from typing import Any, Callable, Dict, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

BLUEPRINT_PLATFORMS = ["tiktok", "instagram", "x"]
VIDEO_IDEA_MIN_LENGTH = 10


def require_input(value: Optional[str], message: str) -> str:
    if value is None or not value.strip():
        raise HTTPException(status_code=400, detail=message)
    return value.strip()


def optional_input(value: Optional[str]) -> Optional[str]:
    return value.strip() if value and value.strip() else None


def parse_blueprint(data: Any) -> Blueprint:
    """Validate one blueprint object; meat keeps the first 2 non-empty bullets"""
    if not isinstance(data, dict):
        raise ValueError("Blueprint is not an object")
    return Blueprint(
        hook=require_text(data, "hook"),
        meat=require_text_list(data, "meat", 2),
        cta=require_text(data, "cta"),
        setup_tip=require_text(data, "setup_tip"),
    )


def _coerce_score(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError("Missing score")
    try:
        return int(float(raw))
    except (OverflowError, ValueError) as e:
        raise ValueError(f"Unusable score: {raw!r}") from e


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise ValueError("Expected a list")
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


class GenerationService:
    """
    Gemini-backed generators. Each one validates its input (400 on empty required
    text), tries the live model and falls back to the static mock on any failure.
    """

    def __init__(
        self,
        client: GeminiClient,
        context: ContextService,
        score_calibration: ScoreCalibration = calibration
    ):
        self.client = client
        self.context = context
        self.calibration = score_calibration

    def _with_fallback(self, operation: str, live: Callable[[], T], fallback: Callable[[], T]) -> T:
        if not self.client.configured:
            logger.debug(f"{operation}: GEMINI_API_KEY not set, returning mock content")
            return fallback()
        try:
            return live()
        except GeminiError as e:
            logger.warning(f"{operation} failed, returning mock content: {e}")
        except Exception as e:
            logger.warning(f"{operation} reply unusable, returning mock content: {type(e).__name__}: {e}")
        return fallback()

    def _community_context(self) -> Optional[str]:
        return self.context.get_community_context().context

    # Identity

    def generate_bios(self, niche: str, vibe: str, user_id: Optional[str] = None) -> List[str]:
        if not (niche or "").strip() or not (vibe or "").strip():
            raise HTTPException(status_code=400, detail="Please share your niche and vibe first.")
        niche, vibe = niche.strip(), vibe.strip()

        def live() -> List[str]:
            voice = prompts.brand_voice_instruction(self.context.get_brand_voice(user_id), "bios")
            bios = split_lines(self.client.generate(prompts.bios_prompt(niche, vibe, voice)))[:3]
            if len(bios) < 3:
                raise ValueError(f"Expected 3 bios, got {len(bios)}")
            return bios

        return self._with_fallback("generate_bios", live, lambda: mocks.mock_bios(niche, vibe))

    def generate_vision_bios(
        self,
        vision: str,
        user_id: Optional[str] = None,
        refinement: Optional[str] = None
    ) -> VisionBios:
        vision = require_input(vision, "Please share your vision first.")
        refinement = optional_input(refinement)

        def live() -> VisionBios:
            voice = prompts.brand_voice_instruction(self.context.get_brand_voice(user_id), "bios")
            data = extract_json_object(self.client.generate(prompts.vision_bios_prompt(vision, refinement, voice)))
            return VisionBios(
                authority=require_text(data, "authority"),
                relatability=require_text(data, "relatability"),
                mystery=require_text(data, "mystery"),
            )

        return self._with_fallback("generate_vision_bios", live, mocks.mock_vision_bios)

    def generate_brand_brief(self, user_id: Optional[str] = None, vision: Optional[str] = None) -> BrandBrief:
        vision = optional_input(vision)

        def live() -> BrandBrief:
            history = self.context.get_brand_voice(user_id)
            data = extract_json_object(self.client.generate(prompts.brand_brief_prompt(history, vision)))
            names = data.get("name_options", data.get("nameOptions"))
            return BrandBrief(
                niche=require_text(data, "niche"),
                vibe=require_text(data, "vibe"),
                name_options=require_text_list({"name_options": names}, "name_options", 5),
            )

        return self._with_fallback("generate_brand_brief", live, mocks.mock_brand_brief)

    def generate_vision_handles(self, vision: str) -> List[str]:
        vision = require_input(vision, "Please share your vision first.")

        def live() -> List[str]:
            handles = [
                handle.lstrip("@").replace(" ", "").lower()
                for handle in split_lines(self.client.generate(prompts.vision_handles_prompt(vision)))
            ]
            handles = [handle for handle in handles if handle][:5]
            if len(handles) < 5:
                raise ValueError(f"Expected 5 handles, got {len(handles)}")
            return handles

        return self._with_fallback("generate_vision_handles", live, lambda: mocks.mock_vision_handles(vision))

    def generate_description_options(
        self,
        vision: str,
        platform: str,
        refinement: Optional[str] = None
    ) -> DescriptionOptions:
        vision = require_input(vision, "Please share your vision first.")
        platform = require_input(platform, "Please choose a platform.")
        refinement = optional_input(refinement)

        def live() -> DescriptionOptions:
            data = extract_json_object(
                self.client.generate(prompts.description_options_prompt(vision, platform, refinement))
            )
            raw_options = data.get("options")
            if not isinstance(raw_options, list):
                raise ValueError("Missing list: options")
            options = [
                DescriptionOption(text=require_text(option, "text"), strategy_tags=_text_list(option.get("strategy_tags") or []))
                for option in raw_options[:3]
            ]
            if len(options) < 3:
                raise ValueError(f"Expected 3 description options, got {len(options)}")
            return DescriptionOptions(options=options)

        return self._with_fallback(
            "generate_description_options", live, lambda: mocks.mock_description_options(platform)
        )

    def generate_logo_concepts(self, vision: str) -> List[LogoConcept]:
        vision = require_input(vision, "Please share your vision first.")

        def live() -> List[LogoConcept]:
            items = extract_json_array(self.client.generate(prompts.logo_concepts_prompt(vision)))[:3]
            if len(items) < 3:
                raise ValueError(f"Expected 3 logo concepts, got {len(items)}")
            # The model only writes text; placeholders come from the offline set
            placeholders = mocks.mock_logo_concepts(vision)
            return [
                LogoConcept(
                    title=require_text(item, "title"),
                    description=require_text(item, "description"),
                    visual_prompt=require_text(item, "visual_prompt"),
                    placeholder_image=placeholders[index].placeholder_image,
                )
                for index, item in enumerate(items)
            ]

        return self._with_fallback("generate_logo_concepts", live, lambda: mocks.mock_logo_concepts(vision))

    def generate_banner_concepts(self, niche: str, vibe: str, platform: str) -> BannerConcepts:
        niche = require_input(niche, "Please share your niche and vibe first.")
        vibe = require_input(vibe, "Please share your niche and vibe first.")
        platform = require_input(platform, "Please choose a platform.")

        def live() -> BannerConcepts:
            data = extract_json_object(self.client.generate(prompts.banner_concepts_prompt(niche, vibe, platform)))
            raw = data.get("concepts")
            if not isinstance(raw, list) or len(raw) < 3:
                raise ValueError("Expected 3 banner concepts")
            return BannerConcepts(concepts=[
                BannerConcept(
                    style_name=require_text(item, "style_name"),
                    color_palette=_text_list(item.get("color_palette") or []),
                    reasoning=require_text(item, "reasoning"),
                    visual_description=require_text(item, "visual_description"),
                )
                for item in raw[:3]
            ])

        return self._with_fallback(
            "generate_banner_concepts", live, lambda: mocks.mock_banner_concepts(niche, vibe, platform)
        )

    def generate_profile_image(self, niche: str, vibe: str, refine_prompt: Optional[str] = None) -> ProfileImage:
        if not (niche or "").strip() or not (vibe or "").strip():
            raise HTTPException(status_code=400, detail="Please share your niche and vibe first.")
        niche, vibe = niche.strip(), vibe.strip()
        refine_prompt = optional_input(refine_prompt)

        def live() -> ProfileImage:
            text = self.client.generate(prompts.profile_image_prompt(niche, vibe, refine_prompt))
            try:
                image_prompt = extract_json_object(text).get("prompt") or text
            except ValueError:
                image_prompt = text
            if not isinstance(image_prompt, str):
                raise ValueError("Image prompt is not text")
            return ProfileImage(image_url=mocks.profile_image_placeholder(niche), prompt=image_prompt.strip())

        return self._with_fallback(
            "generate_profile_image", live, lambda: mocks.mock_profile_image(niche, vibe, refine_prompt)
        )

    # Lab

    def generate_video_ideas(self, niche: str, user_id: Optional[str] = None) -> List[str]:
        niche = require_input(niche, "Please share your niche first so we can aim the ideas.")

        def live() -> List[str]:
            voice = prompts.brand_voice_instruction(self.context.get_brand_voice(user_id), "ideas")
            community = prompts.community_instruction(self._community_context())
            text = self.client.generate(prompts.video_ideas_prompt(niche, voice, community))
            ideas = split_lines(text, min_length=VIDEO_IDEA_MIN_LENGTH + 1)[:3]
            if not ideas:
                raise ValueError("Could not parse ideas from Gemini response")
            while len(ideas) < 3:
                ideas.append(mocks.padding_video_idea(niche))
            return ideas

        return self._with_fallback("generate_video_ideas", live, lambda: mocks.mock_video_ideas(niche))

    def generate_video_blueprint(self, idea: str, user_id: Optional[str] = None) -> Blueprint:
        idea = require_input(idea, "Please share an idea first so we can shape a blueprint.")

        def live() -> Blueprint:
            voice = prompts.brand_voice_instruction(self.context.get_brand_voice(user_id), "the blueprint lines")
            community = prompts.community_instruction(self._community_context())
            return parse_blueprint(extract_json_object(self.client.generate(prompts.blueprint_prompt(idea, voice, community))))

        return self._with_fallback("generate_video_blueprint", live, lambda: mocks.mock_blueprint(idea))

    def generate_platform_blueprints(self, idea: str, user_id: Optional[str] = None) -> PlatformBlueprints:
        idea = require_input(idea, "Please share an idea first so we can shape platform-specific blueprints.")

        def live() -> PlatformBlueprints:
            voice = prompts.brand_voice_instruction(self.context.get_brand_voice(user_id), "all three platform blueprints")
            community = prompts.community_instruction(self._community_context())
            data = extract_json_object(self.client.generate(prompts.platform_blueprints_prompt(idea, voice, community)))
            return PlatformBlueprints(**{
                platform: parse_blueprint(data.get(platform)) for platform in BLUEPRINT_PLATFORMS
            })

        return self._with_fallback(
            "generate_platform_blueprints", live, lambda: mocks.mock_platform_blueprints(idea)
        )

    def generate_librarian_insight(self, saved_ideas: List[str], user_name: Optional[str] = None) -> str:
        ideas = [idea.strip() for idea in saved_ideas or [] if isinstance(idea, str) and idea.strip()]
        if not ideas:
            raise HTTPException(status_code=400, detail="No saved ideas to analyze.")
        user_name = optional_input(user_name)

        def live() -> str:
            return self.client.generate(prompts.librarian_insight_prompt(ideas, user_name))

        return self._with_fallback(
            "generate_librarian_insight", live, lambda: mocks.mock_librarian_insight(ideas, user_name)
        )

    def analyze_idea(self, idea: str, niche: str) -> IdeaAnalysis:
        """Score an idea 0..100 (after calibration bias) and grade it S/A/B/C"""
        idea = require_input(idea, "Please share an idea to analyze.")
        niche = (niche or "").strip()

        def live() -> IdeaAnalysis:
            data = extract_json_object(self.client.generate(prompts.analyze_idea_prompt(idea, niche)))
            score = self.calibration.adjust(_coerce_score(data.get("score")))
            tasks = data.get("tasks")
            return IdeaAnalysis(
                score=score,
                grade=grade_for(score),
                feedback=require_text(data, "feedback"),
                viral_tweak=require_text(data, "viral_tweak"),
                prediction=data.get("prediction") or f"Predicted Viral Score: {score}/100",
                tasks=_text_list(tasks) if tasks is not None else [],
            )

        def fallback() -> IdeaAnalysis:
            score = self.calibration.adjust(mocks.heuristic_score(idea, niche))
            return mocks.mock_idea_analysis(score, grade_for(score), idea)

        return self._with_fallback("analyze_idea", live, fallback)

    def get_trending_topic(self, niche: str) -> str:
        niche = require_input(niche, "Please share your niche first.")

        def live() -> str:
            lines = split_lines(self.client.generate(prompts.trending_topic_prompt(niche)))
            if not lines:
                raise ValueError("Empty trending topic")
            return lines[0]

        return self._with_fallback("get_trending_topic", live, lambda: mocks.mock_trending_topic(niche))

    def generate_social_caption(
        self,
        context: str,
        platform: str,
        tone: str,
        image_base64: Optional[str] = None,
        image_mime_type: str = "image/jpeg"
    ) -> CaptionResult:
        image_base64 = optional_input(image_base64)
        if not (context or "").strip() and not image_base64:
            raise HTTPException(status_code=400, detail="Add an image or some context first.")
        context = (context or "").strip()
        platform = (platform or "instagram").strip()
        tone = (tone or "authentic").strip()

        def live() -> CaptionResult:
            inline_data = None
            if image_base64:
                # Accept full data URLs from the browser as well as bare base64
                data_part = image_base64.split(",", 1)[1] if image_base64.startswith("data:") else image_base64
                inline_data = {"mime_type": image_mime_type, "data": data_part}
            text = self.client.generate(
                prompts.social_caption_prompt(context, platform, tone, inline_data is not None),
                inline_data=inline_data,
            )
            data = extract_json_object(text)
            hashtags = [tag if tag.startswith("#") else f"#{tag}" for tag in _text_list(data.get("hashtags"))]
            return CaptionResult(
                captions=require_text_list(data, "captions", 3),
                hashtags=hashtags,
                strategy_note=require_text(data, "strategy_note"),
            )

        return self._with_fallback(
            "generate_social_caption", live, lambda: mocks.mock_social_caption(context, platform)
        )

    def generate_video_inspiration(self, niche: str) -> List[VideoInspiration]:
        niche = require_input(niche, "Please share your niche first.")

        def live() -> List[VideoInspiration]:
            items = extract_json_array(self.client.generate(prompts.video_inspiration_prompt(niche)))
            results = [
                VideoInspiration(
                    title=require_text(item, "title"),
                    channel_name=require_text(item, "channel_name"),
                    views=str(item.get("views") or "").strip() or "New",
                    thumbnail_color=str(item.get("thumbnail_color") or "1e293b").lstrip("#"),
                )
                for item in items[:3]
            ]
            if not results:
                raise ValueError("No video inspiration returned")
            return results

        return self._with_fallback("generate_video_inspiration", live, lambda: mocks.mock_video_inspiration(niche))

    def apply_calibration_feedback(self, predicted_score: int, outcome: str) -> CalibrationState:
        return self.calibration.apply_feedback(predicted_score, outcome)

    def get_calibration_state(self) -> CalibrationState:
        return self.calibration.state()

    # Creator library

    def generate_video_concepts(self, niche: str) -> List[VideoConcept]:
        niche = require_input(niche, "Please share your niche first.")

        def live() -> List[VideoConcept]:
            items = extract_json_array(self.client.generate(prompts.video_concepts_prompt(niche)))
            results = [
                VideoConcept(
                    title=require_text(item, "title"),
                    angle=require_text(item, "angle"),
                    visual=require_text(item, "visual"),
                )
                for item in items[:3]
            ]
            if not results:
                raise ValueError("No video concepts returned")
            return results

        return self._with_fallback("generate_video_concepts", live, lambda: mocks.mock_video_concepts(niche))

    def generate_script(self, title: str, angle: str, visual: str) -> VideoScript:
        title = require_input(title, "Pick a video concept first.")
        angle = (angle or "").strip()
        visual = (visual or "").strip()

        def live() -> VideoScript:
            data = extract_json_object(self.client.generate(prompts.script_prompt(title, angle, visual)))
            return VideoScript(
                hook=require_text(data, "hook"),
                body=require_text(data, "body"),
                cta=require_text(data, "cta"),
            )

        return self._with_fallback("generate_script", live, lambda: mocks.mock_script(title))

    def generate_top_creators(self, niche: str) -> List[CreatorRecommendation]:
        niche = require_input(niche, "Please share your niche first.")

        def live() -> List[CreatorRecommendation]:
            items = extract_json_array(self.client.generate(prompts.top_creators_prompt(niche)))
            results = []
            for item in items[:3]:
                handle = require_text(item, "handle")
                results.append(CreatorRecommendation(
                    name=require_text(item, "name"),
                    handle=handle if handle.startswith("@") else f"@{handle}",
                    why_follow=require_text(item, "why_follow"),
                ))
            if not results:
                raise ValueError("No creators returned")
            return results

        return self._with_fallback("generate_top_creators", live, lambda: mocks.mock_top_creators(niche))

    def generate_tool_recommendations(self, niche: str) -> List[ToolRecommendation]:
        niche = require_input(niche, "Please share your niche first.")

        def live() -> List[ToolRecommendation]:
            items = extract_json_array(self.client.generate(prompts.tool_recommendations_prompt(niche)))
            results = [
                ToolRecommendation(
                    name=require_text(item, "name"),
                    category=require_text(item, "category"),
                    why_use=require_text(item, "why_use"),
                )
                for item in items[:3]
            ]
            if not results:
                raise ValueError("No tools returned")
            return results

        return self._with_fallback("generate_tool_recommendations", live, mocks.mock_tool_recommendations)

    def generate_post_assets(self, media_type: str, vibe: str, platform: str, goal: str) -> PostAssets:
        media_type = require_input(media_type, "Choose a media type first.")
        platform = require_input(platform, "Please choose a platform.")
        vibe = (vibe or "").strip()
        goal = (goal or "engagement").strip()

        def live() -> PostAssets:
            data: Dict[str, Any] = extract_json_object(
                self.client.generate(prompts.post_assets_prompt(media_type, vibe or "authentic", platform, goal))
            )
            return PostAssets(
                hook_caption=require_text(data, "hook_caption"),
                story_caption=require_text(data, "story_caption"),
                minimalist_caption=require_text(data, "minimalist_caption"),
                hashtags=[tag if tag.startswith("#") else f"#{tag}" for tag in _text_list(data.get("hashtags"))],
                first_comment=require_text(data, "first_comment"),
            )

        return self._with_fallback("generate_post_assets", live, lambda: mocks.mock_post_assets(vibe, platform))
