from pydantic import BaseModel, Field
from typing import Optional, List, Literal

CalibrationOutcome = Literal["viral", "average", "flop"]
Grade = Literal["S", "A", "B", "C"]


# Requests

class BiosRequest(BaseModel):
    niche: str = ""
    vibe: str = ""


class VisionBiosRequest(BaseModel):
    vision: str = ""
    refinement: Optional[str] = None


class BrandBriefRequest(BaseModel):
    vision: Optional[str] = None


class VisionRequest(BaseModel):
    vision: str = ""


class DescriptionOptionsRequest(BaseModel):
    vision: str = ""
    platform: str = "Instagram"
    refinement: Optional[str] = None


class BannerConceptsRequest(BaseModel):
    niche: str = ""
    vibe: str = ""
    platform: str = "YouTube"


class NicheRequest(BaseModel):
    niche: str = ""


class IdeaRequest(BaseModel):
    idea: str = ""


class ProfileImageRequest(BaseModel):
    niche: str = ""
    vibe: str = ""
    refine_prompt: Optional[str] = None


class LibrarianInsightRequest(BaseModel):
    saved_ideas: List[str] = []
    user_name: Optional[str] = None


class AnalyzeIdeaRequest(BaseModel):
    idea: str = ""
    niche: str = ""


class SocialCaptionRequest(BaseModel):
    image_base64: Optional[str] = None
    image_mime_type: str = "image/jpeg"
    context: str = ""
    platform: str = "instagram"
    tone: str = "authentic"


class CalibrationFeedbackRequest(BaseModel):
    predicted_score: int = Field(ge=0, le=100)
    outcome: CalibrationOutcome


class ScriptRequest(BaseModel):
    title: str = ""
    angle: str = ""
    visual: str = ""


class PostAssetsRequest(BaseModel):
    media_type: str = "video"
    vibe: str = ""
    platform: str = "instagram"
    goal: str = "engagement"


# Results

class BiosResponse(BaseModel):
    bios: List[str]


class VisionBios(BaseModel):
    authority: str
    relatability: str
    mystery: str


class BrandBrief(BaseModel):
    niche: str
    vibe: str
    name_options: List[str]


class HandlesResponse(BaseModel):
    handles: List[str]


class DescriptionOption(BaseModel):
    text: str
    strategy_tags: List[str] = []


class DescriptionOptions(BaseModel):
    options: List[DescriptionOption]


class LogoConcept(BaseModel):
    title: str
    description: str
    visual_prompt: str
    placeholder_image: str


class BannerConcept(BaseModel):
    style_name: str
    color_palette: List[str]
    reasoning: str
    visual_description: str


class BannerConcepts(BaseModel):
    concepts: List[BannerConcept]


class VideoIdeasResponse(BaseModel):
    ideas: List[str]


class Blueprint(BaseModel):
    hook: str
    meat: List[str] = Field(min_length=2, max_length=2)
    cta: str
    setup_tip: str


class PlatformBlueprints(BaseModel):
    tiktok: Blueprint
    instagram: Blueprint
    x: Blueprint


class ProfileImage(BaseModel):
    image_url: str
    prompt: str


class InsightResponse(BaseModel):
    insight: str


class IdeaAnalysis(BaseModel):
    score: int = Field(ge=0, le=100)
    grade: Grade
    feedback: str
    viral_tweak: str
    prediction: str
    tasks: List[str] = []


class TrendingTopicResponse(BaseModel):
    idea: str


class CaptionResult(BaseModel):
    captions: List[str]
    hashtags: List[str]
    strategy_note: str


class VideoInspiration(BaseModel):
    title: str
    channel_name: str
    views: str
    thumbnail_color: str


class CalibrationState(BaseModel):
    bias: int
    feedback_count: int
    level: int


class VideoConcept(BaseModel):
    title: str
    angle: str
    visual: str


class VideoScript(BaseModel):
    hook: str
    body: str
    cta: str


class CreatorRecommendation(BaseModel):
    name: str
    handle: str
    why_follow: str


class ToolRecommendation(BaseModel):
    name: str
    category: str
    why_use: str


class PostAssets(BaseModel):
    hook_caption: str
    story_caption: str
    minimalist_caption: str
    hashtags: List[str]
    first_comment: str


class CommunityContext(BaseModel):
    context: Optional[str] = None
    viral_count: int = 0
    success_count: int = 0
    dominant_vibe: Optional[str] = None
    viral_potential: Optional[int] = None
