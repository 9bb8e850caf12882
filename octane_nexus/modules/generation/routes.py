from fastapi import APIRouter, Depends
from octane_nexus.database.supabase_client import get_optional_supabase
from octane_nexus.modules.generation.client import GeminiClient
from octane_nexus.modules.generation.context import ContextService
from octane_nexus.modules.generation.service import GenerationService
from octane_nexus.modules.generation.schemas import (
    BiosRequest, VisionBiosRequest, BrandBriefRequest, VisionRequest, DescriptionOptionsRequest,
    BannerConceptsRequest, NicheRequest, IdeaRequest, ProfileImageRequest, LibrarianInsightRequest,
    AnalyzeIdeaRequest, SocialCaptionRequest, CalibrationFeedbackRequest, ScriptRequest,
    PostAssetsRequest, BiosResponse, VisionBios, BrandBrief, HandlesResponse, DescriptionOptions,
    LogoConcept, BannerConcepts, VideoIdeasResponse, Blueprint, PlatformBlueprints, ProfileImage,
    InsightResponse, IdeaAnalysis, TrendingTopicResponse, CaptionResult, VideoInspiration,
    CalibrationState, VideoConcept, VideoScript, CreatorRecommendation, ToolRecommendation, PostAssets
)
from octane_nexus.core.dependencies import get_current_user, get_optional_user
from supabase import Client
from typing import Dict, List, Optional

router = APIRouter(prefix="/generate", tags=["generation"])


def get_generation_service(supabase: Optional[Client] = Depends(get_optional_supabase)) -> GenerationService:
    return GenerationService(GeminiClient(), ContextService(supabase))


def _user_id(user_data: Optional[Dict]) -> Optional[str]:
    return user_data["id"] if user_data else None


@router.post("/bios", response_model=BiosResponse)
def generate_bios(
    request: BiosRequest,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: GenerationService = Depends(get_generation_service)
):
    """Three short bios; signed-in users get them in their brand voice"""
    return BiosResponse(bios=service.generate_bios(request.niche, request.vibe, _user_id(user_data)))


@router.post("/vision-bios", response_model=VisionBios)
def generate_vision_bios(
    request: VisionBiosRequest,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_vision_bios(request.vision, _user_id(user_data), request.refinement)


@router.post("/brand-brief", response_model=BrandBrief)
def generate_brand_brief(
    request: BrandBriefRequest,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_brand_brief(_user_id(user_data), request.vision)


@router.post("/vision-handles", response_model=HandlesResponse)
def generate_vision_handles(
    request: VisionRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return HandlesResponse(handles=service.generate_vision_handles(request.vision))


@router.post("/description-options", response_model=DescriptionOptions)
def generate_description_options(
    request: DescriptionOptionsRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_description_options(request.vision, request.platform, request.refinement)


@router.post("/logo-concepts", response_model=List[LogoConcept])
def generate_logo_concepts(
    request: VisionRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_logo_concepts(request.vision)


@router.post("/banner-concepts", response_model=BannerConcepts)
def generate_banner_concepts(
    request: BannerConceptsRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_banner_concepts(request.niche, request.vibe, request.platform)


@router.post("/profile-image", response_model=ProfileImage)
def generate_profile_image(
    request: ProfileImageRequest,
    service: GenerationService = Depends(get_generation_service)
):
    """Image prompt plus an SVG placeholder; real rendering goes through /api/generate-image"""
    return service.generate_profile_image(request.niche, request.vibe, request.refine_prompt)


@router.post("/video-ideas", response_model=VideoIdeasResponse)
def generate_video_ideas(
    request: NicheRequest,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: GenerationService = Depends(get_generation_service)
):
    return VideoIdeasResponse(ideas=service.generate_video_ideas(request.niche, _user_id(user_data)))


@router.post("/blueprint", response_model=Blueprint)
def generate_video_blueprint(
    request: IdeaRequest,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_video_blueprint(request.idea, _user_id(user_data))


@router.post("/platform-blueprints", response_model=PlatformBlueprints)
def generate_platform_blueprints(
    request: IdeaRequest,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: GenerationService = Depends(get_generation_service)
):
    """TikTok, Instagram and X versions of one idea"""
    return service.generate_platform_blueprints(request.idea, _user_id(user_data))


@router.post("/librarian-insight", response_model=InsightResponse)
def generate_librarian_insight(
    request: LibrarianInsightRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return InsightResponse(insight=service.generate_librarian_insight(request.saved_ideas, request.user_name))


@router.post("/analyze-idea", response_model=IdeaAnalysis)
def analyze_idea(
    request: AnalyzeIdeaRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.analyze_idea(request.idea, request.niche)


@router.post("/trending-topic", response_model=TrendingTopicResponse)
def get_trending_topic(
    request: NicheRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return TrendingTopicResponse(idea=service.get_trending_topic(request.niche))


@router.post("/social-caption", response_model=CaptionResult)
def generate_social_caption(
    request: SocialCaptionRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_social_caption(
        request.context, request.platform, request.tone,
        image_base64=request.image_base64, image_mime_type=request.image_mime_type
    )


@router.post("/video-inspiration", response_model=List[VideoInspiration])
def generate_video_inspiration(
    request: NicheRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_video_inspiration(request.niche)


@router.get("/calibration", response_model=CalibrationState)
def get_calibration(service: GenerationService = Depends(get_generation_service)):
    """Current training level shown in the dashboard"""
    return service.get_calibration_state()


@router.post("/calibration", response_model=CalibrationState)
def apply_calibration_feedback(
    request: CalibrationFeedbackRequest,
    user_data: Dict = Depends(get_current_user),
    service: GenerationService = Depends(get_generation_service)
):
    """Reality Check: report how a scored idea actually performed. Signed-in users only."""
    return service.apply_calibration_feedback(request.predicted_score, request.outcome)


@router.post("/video-concepts", response_model=List[VideoConcept])
def generate_video_concepts(
    request: NicheRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_video_concepts(request.niche)


@router.post("/script", response_model=VideoScript)
def generate_script(
    request: ScriptRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_script(request.title, request.angle, request.visual)


@router.post("/top-creators", response_model=List[CreatorRecommendation])
def generate_top_creators(
    request: NicheRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_top_creators(request.niche)


@router.post("/tool-recommendations", response_model=List[ToolRecommendation])
def generate_tool_recommendations(
    request: NicheRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_tool_recommendations(request.niche)


@router.post("/post-assets", response_model=PostAssets)
def generate_post_assets(
    request: PostAssetsRequest,
    service: GenerationService = Depends(get_generation_service)
):
    return service.generate_post_assets(request.media_type, request.vibe, request.platform, request.goal)
