from fastapi import APIRouter, Depends
from octane_nexus.database.supabase_client import get_supabase
from octane_nexus.modules.library.schemas import (
    SaveBlueprintRequest, SavedBlueprint, PerformanceRequest, PerformanceResponse,
    ContentHistory, ContentHistoryUpdate, CommunityWin, CommunityInsights, LibraryInsightRequest
)
from octane_nexus.modules.library.service import LibraryService
from octane_nexus.modules.generation.schemas import InsightResponse
from octane_nexus.modules.generation.routes import get_generation_service
from octane_nexus.modules.generation.service import GenerationService
from octane_nexus.modules.profiles.routes import get_profile_service
from octane_nexus.modules.profiles.service import ProfileService
from octane_nexus.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/library", tags=["library"])


def get_library_service(supabase: Client = Depends(get_supabase)) -> LibraryService:
    return LibraryService(supabase)


@router.get("/blueprints", response_model=List[SavedBlueprint])
def list_blueprints(
    user_data: Dict = Depends(get_current_user),
    service: LibraryService = Depends(get_library_service)
):
    """List the user's saved blueprints, newest first"""
    return service.list_blueprints(user_data["id"])


@router.post("/blueprints", response_model=SavedBlueprint, status_code=201)
def create_blueprint(
    request: SaveBlueprintRequest,
    user_data: Dict = Depends(get_current_user),
    service: LibraryService = Depends(get_library_service),
    profile_service: ProfileService = Depends(get_profile_service),
    generation: GenerationService = Depends(get_generation_service)
):
    """Generate platform blueprints for an idea and save them to the library"""
    access = profile_service.get_access(user_data)
    return service.create_blueprint(user_data["id"], request.idea, access, generation)


@router.post("/blueprints/{blueprint_id}/performance", response_model=PerformanceResponse)
def mark_blueprint_performance(
    blueprint_id: str,
    request: PerformanceRequest,
    user_data: Dict = Depends(get_current_user),
    service: LibraryService = Depends(get_library_service)
):
    return service.mark_performance(user_data["id"], blueprint_id, request.status)


@router.get("/content-history", response_model=ContentHistory)
def get_content_history(
    user_data: Dict = Depends(get_current_user),
    service: LibraryService = Depends(get_library_service)
):
    return service.get_content_history(user_data["id"])


@router.put("/content-history", response_model=ContentHistory)
def save_content_history(
    request: ContentHistoryUpdate,
    user_data: Dict = Depends(get_current_user),
    service: LibraryService = Depends(get_library_service)
):
    """Save the creator's top posts used to match their brand voice"""
    return service.save_content_history(user_data["id"], request.content_text)


@router.get("/community/wins", response_model=List[CommunityWin])
def get_community_wins(
    user_data: Dict = Depends(get_current_user),
    service: LibraryService = Depends(get_library_service)
):
    return service.get_community_wins()


@router.get("/community/insights", response_model=CommunityInsights)
def get_community_insights(
    user_data: Dict = Depends(get_current_user),
    service: LibraryService = Depends(get_library_service)
):
    return service.get_community_insights()


@router.post("/insight", response_model=InsightResponse)
def generate_library_insight(
    request: LibraryInsightRequest,
    user_data: Dict = Depends(get_current_user),
    service: LibraryService = Depends(get_library_service),
    generation: GenerationService = Depends(get_generation_service)
):
    """Active Librarian: one insight about the user's strongest content pillar"""
    return InsightResponse(insight=service.generate_insight(user_data["id"], request.user_name, generation))
