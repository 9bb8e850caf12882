from fastapi import APIRouter, Depends
from octane_nexus.database.supabase_client import get_supabase
from octane_nexus.modules.profiles.schemas import (
    ProfileResponse, ProfileUpdate, ProfileAccess, StreakResponse,
    HandleCheckRequest, HandleCheck
)
from octane_nexus.modules.profiles.service import ProfileService, check_handle_availability
from octane_nexus.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the signed-in user's profile"""
    return service.get_profile(user_data["id"])


@router.patch("/me", response_model=ProfileResponse)
def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update name, niche, onboarding step or linked accounts"""
    return service.update_profile(user_data["id"], profile_data)


@router.get("/me/access", response_model=ProfileAccess)
def get_my_access(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_access(user_data)


@router.get("/me/streak", response_model=StreakResponse)
def get_my_streak(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Current streak, reset to 0 when the last post is older than 48h"""
    return service.get_streak(user_data["id"])


@router.post("/me/streak", response_model=StreakResponse)
def record_post(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Mark today as posted"""
    return service.record_post(user_data["id"])


@router.post("/handles/check", response_model=List[HandleCheck])
def check_handles(request: HandleCheckRequest):
    return check_handle_availability(request.handle, request.primary_platform)
