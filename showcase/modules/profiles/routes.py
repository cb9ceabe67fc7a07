from fastapi import APIRouter, Depends
from showcase.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from showcase.modules.profiles.service import ProfileService
from showcase.core.dependencies import get_current_user_id, get_request_supabase
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_request_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user's profile, creating it on first access"""
    return service.get_or_create_profile(user_data)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Update the current user's profile"""
    return service.update_profile(user_data["id"], profile_data)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    service: ProfileService = Depends(get_profile_service)
):
    """Get a user's public profile"""
    return service.require_profile(user_id)
