from fastapi import APIRouter, Depends
from showcase.modules.interactions.schemas import LikeToggleResponse, BookmarkToggleResponse
from showcase.modules.interactions.service import InteractionService
from showcase.modules.projects.schemas import ProjectResponse
from showcase.core.dependencies import get_current_user_id, get_request_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/projects", tags=["interactions"])
bookmarks_router = APIRouter(prefix="/bookmarks", tags=["interactions"])


def get_interaction_service(supabase: Client = Depends(get_request_supabase)) -> InteractionService:
    return InteractionService(supabase)


@router.post("/{project_id}/like", response_model=LikeToggleResponse)
async def toggle_like(
    project_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service)
):
    """Like the project, or remove the like if already liked"""
    return service.toggle_like(user_data["id"], project_id)


@router.post("/{project_id}/bookmark", response_model=BookmarkToggleResponse)
async def toggle_bookmark(
    project_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service)
):
    """Bookmark the project, or remove the bookmark if already bookmarked"""
    return service.toggle_bookmark(user_data["id"], project_id)


@bookmarks_router.get("", response_model=List[ProjectResponse])
async def list_bookmarks(
    user_data: Dict = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service)
):
    """Projects saved by the current user"""
    return service.list_user_bookmarks(user_data["id"])
