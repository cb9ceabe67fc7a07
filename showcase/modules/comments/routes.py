from fastapi import APIRouter, Depends
from showcase.modules.comments.schemas import CommentCreate, CommentUpdate, CommentResponse
from showcase.modules.comments.service import CommentService
from showcase.core.dependencies import get_current_user_id, check_comment_owner, get_request_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["comments"])


def get_comment_service(supabase: Client = Depends(get_request_supabase)) -> CommentService:
    return CommentService(supabase)


@router.get("/projects/{project_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    project_id: str,
    service: CommentService = Depends(get_comment_service)
):
    return service.list_comments(project_id)


@router.post("/projects/{project_id}/comments", response_model=CommentResponse, status_code=201)
async def create_comment(
    project_id: str,
    comment_data: CommentCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service)
):
    """Comment on a project"""
    return service.create_comment(user_data["id"], project_id, comment_data)


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    comment_data: CommentUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service),
    supabase: Client = Depends(get_request_supabase)
):
    """Edit a comment (author only)"""
    check_comment_owner(comment_id, user_data, supabase)
    return service.update_comment(comment_id, comment_data)


@router.delete("/comments/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service),
    supabase: Client = Depends(get_request_supabase)
):
    """Delete a comment (author only)"""
    check_comment_owner(comment_id, user_data, supabase)
    service.delete_comment(comment_id)
    return None
