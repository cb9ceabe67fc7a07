from supabase import Client
from showcase.modules.comments.schemas import CommentCreate, CommentUpdate, CommentResponse
from typing import List
from fastapi import HTTPException
from datetime import datetime, timezone

COMMENT_SELECT = "*, profiles:user_id (id, name, avatar_url)"


class CommentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_comments(self, project_id: str) -> List[CommentResponse]:
        """Comments on a project, newest first"""
        result = self.supabase.table("project_comments")\
            .select(COMMENT_SELECT)\
            .eq("project_id", project_id)\
            .order("created_at", desc=True)\
            .execute()
        return [CommentResponse(**comment) for comment in (result.data or [])]

    def get_comment(self, comment_id: str) -> CommentResponse:
        result = self.supabase.table("project_comments")\
            .select(COMMENT_SELECT)\
            .eq("id", comment_id)\
            .maybe_single()\
            .execute()
        if result is None or not result.data:
            raise HTTPException(status_code=404, detail="Comment not found")
        return CommentResponse(**result.data)

    def create_comment(self, user_id: str, project_id: str, comment_data: CommentCreate) -> CommentResponse:
        project = self.supabase.table("projects")\
            .select("id")\
            .eq("id", project_id)\
            .maybe_single()\
            .execute()
        if project is None or not project.data:
            raise HTTPException(status_code=404, detail="Project not found")

        result = self.supabase.table("project_comments").insert({
            "user_id": user_id,
            "project_id": project_id,
            "content": comment_data.content
        }).execute()

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create comment")
        return self.get_comment(result.data[0]["id"])

    def update_comment(self, comment_id: str, comment_data: CommentUpdate) -> CommentResponse:
        result = self.supabase.table("project_comments")\
            .update({
                "content": comment_data.content,
                "updated_at": datetime.now(timezone.utc).isoformat()
            })\
            .eq("id", comment_id)\
            .execute()

        if not result.data:
            raise HTTPException(status_code=404, detail="Comment not found")
        return self.get_comment(comment_id)

    def delete_comment(self, comment_id: str) -> bool:
        result = self.supabase.table("project_comments")\
            .delete()\
            .eq("id", comment_id)\
            .execute()
        return len(result.data or []) > 0
