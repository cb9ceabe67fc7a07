from supabase import Client
from showcase.modules.interactions.schemas import LikeToggleResponse, BookmarkToggleResponse
from showcase.modules.projects.schemas import ProjectResponse
from showcase.modules.projects.service import ProjectService
from typing import Any, Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class InteractionService:
    """Like and bookmark toggles.

    A toggle is read-then-write and not atomic; two concurrent toggles by the
    same user can both insert or both delete, and the likes_count adjustment
    can lose updates.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.projects = ProjectService(supabase)

    def _get_project_row(self, project_id: str) -> Dict[str, Any]:
        result = self.supabase.table("projects")\
            .select("id, likes_count")\
            .eq("id", project_id)\
            .maybe_single()\
            .execute()
        if result is None or not result.data:
            raise HTTPException(status_code=404, detail="Project not found")
        return result.data

    def _toggle(self, table: str, user_id: str, project_id: str) -> bool:
        """Delete the (user, project) row if present, else insert it. Returns the new state."""
        existing = self.supabase.table(table)\
            .select("id")\
            .eq("user_id", user_id)\
            .eq("project_id", project_id)\
            .limit(1)\
            .execute()

        if existing.data:
            self.supabase.table(table)\
                .delete()\
                .eq("user_id", user_id)\
                .eq("project_id", project_id)\
                .execute()
            return False

        self.supabase.table(table)\
            .insert({"user_id": user_id, "project_id": project_id})\
            .execute()
        return True

    def toggle_like(self, user_id: str, project_id: str) -> LikeToggleResponse:
        project = self._get_project_row(project_id)
        is_liked = self._toggle("project_likes", user_id, project_id)

        likes_count = max(0, (project.get("likes_count") or 0) + (1 if is_liked else -1))
        self.supabase.table("projects")\
            .update({"likes_count": likes_count})\
            .eq("id", project_id)\
            .execute()

        logger.info(f"User {user_id} {'liked' if is_liked else 'unliked'} project {project_id}")
        return LikeToggleResponse(project_id=project_id, is_liked=is_liked, likes_count=likes_count)

    def toggle_bookmark(self, user_id: str, project_id: str) -> BookmarkToggleResponse:
        self._get_project_row(project_id)
        is_bookmarked = self._toggle("project_bookmarks", user_id, project_id)
        return BookmarkToggleResponse(project_id=project_id, is_bookmarked=is_bookmarked)

    def list_user_bookmarks(self, user_id: str) -> List[ProjectResponse]:
        """Projects bookmarked by the user, most recently bookmarked first"""
        result = self.supabase.table("project_bookmarks")\
            .select("created_at, projects (*, profiles:user_id (id, name, avatar_url))")\
            .eq("user_id", user_id)\
            .order("created_at", desc=True)\
            .execute()

        rows = [row["projects"] for row in (result.data or []) if row.get("projects")]
        return self.projects.annotate(rows, viewer_id=user_id)
