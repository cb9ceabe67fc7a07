from supabase import Client
from showcase.config.settings import settings
from showcase.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectPreview,
    DashboardResponse, DashboardStats, CATEGORIES, is_valid_image_url
)
from showcase.modules.profiles.schemas import ProfileSummary
from typing import Any, Dict, List, Optional, Set
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

# Project row with the owner's public profile embedded
PROJECT_SELECT = "*, profiles:user_id (id, name, avatar_url)"
PROJECT_DETAIL_SELECT = "*, profiles:user_id (id, name, avatar_url, github_url)"

# Reserved by the PostgREST or=(...) filter grammar
_OR_FILTER_RESERVED = str.maketrans("", "", ',()"')


class ProjectService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _viewer_project_ids(self, table: str, viewer_id: str, project_ids: List[str]) -> Set[str]:
        """Project ids among ``project_ids`` that have a row for the viewer in ``table``"""
        result = self.supabase.table(table)\
            .select("project_id")\
            .eq("user_id", viewer_id)\
            .in_("project_id", project_ids)\
            .execute()
        return {row["project_id"] for row in (result.data or [])}

    def annotate(self, rows: List[Dict[str, Any]], viewer_id: Optional[str] = None) -> List[ProjectResponse]:
        """Turn project rows into responses, flagging the viewer's likes and bookmarks"""
        if not viewer_id or not rows:
            return [ProjectResponse(**row) for row in rows]

        project_ids = [row["id"] for row in rows]
        liked = self._viewer_project_ids("project_likes", viewer_id, project_ids)
        bookmarked = self._viewer_project_ids("project_bookmarks", viewer_id, project_ids)
        return [
            ProjectResponse(
                **row,
                is_liked=row["id"] in liked,
                is_bookmarked=row["id"] in bookmarked,
            )
            for row in rows
        ]

    def _has_row(self, table: str, user_id: str, project_id: str) -> bool:
        result = self.supabase.table(table)\
            .select("id")\
            .eq("user_id", user_id)\
            .eq("project_id", project_id)\
            .limit(1)\
            .execute()
        return bool(result.data)

    def list_projects(self, viewer_id: Optional[str] = None) -> List[ProjectResponse]:
        """All projects, newest first"""
        result = self.supabase.table("projects")\
            .select(PROJECT_SELECT)\
            .order("created_at", desc=True)\
            .execute()
        return self.annotate(result.data or [], viewer_id)

    def list_user_projects(self, user_id: str, viewer_id: Optional[str] = None) -> List[ProjectResponse]:
        """Projects submitted by one user, newest first"""
        result = self.supabase.table("projects")\
            .select(PROJECT_SELECT)\
            .eq("user_id", user_id)\
            .order("created_at", desc=True)\
            .execute()
        return self.annotate(result.data or [], viewer_id)

    def get_project(self, project_id: str, viewer_id: Optional[str] = None) -> ProjectResponse:
        """Get project by ID with the viewer's like/bookmark state"""
        result = self.supabase.table("projects")\
            .select(PROJECT_DETAIL_SELECT)\
            .eq("id", project_id)\
            .maybe_single()\
            .execute()

        if result is None or not result.data:
            raise HTTPException(status_code=404, detail="Project not found")

        project = ProjectResponse(**result.data)
        if viewer_id:
            project.is_liked = self._has_row("project_likes", viewer_id, project_id)
            project.is_bookmarked = self._has_row("project_bookmarks", viewer_id, project_id)
        return project

    def create_project(self, project_data: ProjectCreate, user_id: str) -> ProjectResponse:
        """Create a project owned by ``user_id``"""
        insert_data = project_data.model_dump()
        insert_data["user_id"] = user_id

        result = self.supabase.table("projects").insert(insert_data).execute()

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create project")

        project_id = result.data[0]["id"]
        logger.info(f"User {user_id} created project {project_id}")
        return self.get_project(project_id, viewer_id=user_id)

    def update_project(
        self, project_id: str, project_data: ProjectUpdate, user_id: Optional[str] = None
    ) -> ProjectResponse:
        """Write the supplied fields and stamp updated_at"""
        update_data = project_data.model_dump(exclude_unset=True)
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

        result = self.supabase.table("projects")\
            .update(update_data)\
            .eq("id", project_id)\
            .execute()

        if not result.data:
            raise HTTPException(status_code=404, detail="Project not found")
        return self.get_project(project_id, viewer_id=user_id)

    def delete_project(self, project_id: str) -> bool:
        """Delete project"""
        result = self.supabase.table("projects")\
            .delete()\
            .eq("id", project_id)\
            .execute()

        deleted = len(result.data or []) > 0
        if deleted:
            logger.info(f"Deleted project {project_id}")
        return deleted

    def search_projects(
        self,
        text: Optional[str] = None,
        category: Optional[str] = None,
        viewer_id: Optional[str] = None
    ) -> List[ProjectResponse]:
        """Case-insensitive match on title or description, optionally within one category"""
        query = self.supabase.table("projects").select(PROJECT_SELECT)

        text = (text or "").translate(_OR_FILTER_RESERVED).strip()
        if text:
            query = query.or_(f"title.ilike.%{text}%,description.ilike.%{text}%")
        if category:
            query = query.eq("category", category)

        result = query.order("created_at", desc=True).execute()
        return self.annotate(result.data or [], viewer_id)

    def get_home_feed(self, viewer_id: Optional[str] = None, limit: Optional[int] = None) -> List[ProjectResponse]:
        """Featured projects for the home page, falling back to the latest ones"""
        limit = limit or settings.home_feed_size
        projects = self.list_projects(viewer_id)
        featured = [p for p in projects if p.featured][:limit]
        return featured or projects[:limit]

    def get_dashboard(self, user_id: str) -> DashboardResponse:
        """The user's own projects with totals for the dashboard header"""
        projects = self.list_user_projects(user_id, viewer_id=user_id)

        total_bookmarks = 0
        if projects:
            bookmarks = self.supabase.table("project_bookmarks")\
                .select("id")\
                .in_("project_id", [p.id for p in projects])\
                .execute()
            total_bookmarks = len(bookmarks.data or [])

        return DashboardResponse(
            projects=projects,
            stats=DashboardStats(
                total_projects=len(projects),
                total_likes=sum(p.likes_count or 0 for p in projects),
                total_bookmarks=total_bookmarks,
            ),
        )

    def preview_project(self, project_data: ProjectCreate, owner: Optional[ProfileSummary] = None) -> ProjectPreview:
        """Render a validated submission as it would appear in the directory; nothing is written"""
        labels = dict(CATEGORIES)
        return ProjectPreview(
            title=project_data.title,
            description=project_data.description,
            tech_stack=project_data.tech_stack or [],
            category=project_data.category,
            category_label=labels[project_data.category],
            thumbnail_url=project_data.thumbnail_url,
            thumbnail_previewable=is_valid_image_url(project_data.thumbnail_url),
            github_url=project_data.github_url,
            demo_url=project_data.demo_url,
            profiles=owner,
        )
