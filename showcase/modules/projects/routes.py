from fastapi import APIRouter, Depends
from showcase.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectPreview,
    CategoryResponse, DashboardResponse, CATEGORIES, ALL_CATEGORIES
)
from showcase.modules.projects.service import ProjectService
from showcase.modules.profiles.schemas import ProfileSummary
from showcase.modules.profiles.service import ProfileService
from showcase.core.dependencies import (
    get_current_user_id, get_viewer_id, check_project_owner, get_request_supabase
)
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/projects", tags=["projects"])
users_router = APIRouter(prefix="/users", tags=["projects"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["projects"])


def get_project_service(supabase: Client = Depends(get_request_supabase)) -> ProjectService:
    return ProjectService(supabase)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    q: Optional[str] = None,
    category: Optional[str] = None,
    viewer_id: Optional[str] = Depends(get_viewer_id),
    service: ProjectService = Depends(get_project_service)
):
    """Project directory. ``q`` searches title and description, ``category`` filters exactly ("All" = any)."""
    if category == ALL_CATEGORIES:
        category = None
    if q or category:
        return service.search_projects(q, category, viewer_id)
    return service.list_projects(viewer_id)


@router.get("/feed", response_model=List[ProjectResponse])
async def home_feed(
    viewer_id: Optional[str] = Depends(get_viewer_id),
    service: ProjectService = Depends(get_project_service)
):
    """Projects highlighted on the home page"""
    return service.get_home_feed(viewer_id)


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories():
    return [CategoryResponse(value=value, label=label) for value, label in CATEGORIES]


@router.post("/preview", response_model=ProjectPreview)
async def preview_project(
    project_data: ProjectCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
    supabase: Client = Depends(get_request_supabase)
):
    """Validate a submission and return its card without saving it"""
    profile = ProfileService(supabase).get_profile(user_data["id"])
    owner = ProfileSummary(**profile.model_dump()) if profile else None
    return service.preview_project(project_data, owner)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service)
):
    """Submit a new project"""
    return service.create_project(project_data, user_data["id"])


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    viewer_id: Optional[str] = Depends(get_viewer_id),
    service: ProjectService = Depends(get_project_service)
):
    """Get project by ID"""
    return service.get_project(project_id, viewer_id)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
    supabase: Client = Depends(get_request_supabase)
):
    """Update project (owner only)"""
    check_project_owner(project_id, user_data, supabase)
    return service.update_project(project_id, project_data, user_data["id"])


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
    supabase: Client = Depends(get_request_supabase)
):
    """Delete project (owner only)"""
    check_project_owner(project_id, user_data, supabase)
    service.delete_project(project_id)
    return None


@users_router.get("/{user_id}/projects", response_model=List[ProjectResponse])
async def list_user_projects(
    user_id: str,
    viewer_id: Optional[str] = Depends(get_viewer_id),
    service: ProjectService = Depends(get_project_service)
):
    """Projects submitted by one user"""
    return service.list_user_projects(user_id, viewer_id)


@dashboard_router.get("", response_model=DashboardResponse)
async def dashboard(
    user_data: Dict = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service)
):
    """Current user's projects and totals"""
    return service.get_dashboard(user_data["id"])
