from pydantic import BaseModel, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
import re
from showcase.modules.profiles.schemas import ProfileSummary

# (value stored in projects.category, label shown in the submission form)
CATEGORIES = [
    ("Web", "Web Development"),
    ("AI/ML", "AI/ML"),
    ("Mobile", "Mobile Development"),
    ("Core", "Core Engineering"),
    ("Game", "Game Development"),
    ("Hardware", "Hardware"),
    ("Data Science", "Data Science"),
    ("Blockchain", "Blockchain"),
]
CATEGORY_VALUES = [value for value, _ in CATEGORIES]

# Directory filter value meaning "no category filter"
ALL_CATEGORIES = "All"

_IMAGE_EXTENSION = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)


def is_valid_image_url(url: Optional[str]) -> bool:
    """Whether the submission form can render a thumbnail preview for ``url``"""
    if not url:
        return False
    return bool(_IMAGE_EXTENSION.search(url)) or "placeholder.svg" in url or "unsplash.com" in url


def _check_category(category: Optional[str]) -> None:
    if not category:
        raise ValueError("Please select a category")
    if category not in CATEGORY_VALUES:
        raise ValueError(f"Unknown category: {category}")


def _check_github_url(github_url: Optional[str]) -> None:
    if github_url and "github.com" not in github_url:
        raise ValueError("Please enter a valid GitHub URL")


class ProjectFields(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tech_stack: Optional[List[str]] = None
    category: Optional[str] = None
    thumbnail_url: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None

    @field_validator("title", "description", "thumbnail_url", "github_url", "demo_url")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("tech_stack")
    @classmethod
    def clean_tech_stack(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        stack: List[str] = []
        for tech in v:
            tech = tech.strip()
            if tech and tech not in stack:
                stack.append(tech)
        return stack or None


class ProjectCreate(ProjectFields):
    @model_validator(mode="after")
    def validate_form(self):
        if not self.title:
            raise ValueError("Project title is required")
        _check_category(self.category)
        _check_github_url(self.github_url)
        return self


class ProjectUpdate(ProjectFields):
    """Partial update; only fields present in the request body are written"""

    @model_validator(mode="after")
    def validate_form(self):
        if "title" in self.model_fields_set and not self.title:
            raise ValueError("Project title is required")
        if "category" in self.model_fields_set:
            _check_category(self.category)
        _check_github_url(self.github_url)
        return self


class ProjectResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    tech_stack: Optional[List[str]] = None
    category: Optional[str] = None
    thumbnail_url: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    featured: bool = False
    likes_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    profiles: Optional[ProfileSummary] = None
    is_liked: bool = False
    is_bookmarked: bool = False

    class Config:
        from_attributes = True


class ProjectPreview(BaseModel):
    """Card rendered next to the submission form before anything is saved"""
    title: str
    description: Optional[str] = None
    tech_stack: List[str] = []
    category: str
    category_label: str
    thumbnail_url: Optional[str] = None
    thumbnail_previewable: bool
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    profiles: Optional[ProfileSummary] = None


class CategoryResponse(BaseModel):
    value: str
    label: str


class DashboardStats(BaseModel):
    total_projects: int
    total_likes: int
    total_bookmarks: int


class DashboardResponse(BaseModel):
    projects: List[ProjectResponse]
    stats: DashboardStats
