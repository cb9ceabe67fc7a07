from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class ProfileCreate(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    github_url: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    github_url: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None

    @field_validator("github_url")
    @classmethod
    def github_host(cls, v: Optional[str]) -> Optional[str]:
        if v and "github.com" not in v:
            raise ValueError("Please enter a valid GitHub URL")
        return v


class ProfileResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    github_url: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileSummary(BaseModel):
    """Owner profile embedded in project and comment rows."""
    id: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    github_url: Optional[str] = None
