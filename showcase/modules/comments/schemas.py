from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from showcase.modules.profiles.schemas import ProfileSummary


class CommentCreate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty")
        return v


class CommentUpdate(CommentCreate):
    pass


class CommentResponse(BaseModel):
    id: str
    user_id: str
    project_id: str
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    profiles: Optional[ProfileSummary] = None

    class Config:
        from_attributes = True
