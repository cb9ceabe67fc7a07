from pydantic import BaseModel


class LikeToggleResponse(BaseModel):
    project_id: str
    is_liked: bool
    likes_count: int


class BookmarkToggleResponse(BaseModel):
    project_id: str
    is_bookmarked: bool
