from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from showcase.modules.profiles.schemas import ProfileResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    name: str

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    profile: Optional[ProfileResponse] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str


class CurrentUserResponse(BaseModel):
    id: str
    email: str
    name: str
    avatar_url: Optional[str] = None
    github_url: Optional[str] = None
    bio: Optional[str] = None
    profile: ProfileResponse
