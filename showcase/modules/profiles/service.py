from supabase import Client
from showcase.modules.profiles.schemas import ProfileCreate, ProfileUpdate, ProfileResponse
from typing import Any, Dict, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Get profile by user ID, or None when the user has no profile yet"""
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("id", user_id)\
            .maybe_single()\
            .execute()

        if result is None or not result.data:
            return None
        return ProfileResponse(**result.data)

    def require_profile(self, user_id: str) -> ProfileResponse:
        profile = self.get_profile(user_id)
        if profile is None:
            raise HTTPException(status_code=404, detail="Profile not found")
        return profile

    def create_profile(self, profile_data: ProfileCreate) -> ProfileResponse:
        """Create a profile row"""
        result = self.supabase.table("profiles")\
            .insert(profile_data.model_dump())\
            .execute()

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create profile")
        return ProfileResponse(**result.data[0])

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update only the supplied profile fields"""
        update_data = profile_data.model_dump(exclude_unset=True)
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

        result = self.supabase.table("profiles")\
            .update(update_data)\
            .eq("id", user_id)\
            .execute()

        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        return ProfileResponse(**result.data[0])

    def get_or_create_profile(self, user: Dict[str, Any]) -> ProfileResponse:
        """Return the user's profile, creating it from auth metadata if missing.

        ``user`` is the auth user as a dict (id, email, user_metadata).
        """
        profile = self.get_profile(user["id"])
        if profile is not None:
            return profile

        metadata = user.get("user_metadata") or {}
        email = user.get("email") or ""
        name = metadata.get("name") or email.split("@")[0] or "User"
        logger.info(f"Creating profile for user {user['id']}")
        return self.create_profile(ProfileCreate(
            id=user["id"],
            email=email,
            name=name,
            avatar_url=metadata.get("avatar_url"),
        ))
