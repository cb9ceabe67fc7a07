from supabase import Client
from showcase.database.supabase_client import SupabaseClient
from showcase.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, CurrentUserResponse
)
from showcase.modules.auth.session import SessionWatcher, user_to_dict
from showcase.modules.profiles.service import ProfileService
from fastapi import HTTPException
from typing import Callable, Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """Sign-up, sign-in and token checks against Supabase Auth.

    ``supabase`` is the shared anon client: it only verifies and revokes
    tokens and never holds a session. Sign-up and sign-in run on a fresh
    client from ``client_factory`` so one caller's session never leaks into
    another's requests. ``store`` is the caller's own client for profile reads.
    """

    def __init__(
        self,
        supabase: Client,
        client_factory: Optional[Callable[[], Client]] = None,
        store: Optional[Client] = None,
    ):
        self.supabase = supabase
        self.client_factory = client_factory or SupabaseClient.new_client
        self.profiles = ProfileService(store if store is not None else supabase)

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth"""
        try:
            auth_response = self.client_factory().auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {"name": register_data.name}
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Registration failed: {error_message}")
            raise HTTPException(status_code=500, detail="Registration failed")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth and make sure a profile exists"""
        client = self.client_factory()
        watcher = SessionWatcher(client)
        watcher.start()
        try:
            try:
                auth_response = client.auth.sign_in_with_password({
                    "email": login_data.email,
                    "password": login_data.password
                })
            except Exception as e:
                error_message = str(e)
                if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                    raise HTTPException(status_code=401, detail="Invalid email or password")
                logger.error(f"Login failed: {error_message}")
                raise HTTPException(status_code=500, detail="Login failed")

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            # The sign-in event normally resolves the profile already
            if watcher.user is None and watcher.error is None:
                watcher.handle_user_session(auth_response.user)
            if watcher.error is not None:
                raise watcher.error
        finally:
            watcher.stop()

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=watcher.user["id"],
            email=watcher.user["email"] or login_data.email,
            profile=watcher.profile
        )

    def handle_user_session(self, user_data: Dict[str, Any]):
        """Resolve an authenticated user to their profile, creating it if missing"""
        return self.profiles.get_or_create_profile(user_data)

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from a Supabase Auth token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        return user_to_dict(user_response.user)

    def describe_user(self, user_data: Dict[str, Any]) -> CurrentUserResponse:
        """Merge the auth identity with its profile, the shape the UI consumes"""
        profile = self.handle_user_session(user_data)
        return CurrentUserResponse(
            id=user_data["id"],
            email=user_data.get("email") or "",
            name=profile.name or "User",
            avatar_url=profile.avatar_url,
            github_url=profile.github_url,
            bio=profile.bio,
            profile=profile,
        )

    def logout(self, token: str) -> bool:
        """End the session that issued ``token``"""
        try:
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.error(f"Error signing out: {e}")
            return False
