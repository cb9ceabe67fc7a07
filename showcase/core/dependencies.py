"""
Core dependencies for route protection and ownership checking
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from showcase.database.supabase_client import get_supabase, get_client_factory
from showcase.modules.auth.service import AuthService
from supabase import Client
from typing import Callable, Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_request_supabase(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    supabase: Client = Depends(get_supabase),
    client_factory: Callable[[], Client] = Depends(get_client_factory)
) -> Client:
    """Client for this request's store calls, acting as the bearer of the token.

    Anonymous requests share the anon client, which never holds a session.
    """
    if credentials is None:
        return supabase
    client = client_factory()
    client.postgrest.auth(credentials.credentials)
    return client


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    client_factory: Callable[[], Client] = Depends(get_client_factory),
    store: Client = Depends(get_request_supabase)
) -> AuthService:
    return AuthService(supabase, client_factory=client_factory, store=store)


def get_token_verifier(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_token_verifier)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    return auth_service.get_current_user(token)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_token_verifier)
) -> Optional[dict]:
    """Viewer for public listings: None when anonymous, 401 when the token is bad"""
    if credentials is None:
        return None
    return auth_service.get_current_user(credentials.credentials)


def get_viewer_id(viewer: Optional[dict] = Depends(get_optional_user)) -> Optional[str]:
    return viewer["id"] if viewer else None


def _fetch_owner(supabase: Client, table: str, row_id: str, label: str) -> Dict[str, Any]:
    result = supabase.table(table)\
        .select("id, user_id")\
        .eq("id", row_id)\
        .maybe_single()\
        .execute()
    if result is None or not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found"
        )
    return result.data


def check_project_owner(project_id: str, user_data: dict, supabase: Client) -> dict:
    """Allow only the user who submitted the project"""
    project = _fetch_owner(supabase, "projects", project_id, "Project")
    if project.get("user_id") != user_data["id"]:
        logger.warning(f"User {user_data['id']} denied write access to project {project_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only modify your own projects"
        )
    return user_data


def check_comment_owner(comment_id: str, user_data: dict, supabase: Client) -> dict:
    """Allow only the author of the comment"""
    comment = _fetch_owner(supabase, "project_comments", comment_id, "Comment")
    if comment.get("user_id") != user_data["id"]:
        logger.warning(f"User {user_data['id']} denied write access to comment {comment_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only modify your own comments"
        )
    return user_data
