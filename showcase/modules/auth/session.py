"""
Session watcher for a single Supabase client.

Mirrors the auth state of the client it is attached to: on every authenticated
session the matching profile is ensured before the user is exposed, and
``loading`` stays true until the initial session has been resolved.

The client must belong to one caller. Login attaches a watcher to the
throwaway client it signs in on, so profile writes run as that user.
"""

from supabase import Client
from showcase.modules.profiles.service import ProfileService
from showcase.modules.profiles.schemas import ProfileResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


def user_to_dict(user) -> Dict[str, Any]:
    """Flatten a Supabase auth user into the dict passed around by dependencies"""
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "app_metadata": user.app_metadata or {},
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


class SessionWatcher:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = ProfileService(supabase)
        self.user: Optional[Dict[str, Any]] = None
        self.profile: Optional[ProfileResponse] = None
        self.error: Optional[Exception] = None
        self.loading = True
        self._subscription = None

    def start(self):
        """Subscribe to auth changes and resolve the current session"""
        self._subscription = self.supabase.auth.on_auth_state_change(self._on_auth_state_change)
        try:
            session = self.supabase.auth.get_session()
        except Exception as e:
            logger.error(f"Error getting initial session: {e}")
            session = None
        if session and session.user:
            self.handle_user_session(session.user)
        else:
            self.loading = False

    def stop(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_state_change(self, event, session):
        logger.info(f"Auth state change: {event}")
        if session and session.user:
            self.handle_user_session(session.user)
        else:
            self.user = None
            self.profile = None
            self.loading = False

    def handle_user_session(self, user):
        """Ensure a profile exists for ``user`` before exposing it"""
        user_data = user_to_dict(user)
        self.error = None
        try:
            self.profile = self.profiles.get_or_create_profile(user_data)
            self.user = user_data
        except Exception as e:
            # Kept for the caller; the watcher itself must not break the auth callback
            logger.error(f"Error handling user session: {e}")
            self.error = e
        finally:
            self.loading = False
