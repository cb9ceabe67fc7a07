from supabase import create_client, Client, ClientOptions
from showcase.config.settings import settings
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class SupabaseNotConfigured(RuntimeError):
    pass


class SupabaseClient:
    """Clients built from the project URL and the public anon key.

    The shared client never signs in, so its requests always carry the anon
    key. Anything that acts as a user gets its own client from new_client().
    """
    _client: Client = None

    @staticmethod
    def _check_configured():
        if not settings.supabase_url or not settings.supabase_key:
            raise SupabaseNotConfigured("SUPABASE_URL and SUPABASE_KEY must be set")

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._check_configured()
            logger.info("Creating Supabase client for %s", settings.supabase_url)
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def new_client(cls) -> Client:
        """Throwaway client whose session lives only as long as the object"""
        cls._check_configured()
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_client_factory() -> Callable[[], Client]:
    return SupabaseClient.new_client
