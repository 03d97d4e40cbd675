from supabase import create_client, Client, ClientOptions
from virasat.config.settings import settings
from typing import Callable


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def for_session(cls, access_token: str) -> Client:
        """Client that sends the user's JWT, so table and bucket RLS policies see auth.uid()"""
        options = ClientOptions(headers={"Authorization": f"Bearer {access_token}"})
        return create_client(settings.supabase_url, settings.supabase_key, options=options)

    @classmethod
    def for_auth_flow(cls) -> Client:
        """Throwaway client for sign-in calls; the session they store stays on this client"""
        options = ClientOptions(persist_session=False, auto_refresh_token=False)
        return create_client(settings.supabase_url, settings.supabase_key, options=options)


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_auth_flow_factory() -> Callable[[], Client]:
    return SupabaseClient.for_auth_flow
