from fastapi import Request
from supabase import Client, ClientOptions, create_client

from humor_admin.config import Settings
from humor_admin.core.session import CookieSessionStorage


class SupabaseClientFactory:
    """Builds one Supabase client per request, bound to that request's cookies."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def create_storage(self, request: Request) -> CookieSessionStorage:
        return CookieSessionStorage(
            request.cookies,
            prefix=self.settings.session_cookie_prefix,
            secure=self.settings.session_cookie_secure,
            max_age=self.settings.session_cookie_max_age,
        )

    def create(self, storage: CookieSessionStorage) -> Client:
        # No background refresh timer: get_session() refreshes an expired
        # token inline and writes the new one back through the storage.
        options = ClientOptions(
            storage=storage,
            flow_type="pkce",
            auto_refresh_token=False,
            persist_session=True,
        )
        return create_client(self.settings.supabase_url, self.settings.supabase_key, options=options)


def bind_request_client(request: Request) -> Client:
    """Create the request's client and session storage once and keep them on request.state."""
    if getattr(request.state, "supabase", None) is None:
        factory = request.app.state.supabase_factory
        storage = factory.create_storage(request)
        request.state.session_storage = storage
        request.state.supabase = factory.create(storage)
    return request.state.supabase


def get_supabase(request: Request) -> Client:
    return bind_request_client(request)
