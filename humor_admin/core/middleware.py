import asyncio
import logging

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from humor_admin.config import ADMIN_PATH, LOGIN_PATH
from humor_admin.database.supabase_client import bind_request_client
from humor_admin.modules.auth.service import AuthService

logger = logging.getLogger(__name__)

EXEMPT_PATHS = ("/health", "/ready")
EXEMPT_PREFIXES = ("/static/",)


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PATH or path.startswith(ADMIN_PATH + "/")


def resolve_session_user(request: Request):
    """Build the request client and look up its user. Both may refresh the session over the network."""
    supabase = bind_request_client(request)
    return AuthService(supabase).get_current_user()


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Resolves the session user before every request and applies the login/admin redirects.

    Session cookies rewritten by Supabase Auth (token refresh, code exchange,
    sign out) are copied onto whatever response goes out, redirects included.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path in EXEMPT_PATHS or path.startswith(EXEMPT_PREFIXES):
            return await call_next(request)

        user = await asyncio.to_thread(resolve_session_user, request)
        request.state.user = user

        if user is None and is_admin_path(path):
            logger.debug(f"No session for {path}; redirecting to login")
            response = self._redirect(request, LOGIN_PATH)
        elif user is not None and path == LOGIN_PATH:
            response = self._redirect(request, ADMIN_PATH)
        else:
            response = await call_next(request)

        storage = getattr(request.state, "session_storage", None)
        if storage is not None and storage.has_pending_writes:
            storage.apply(response)
        return response

    @staticmethod
    def _redirect(request: Request, path: str) -> RedirectResponse:
        url = request.url.replace(path=path, query="")
        return RedirectResponse(url=str(url), status_code=status.HTTP_307_TEMPORARY_REDIRECT)


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)
