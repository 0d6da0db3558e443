from supabase import Client
from humor_admin.modules.auth.schemas import SessionUser
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self) -> Optional[SessionUser]:
        """Resolve the user from the cookie session. A missing, expired or invalid session is no user."""
        try:
            user_response = self.supabase.auth.get_user()
        except Exception as e:
            logger.debug(f"Session lookup failed, treating as signed out: {e}")
            return None
        if not user_response or not user_response.user:
            return None
        user = user_response.user
        return SessionUser(id=str(user.id), email=user.email)

    def start_oauth(self, provider: str, redirect_to: str) -> str:
        """Begin the PKCE OAuth flow; returns the provider URL to send the browser to."""
        response = self.supabase.auth.sign_in_with_oauth({
            "provider": provider,
            "options": {"redirect_to": redirect_to},
        })
        return response.url

    def exchange_code(self, code: str) -> bool:
        """Exchange an OAuth authorization code for a session stored in cookies."""
        try:
            self.supabase.auth.exchange_code_for_session({"auth_code": code})
            return True
        except Exception as e:
            logger.warning(f"OAuth code exchange failed: {e}")
            return False

    def sign_out(self) -> None:
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign out could not reach the identity provider: {e}")
