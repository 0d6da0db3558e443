"""
Superadmin authorization for admin pages and actions
"""

from enum import Enum
from fastapi import Depends
from pydantic import BaseModel, ConfigDict
from supabase import Client
from humor_admin.core.exceptions import AccessDenied, LoginRedirect
from humor_admin.database.supabase_client import get_supabase
from humor_admin.modules.auth.schemas import SessionUser
from humor_admin.modules.auth.service import AuthService
from humor_admin.modules.users.schemas import ProfileResponse
from humor_admin.modules.users.service import ProfileService
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)


class AccessStatus(str, Enum):
    AUTHORIZED = "authorized"
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"


class AccessCheck(BaseModel):
    status: AccessStatus
    user: Optional[SessionUser] = None
    profile: Optional[ProfileResponse] = None

    @property
    def authorized(self) -> bool:
        return self.status == AccessStatus.AUTHORIZED


class AdminContext(BaseModel):
    """A verified superadmin plus the client to act with"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: SessionUser
    profile: ProfileResponse
    supabase: Any

    @property
    def display_name(self) -> str:
        return self.profile.username or self.user.email or self.user.id


def is_superadmin(user_id: str, supabase: Client) -> Optional[ProfileResponse]:
    """Return the profile if it carries the superadmin flag, else None"""
    try:
        profile = ProfileService(supabase).get_profile(user_id)
    except Exception as e:
        logger.error(f"Error loading profile for {user_id}: {e}")
        return None
    if profile is None or profile.is_superadmin is not True:
        return None
    return profile


def check_superadmin(supabase: Client) -> AccessCheck:
    """Resolve the session user and their superadmin flag into a tagged result."""
    user = AuthService(supabase).get_current_user()
    if user is None:
        return AccessCheck(status=AccessStatus.UNAUTHENTICATED)
    profile = is_superadmin(user.id, supabase)
    if profile is None:
        logger.info(f"User {user.id} is not a superadmin")
        return AccessCheck(status=AccessStatus.UNAUTHORIZED, user=user)
    return AccessCheck(status=AccessStatus.AUTHORIZED, user=user, profile=profile)


def require_superadmin(supabase: Client = Depends(get_supabase)) -> AdminContext:
    """Enforcement for mutating actions: anything short of superadmin goes back to login"""
    check = check_superadmin(supabase)
    if not check.authorized:
        raise LoginRedirect(check.status.value)
    return AdminContext(user=check.user, profile=check.profile, supabase=supabase)


def admin_page_context(supabase: Client = Depends(get_supabase)) -> AdminContext:
    """Display gate for admin pages: signed-out users go to login, non-admins see a denial page"""
    check = check_superadmin(supabase)
    if check.status == AccessStatus.UNAUTHENTICATED:
        raise LoginRedirect(check.status.value)
    if check.status == AccessStatus.UNAUTHORIZED:
        raise AccessDenied(check.user.email if check.user else None)
    return AdminContext(user=check.user, profile=check.profile, supabase=supabase)
