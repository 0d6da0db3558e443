"""
Error taxonomy for the admin site.

LoginRedirect and AccessDenied are answered by handlers registered in
humor_admin.main; BackendQueryError is caught by page routes and shown inline.
"""

from typing import Optional


class LoginRedirect(Exception):
    """No usable superadmin session; the caller is sent back to the login page."""

    def __init__(self, reason: str = "unauthenticated"):
        super().__init__(reason)
        self.reason = reason


class AccessDenied(Exception):
    """Signed in, but the profile lacks the superadmin flag."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(email or "")
        self.email = email


class BackendQueryError(Exception):
    """A read against the backend failed."""

    def __init__(self, table: str, message: str):
        super().__init__(message)
        self.table = table
        self.message = message
