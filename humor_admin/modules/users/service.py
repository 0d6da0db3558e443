from supabase import Client
from humor_admin.core.exceptions import BackendQueryError
from humor_admin.database.queries import toggle_flag
from humor_admin.modules.users.schemas import ProfileResponse, SuperadminToggle
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, profile_id: str) -> Optional[ProfileResponse]:
        """Get profile by ID; None when there is no row"""
        result = self.supabase.table("profiles")\
            .select("id, username, is_superadmin, created_datetime_utc")\
            .eq("id", profile_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return ProfileResponse(**result.data[0])

    def list_profiles(self) -> List[ProfileResponse]:
        """All profiles, newest first"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("created_datetime_utc", desc=True)\
                .execute()
            return [ProfileResponse(**profile) for profile in result.data or []]
        except Exception as e:
            logger.error(f"Error listing profiles: {e}")
            raise BackendQueryError("profiles", str(e)) from e

    def toggle_superadmin(self, toggle: SuperadminToggle) -> Optional[bool]:
        return toggle_flag(
            self.supabase,
            "profiles",
            toggle.profile_id,
            "is_superadmin",
            submitted_value=toggle.current_value,
        )
