from supabase import Client
from humor_admin.core.exceptions import BackendQueryError
from humor_admin.database.queries import delete_by_id, toggle_flag
from humor_admin.modules.captions.schemas import CaptionResponse, CaptionVisibilityToggle
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class CaptionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_captions(self, limit: int = 50) -> List[CaptionResponse]:
        """Most recent captions first"""
        try:
            result = self.supabase.table("captions")\
                .select("*")\
                .order("created_datetime_utc", desc=True)\
                .limit(limit)\
                .execute()
            return [CaptionResponse(**caption) for caption in result.data or []]
        except Exception as e:
            logger.error(f"Error listing captions: {e}")
            raise BackendQueryError("captions", str(e)) from e

    def toggle_public(self, toggle: CaptionVisibilityToggle) -> Optional[bool]:
        return toggle_flag(
            self.supabase,
            "captions",
            toggle.caption_id,
            "is_public",
            submitted_value=toggle.current_public,
        )

    def delete_caption(self, caption_id: str) -> bool:
        return delete_by_id(self.supabase, "captions", caption_id) > 0
