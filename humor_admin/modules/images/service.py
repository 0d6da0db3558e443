from supabase import Client
from humor_admin.core.exceptions import BackendQueryError
from humor_admin.database.queries import delete_by_id
from humor_admin.modules.images.schemas import ImageResponse
from typing import List
import logging

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_images(self, limit: int = 50) -> List[ImageResponse]:
        """Most recent images first"""
        try:
            result = self.supabase.table("images")\
                .select("*")\
                .order("created_datetime_utc", desc=True)\
                .limit(limit)\
                .execute()
            return [ImageResponse(**image) for image in result.data or []]
        except Exception as e:
            logger.error(f"Error listing images: {e}")
            raise BackendQueryError("images", str(e)) from e

    def delete_image(self, image_id: str) -> bool:
        return delete_by_id(self.supabase, "images", image_id) > 0
