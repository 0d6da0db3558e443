import asyncio
import logging
from typing import Any, Callable, Dict, List, Tuple

from supabase import Client

from humor_admin.database.queries import count_rows
from humor_admin.modules.dashboard.schemas import DashboardStats, RecentVote, TopCaption

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, supabase: Client, top_captions_limit: int = 5, recent_votes_limit: int = 8):
        self.supabase = supabase
        self.top_captions_limit = top_captions_limit
        self.recent_votes_limit = recent_votes_limit

    def _top_captions(self) -> List[TopCaption]:
        result = self.supabase.table("captions")\
            .select("id, content, like_count")\
            .order("like_count", desc=True)\
            .limit(self.top_captions_limit)\
            .execute()
        return [TopCaption(**row) for row in result.data or []]

    def _recent_votes(self) -> List[RecentVote]:
        result = self.supabase.table("caption_votes")\
            .select("id, caption_id, vote_value, created_datetime_utc")\
            .order("created_datetime_utc", desc=True)\
            .limit(self.recent_votes_limit)\
            .execute()
        return [RecentVote(**row) for row in result.data or []]

    def _queries(self) -> Dict[str, Tuple[Callable[[], Any], Any]]:
        """Field name -> (blocking query, fallback when it fails)"""
        sb = self.supabase
        return {
            "total_profiles": (lambda: count_rows(sb, "profiles"), 0),
            "total_images": (lambda: count_rows(sb, "images"), 0),
            "total_captions": (lambda: count_rows(sb, "captions"), 0),
            "total_votes": (lambda: count_rows(sb, "caption_votes"), 0),
            "public_captions": (lambda: count_rows(sb, "captions", {"is_public": True}), 0),
            "superadmin_count": (lambda: count_rows(sb, "profiles", {"is_superadmin": True}), 0),
            "top_captions": (self._top_captions, []),
            "recent_votes": (self._recent_votes, []),
            "positive_votes": (lambda: count_rows(sb, "caption_votes", {"vote_value": 1}), 0),
            "negative_votes": (lambda: count_rows(sb, "caption_votes", {"vote_value": -1}), 0),
        }

    async def load_stats(self) -> DashboardStats:
        """Run every dashboard query concurrently; failures degrade to zero/empty with a notice."""
        queries = self._queries()
        results = await asyncio.gather(
            *(asyncio.to_thread(query) for query, _ in queries.values()),
            return_exceptions=True,
        )

        values: Dict[str, Any] = {}
        errors: List[str] = []
        for (field, (_, fallback)), result in zip(queries.items(), results):
            if isinstance(result, Exception):
                logger.error(f"Dashboard query {field} failed: {result}")
                errors.append(f"{field.replace('_', ' ')}: {result}")
                values[field] = fallback
            else:
                values[field] = result
        return DashboardStats(**values, errors=errors)
