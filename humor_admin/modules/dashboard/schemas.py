from pydantic import BaseModel, Field
from typing import List, Optional, Union
from datetime import datetime


class TopCaption(BaseModel):
    id: Union[str, int]
    content: Optional[str] = None
    like_count: Optional[int] = 0


class RecentVote(BaseModel):
    id: Union[str, int]
    caption_id: Optional[Union[str, int]] = None
    vote_value: int = 0
    created_datetime_utc: Optional[datetime] = None

    @property
    def label(self) -> str:
        return "+1" if self.vote_value > 0 else "-1"


class DashboardStats(BaseModel):
    total_profiles: int = 0
    total_images: int = 0
    total_captions: int = 0
    total_votes: int = 0
    public_captions: int = 0
    superadmin_count: int = 0
    positive_votes: int = 0
    negative_votes: int = 0
    top_captions: List[TopCaption] = Field(default_factory=list)
    recent_votes: List[RecentVote] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def private_captions(self) -> int:
        return self.total_captions - self.public_captions

    @property
    def positive_percent(self) -> int:
        if self.total_votes <= 0:
            return 0
        return round(self.positive_votes / self.total_votes * 100)
