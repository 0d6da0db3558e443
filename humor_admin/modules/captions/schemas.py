from pydantic import BaseModel
from typing import List, Optional, Union
from datetime import datetime


class CaptionResponse(BaseModel):
    id: Union[str, int]
    content: Optional[str] = None
    like_count: Optional[int] = 0
    is_public: Optional[bool] = False
    created_datetime_utc: Optional[datetime] = None

    class Config:
        from_attributes = True


class CaptionPageStats(BaseModel):
    """Quick stats over the captions currently listed"""
    showing: int = 0
    public: int = 0
    total_likes: int = 0

    @classmethod
    def from_captions(cls, captions: List[CaptionResponse]) -> "CaptionPageStats":
        return cls(
            showing=len(captions),
            public=sum(1 for c in captions if c.is_public),
            total_likes=sum(c.like_count or 0 for c in captions),
        )


class CaptionVisibilityToggle(BaseModel):
    caption_id: str
    current_public: bool = False
