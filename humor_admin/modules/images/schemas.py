from pydantic import BaseModel
from typing import Optional, Union
from datetime import datetime


class ImageResponse(BaseModel):
    id: Union[str, int]
    url: Optional[str] = None
    cdn_url: Optional[str] = None
    is_common_use: Optional[bool] = None
    created_datetime_utc: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def preview_url(self) -> Optional[str]:
        return self.cdn_url or self.url
