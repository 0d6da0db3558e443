from pydantic import BaseModel
from typing import Optional, Union
from datetime import datetime


class ProfileResponse(BaseModel):
    id: Union[str, int]
    username: Optional[str] = None
    is_superadmin: Optional[bool] = False
    created_datetime_utc: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def display_name(self) -> str:
        return self.username or "(no username)"


class SuperadminToggle(BaseModel):
    profile_id: str
    current_value: bool = False
