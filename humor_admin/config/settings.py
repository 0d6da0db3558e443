from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

LOGIN_PATH = "/login"
ADMIN_PATH = "/admin"


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # anon key; row level security applies to the signed-in admin

    # Auth / session cookies
    site_url: Optional[str] = None  # derived from the request when unset
    oauth_provider: str = "google"
    session_cookie_prefix: str = "sb"
    session_cookie_secure: bool = False
    session_cookie_max_age: int = 400 * 24 * 60 * 60

    # Page sizes
    list_limit: int = 50
    top_captions_limit: int = 5
    recent_votes_limit: int = 8

    # App
    app_name: str = "humor-admin"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings()
