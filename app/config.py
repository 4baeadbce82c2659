"""
Application configuration loaded from the environment.
"""
import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from db.models import DEFAULT_DATABASE_URL

DEFAULT_COMPANY_LOOKUP_URL = "https://autocomplete.clearbit.com/v1/companies/suggest"
DEFAULT_LOGO_BASE_URL = "https://logo.clearbit.com"


class AppConfig(BaseModel):
    """Runtime settings for the planner app."""
    store_backend: str = Field("sqlite", description="sqlite, supabase or memory")
    database_url: str = DEFAULT_DATABASE_URL
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    company_lookup_url: str = DEFAULT_COMPANY_LOOKUP_URL
    logo_base_url: str = DEFAULT_LOGO_BASE_URL
    http_timeout_seconds: float = Field(5.0, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build the config from environment variables and a .env file."""
        load_dotenv()
        return cls(
            store_backend=os.getenv("PLANNER_STORE", "sqlite"),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            supabase_url=os.getenv("SUPABASE_URL"),
            supabase_key=os.getenv("SUPABASE_KEY"),
            company_lookup_url=os.getenv("COMPANY_LOOKUP_URL", DEFAULT_COMPANY_LOOKUP_URL),
            logo_base_url=os.getenv("LOGO_BASE_URL", DEFAULT_LOGO_BASE_URL),
            http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "5")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
