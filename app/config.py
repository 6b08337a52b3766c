from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import os

class Settings(BaseSettings):
    # Database - Railway provides DATABASE_URL, fallback to SQLite for local
    database_url: Optional[str] = None

    # App Settings
    app_name: str = "Lichinga Jobs"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API Settings
    backend_host: str = "0.0.0.0"
    backend_port: int = int(os.getenv("PORT", "8000"))  # Railway provides PORT env var
    allowed_origins: str = "*"

    # Accounts
    bcrypt_rounds: int = 10

    # Job listings
    jobs_list_limit: int = 50
    job_expiry_days: int = 30

    # Rate limiting (slowapi, per client IP)
    rate_limit_enabled: bool = True
    register_rate_limit: str = "5/hour"
    login_rate_limit: str = "20/minute"

    class Config:
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Auto-detect database URL
        if self.database_url is None:
            self.database_url = "sqlite+aiosqlite:///./database/lichinga_jobs.db"
        # Hosted Postgres hands out postgres:// or postgresql://, async engine needs asyncpg
        if self.database_url.startswith("postgres://"):
            self.database_url = self.database_url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif self.database_url.startswith("postgresql://"):
            self.database_url = self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

@lru_cache()
def get_settings() -> Settings:
    return Settings()
