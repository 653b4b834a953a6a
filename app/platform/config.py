from pathlib import Path
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Website Maintenance Agent"
    APP_DESCRIPTION: str = "Single-page website health checker: SEO, performance and security."
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False

    CORS_ORIGINS: List[str] = ["*"]

    # ── Fetcher ─────────────────────────────────
    FETCH_TIMEOUT_SECONDS: float = 10.0
    FETCH_MAX_REDIRECTS: int = 5
    FETCH_USER_AGENT: Optional[str] = None

    # ── Logging ─────────────────────────────────
    LOG_DIR: str = "logs"
    LOG_FILE: str = "site_check.log"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
