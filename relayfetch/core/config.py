# relayfetch/core/config.py
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

# UA the fetch script has always identified itself with
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.3"
)

# ----- App settings (env-driven) -----
class Settings(BaseSettings):
    user_agent: str = DEFAULT_USER_AGENT
    proxy_api_url: Optional[str] = None
    proxy_api_timeout: float = 10.0
    cookie_path: str = "./cookie.json"
    default_retries: int = 3
    retry_delay_seconds: float = 2.0
    raise_on_exhausted: bool = True
    log_level: str = "INFO"

    class Config:
        env_prefix = "RELAYFETCH_"
        env_file = ".env"
        case_sensitive = False

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
