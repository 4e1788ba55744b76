import os
from functools import lru_cache

from pydantic import BaseModel

_ENV_FIELDS = (
    "YAHOO_BASE_URL",
    "YAHOO_COOKIE_URL",
    "YAHOO_TIMEOUT_SEC",
    "YAHOO_CRUMB_TTL_SEC",
    "QUOTES_MAX_WORKERS",
    "RATE_LIMIT_ENABLED",
    "RATE_LIMIT_MAX_REQUESTS",
    "RATE_LIMIT_WINDOW_MS",
)


class Settings(BaseModel):
    YAHOO_BASE_URL: str = "https://query2.finance.yahoo.com"
    YAHOO_COOKIE_URL: str = "https://fc.yahoo.com"
    YAHOO_TIMEOUT_SEC: float = 5.0
    YAHOO_CRUMB_TTL_SEC: int = 3600
    QUOTES_MAX_WORKERS: int = 8
    RATE_LIMIT_ENABLED: bool = False
    RATE_LIMIT_MAX_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_MS: int = 60000

    @classmethod
    def from_env(cls) -> "Settings":
        raw = {}
        for name in _ENV_FIELDS:
            value = os.getenv(name)
            if value is not None and value.strip():
                raw[name] = value.strip()
        return cls.model_validate(raw)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
