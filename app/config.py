import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split_origins(value):
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./data/hostel.db"
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "DEBUG"


@lru_cache
def get_settings() -> Settings:
    """Read settings from the environment (and a local .env file, if any)."""
    return Settings(
        database_url=os.environ.get("HOSTEL_DATABASE_URL", Settings.database_url),
        host=os.environ.get("HOSTEL_HOST", Settings.host),
        port=int(os.environ.get("PORT", Settings.port)),
        cors_origins=_split_origins(os.environ.get("HOSTEL_CORS_ORIGINS", "*")),
        log_level=os.environ.get("HOSTEL_LOG_LEVEL", Settings.log_level).upper(),
    )
