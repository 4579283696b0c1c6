from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.attio.com"


class AttioSettings(BaseSettings):
    # Auth
    ATTIO_API_KEY: Optional[SecretStr] = None

    # Transport
    ATTIO_BASE_URL: str = DEFAULT_BASE_URL
    ATTIO_TIMEOUT_SECONDS: float = 30.0

    # Rate limiting
    ATTIO_RETRY_RATE_LIMITS: bool = True
    ATTIO_MAX_RETRIES: int = 5

    # Logging
    ATTIO_LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore unrelated variables in .env
    )


@lru_cache(maxsize=1)
def get_settings() -> AttioSettings:
    """Return the process-wide settings, loading ``.env`` first."""
    load_dotenv()
    return AttioSettings()
