"""
Runtime settings, read from CROPYIELD_* environment variables or a .env file.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CROPYIELD_", env_file=".env", extra="ignore"
    )

    APP_NAME: str = "CropYield API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    # Seed used by the HTTP layer when a request does not pass one.
    RANDOM_SEED: Optional[int] = None
    HISTORY_YEARS: int = 6
    MAX_COMPARISON_CROPS: int = 4
    CORS_ORIGINS: List[str] = ["*"]


settings = Settings()
