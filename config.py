"""
config.py — application settings from environment variables.
All variables use the EVALR_ prefix.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Engine
    epsilon: float = Field(default=1e-9, gt=0)

    # Logging
    log_level: str = "INFO"

    # App
    app_title: str = "Evalr"
    app_version: str = "0.1.0"
    cors_allow_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix="EVALR_", env_file=".env", extra="ignore")
