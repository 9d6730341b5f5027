"""Runtime configuration.

Values are read from the environment (prefix ``SANKEY_``) and an optional .env file.
"""
from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from .env and environment variables."""

    model_config = SettingsConfigDict(env_prefix="SANKEY_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    fallback_link_color: str = Field(
        default="#000000",
        validation_alias=AliasChoices("SANKEY_FALLBACK_LINK_COLOR", "SANKEY_LINK_COLOR"),
    )
    default_font_family: str = "Arial, sans-serif"


settings = Settings()
