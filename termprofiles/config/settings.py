"""
Settings - Application configuration using Pydantic Settings.

Loads from TERMPROFILES_* environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Search provider title shown by the shell
    provider_name: str = "TERMINAL PROFILES"

    # Terminal application
    terminal_command: str = "gnome-terminal"
    terminal_desktop_id: str = "org.gnome.Terminal.desktop"
    profile_flag: str = "--profile"

    # Configuration store (gnome-terminal's dconf layout)
    dconf_command: str = "dconf"
    profile_list_path: str = "/org/gnome/terminal/legacy/profiles:/list"
    profile_name_path: str = "/org/gnome/terminal/legacy/profiles:/:{identifier}/visible-name"
    store_locale: str = "en_US.UTF-8"
    store_use_schema_default: bool = True
    store_timeout: float = Field(default=5.0, gt=0)

    # Search
    # "all": every term must match, "any": any term may match,
    # "last_term": score the last term only
    match_mode: Literal["all", "any", "last_term"] = "all"

    # Logging
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="TERMPROFILES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
