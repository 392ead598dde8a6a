#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from wikiout._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "wikiout"
    app_version: str = _pkg_version

    # ── URLs ───────────────────────────────────────────────────────────────

    # Protocol-relative, so expanded links follow the reader's scheme.
    server: str = "//localhost:8000"
    script_path: str = "/index.php"
    article_path: str = "/wiki/$1"

    # ── Output ─────────────────────────────────────────────────────────────

    wrapper_div_class: str = "mw-parser-output"
    language_code: str = "en"
    language_dir: Literal["ltr", "rtl"] = "ltr"

    # Namespace prefixes recognised by Title.new_from_text()
    namespaces: list[str] = [
        "Talk", "User", "User talk", "Project", "File", "Template",
        "Help", "Category",
    ]

    # ── CORS ───────────────────────────────────────────────────────────────

    cors_origins: list[str] = [
        "http://localhost:8000",
        "http://localhost:3000",
    ]


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
