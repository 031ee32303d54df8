"""Application settings loaded from environment (and .env).

This module provides a small Settings holder backed by environment variables.
Keep this file simple and import `settings` from other modules.
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


def _get(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    if v is None:
        return default
    return v


DEFAULT_RECIPES_DIR = str(Path.home() / "Documents" / "Recipes")


@dataclass
class Settings:
    # Directory holding the recipe .md files; "~" is expanded by the store
    RECIPES_DIR: str = _get("RECIPES_DIR", DEFAULT_RECIPES_DIR)

    # Logging configuration
    # LOG_LEVEL can be DEBUG, INFO, WARNING, ERROR, or CRITICAL
    LOG_LEVEL: str = _get("LOG_LEVEL", "INFO")
    # Optional path to write logs to a file; if unset, logs go to stderr
    LOG_FILE: str | None = _get("LOG_FILE", None)


settings = Settings()
