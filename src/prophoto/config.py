"""
Application constants and environment-driven settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

APP_NAME = "ProPhoto Resume"
APP_VERSION = "0.1.0"

GEMINI_IMAGE_MODEL = "gemini-2.5-flash-image"
EXPORT_FILENAME = "professional-resume-photo.png"


@dataclass(frozen=True)
class Settings:
    """
    Process configuration, read once when the app starts.

    api_key:
        Gemini API key from GEMINI_API_KEY (or API_KEY). None if unset;
        transforms then fail on first use.
    model:
        Image model id, PROPHOTO_MODEL.
    log_level:
        Console log level name, PROPHOTO_LOG_LEVEL.
    """
    api_key: Optional[str] = None
    model: str = GEMINI_IMAGE_MODEL
    log_level: str = "INFO"

    @staticmethod
    def from_env(
        environ: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Path] = None,
    ) -> "Settings":
        if environ is None:
            # .env never overrides variables already set in the process
            load_dotenv(dotenv_path=dotenv_path)
            environ = os.environ

        api_key = (environ.get("GEMINI_API_KEY") or environ.get("API_KEY") or "").strip()
        model = (environ.get("PROPHOTO_MODEL") or "").strip() or GEMINI_IMAGE_MODEL
        log_level = (environ.get("PROPHOTO_LOG_LEVEL") or "").strip().upper() or "INFO"
        return Settings(api_key=api_key or None, model=model, log_level=log_level)
