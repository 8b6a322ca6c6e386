"""
Student Portal Core — Centralized configuration.

Loads all settings from .env and validates required keys.
This module is the foundation for every other module in the project.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from src/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Telegram: the bot token also signs Mini App init data
    TELEGRAM_BOT_TOKEN: str

    # Privileges
    MAIN_ADMIN_USERNAME: str = "MO2025_PROGRAMER"
    ADMIN_IDS: list[int] = []

    # Study reminders
    STUDY_CHECK_INTERVAL_SECONDS: int = 30
    STUDY_REMINDER_LEAD_MINUTES: int = 5

    # Exam reminders (exam list served by the document store)
    EXAM_CHECK_INTERVAL_HOURS: int = 24
    EXAMS_URL: str = "http://localhost:5000/api/exams"

    # Per-recipient bound on a single Telegram send
    NOTIFICATION_TIMEOUT_SECONDS: float = 10.0

    # HTTP API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Disable to serve the API without long-polling Telegram updates
    BOT_POLLING: bool = True

    @field_validator("ADMIN_IDS", mode="before")
    @classmethod
    def parse_admin_ids(cls, v: str | list[int]) -> list[int]:
        if isinstance(v, list):
            return v
        if isinstance(v, str) and v.strip():
            return [int(pid.strip()) for pid in v.split(",") if pid.strip()]
        return []

    @field_validator(
        "STUDY_CHECK_INTERVAL_SECONDS",
        "STUDY_REMINDER_LEAD_MINUTES",
        "EXAM_CHECK_INTERVAL_HOURS",
        "API_PORT",
        mode="before",
    )
    @classmethod
    def parse_int(cls, v: str | int) -> int:
        return int(v)

    @field_validator("BOT_POLLING", mode="before")
    @classmethod
    def parse_flag(cls, v: str | bool) -> bool:
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() not in {"0", "false", "no", "off", ""}


def _load_settings() -> Settings:
    """Load settings from environment, validating required keys."""
    token = os.getenv("TELEGRAM_BOT_TOKEN", "")

    if not token or token.startswith("your-"):
        print("ERROR: TELEGRAM_BOT_TOKEN is missing or not set in .env", file=sys.stderr)
        sys.exit(1)

    return Settings(
        TELEGRAM_BOT_TOKEN=token,
        MAIN_ADMIN_USERNAME=os.getenv("MAIN_ADMIN_USERNAME", "MO2025_PROGRAMER"),
        ADMIN_IDS=os.getenv("ADMIN_IDS", ""),
        STUDY_CHECK_INTERVAL_SECONDS=os.getenv("STUDY_CHECK_INTERVAL_SECONDS", "30"),
        STUDY_REMINDER_LEAD_MINUTES=os.getenv("STUDY_REMINDER_LEAD_MINUTES", "5"),
        EXAM_CHECK_INTERVAL_HOURS=os.getenv("EXAM_CHECK_INTERVAL_HOURS", "24"),
        EXAMS_URL=os.getenv("EXAMS_URL", "http://localhost:5000/api/exams"),
        NOTIFICATION_TIMEOUT_SECONDS=os.getenv("NOTIFICATION_TIMEOUT_SECONDS", "10"),
        API_HOST=os.getenv("API_HOST", "0.0.0.0"),
        API_PORT=os.getenv("API_PORT", "8000"),
        BOT_POLLING=os.getenv("BOT_POLLING", "true"),
    )


# Singleton, imported by all other modules as:
#   from src.config import settings
settings = _load_settings()
