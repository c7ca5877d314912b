"""Configuration loading and validation for toastbox."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

DEFAULT_DURATION_MS = 4000
DEFAULT_MAX_VISIBLE = 5
DEFAULT_RESEND_COOLDOWN_S = 60
DEFAULT_LOG_LEVEL = "INFO"

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


@dataclass(slots=True)
class ToastConfig:
    """Runtime configuration values."""

    default_duration_ms: int = DEFAULT_DURATION_MS
    max_visible: int = DEFAULT_MAX_VISIBLE  # 0 disables the bound
    resend_cooldown_s: int = DEFAULT_RESEND_COOLDOWN_S
    log_level: str = DEFAULT_LOG_LEVEL


def _normalize_log_level(raw_level: str | None) -> str:
    """Map a raw level name onto a loguru level, INFO when unknown."""
    name = (raw_level or DEFAULT_LOG_LEVEL).strip().upper()
    if name not in _LOG_LEVELS:
        logger.warning("LOG_LEVEL {!r} is not a known level. Using default: {}", raw_level, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return name


def _parse_int(raw_value: str | None, default: int, name: str, minimum: int) -> int:
    """Parse an integer config value (>= minimum) with safe fallback."""
    if raw_value is None or not raw_value.strip():
        return default
    try:
        parsed = int(raw_value.strip())
    except ValueError:
        logger.warning("{} must be integer. Using default: {}", name, default)
        return default
    if parsed < minimum:
        logger.warning("{} must be >= {}. Using default: {}", name, minimum, default)
        return default
    return parsed


def load_config(dotenv: bool = True, env_file: str | Path | None = None) -> ToastConfig:
    """
    Load config values from .env and the environment.

    Variables already set in the environment win over the .env file.
    """
    if dotenv:
        load_dotenv(env_file)

    return ToastConfig(
        default_duration_ms=_parse_int(
            os.getenv("TOAST_DEFAULT_DURATION_MS"),
            default=DEFAULT_DURATION_MS,
            name="TOAST_DEFAULT_DURATION_MS",
            minimum=0,
        ),
        max_visible=_parse_int(
            os.getenv("TOAST_MAX_VISIBLE"),
            default=DEFAULT_MAX_VISIBLE,
            name="TOAST_MAX_VISIBLE",
            minimum=0,
        ),
        resend_cooldown_s=_parse_int(
            os.getenv("TOAST_RESEND_COOLDOWN_S"),
            default=DEFAULT_RESEND_COOLDOWN_S,
            name="TOAST_RESEND_COOLDOWN_S",
            minimum=1,
        ),
        log_level=_normalize_log_level(os.getenv("LOG_LEVEL")),
    )
