from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_SENDER = "Birthday Bot <emailer@birthdayreminder.space>"
FRIENDS_CONFIG_ENV = "FRIENDS_CONFIG"


@dataclass(frozen=True)
class Settings:
    resend_api_key: str | None
    notification_email: str | None
    sender_address: str
    dry_run_if_no_api_key: bool
    send_pause_seconds: float
    escape_html: bool
    check_hour: int
    check_minute: int
    check_on_startup: bool
    host: str
    port: int


def _optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _flag_env(name: str, default: bool = False) -> bool:
    value = _optional_env(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int, *, low: int, high: int) -> int:
    value = _optional_env(name)
    if value is None:
        return default
    if not value.lstrip("-").isdigit():
        raise ValueError(f"{name} must be an integer")

    parsed = int(value)
    if parsed < low or parsed > high:
        raise ValueError(f"{name} must be between {low} and {high}")
    return parsed


def _pause_env(name: str, default: float) -> float:
    value = _optional_env(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number of seconds") from exc
    if parsed < 0:
        raise ValueError(f"{name} must not be negative")
    return parsed


def load_settings() -> Settings:
    return Settings(
        resend_api_key=_optional_env("RESEND_API_KEY"),
        notification_email=_optional_env("NOTIFICATION_EMAIL"),
        sender_address=_optional_env("EMAIL_FROM") or DEFAULT_SENDER,
        dry_run_if_no_api_key=_flag_env("DRY_RUN_IF_NO_API_KEY"),
        send_pause_seconds=_pause_env("SEND_PAUSE_SECONDS", 2.0),
        escape_html=_flag_env("ESCAPE_HTML"),
        check_hour=_int_env("CHECK_HOUR", 8, low=0, high=23),
        check_minute=_int_env("CHECK_MINUTE", 0, low=0, high=59),
        check_on_startup=_flag_env("CHECK_ON_STARTUP"),
        host=_optional_env("HOST") or "0.0.0.0",
        port=_int_env("PORT", 8000, low=1, high=65535),
    )
