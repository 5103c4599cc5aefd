"""
Configuration helpers and defaults.

Read once at startup from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .gitlab import DEFAULT_BASE_URL


def _env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v is not None else default


def _int_env(name: str, default: int) -> int:
    try:
        return int(_env(name, str(default)) or default)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(_env(name, str(default)) or default)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    slack_auth_token: str | None
    slack_app_token: str | None
    gitlab_access_token: str | None
    gitlab_base_url: str
    gitlab_timeout_seconds: float
    slack_timeout_seconds: int
    slack_debug: bool
    event_dedupe_capacity: int

    def missing_required(self) -> list[str]:
        missing: list[str] = []
        if not self.slack_auth_token:
            missing.append("SLACK_AUTH_TOKEN")
        if not self.slack_app_token:
            missing.append("SLACK_APP_TOKEN")
        return missing


def load_settings() -> Settings:
    """Load settings from environment with defaults suitable for gitlab.com."""

    return Settings(
        slack_auth_token=_env("SLACK_AUTH_TOKEN"),
        slack_app_token=_env("SLACK_APP_TOKEN"),
        gitlab_access_token=_env("GITLAB_ACCESS_TOKEN"),
        gitlab_base_url=_env("CUSTOM_GITLAB_URL") or DEFAULT_BASE_URL,
        gitlab_timeout_seconds=_float_env("GITLAB_TIMEOUT_SECONDS", 8.0),
        slack_timeout_seconds=_int_env("SLACK_TIMEOUT_SECONDS", 30),
        slack_debug=((_env("SLACK_DEBUG", "false") or "false").lower() in ("1", "true", "yes")),
        event_dedupe_capacity=max(1, _int_env("EVENT_DEDUPE_CAPACITY", 1024)),
    )
