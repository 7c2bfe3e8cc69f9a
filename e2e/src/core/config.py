from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_BASE_URL = "https://parabank.parasoft.com/parabank/"


def _env_true(name: str) -> bool:
    v = (os.getenv(name) or "").strip().lower()
    return v in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    base_url: str
    headless: bool
    channel: Optional[str]
    slow_mo_ms: int
    timeout_ms: int
    nav_timeout_ms: int
    artifact_dir: Path
    trace: bool


def load_settings() -> Settings:
    # headless defaults to on in CI unless PW_HEADLESS says otherwise
    is_ci = _env_true("CI")
    headless = _env_true("PW_HEADLESS") if os.getenv("PW_HEADLESS") else is_ci

    base_url = os.getenv("PARABANK_BASE_URL") or DEFAULT_BASE_URL
    if not base_url.endswith("/"):
        base_url += "/"

    return Settings(
        base_url=base_url,
        headless=headless,
        channel=os.getenv("PW_CHANNEL") or None,
        slow_mo_ms=_env_int("PW_SLOWMO_MS", 0),
        timeout_ms=_env_int("PW_TIMEOUT_MS", 30000),
        nav_timeout_ms=_env_int("PW_NAV_TIMEOUT_MS", 45000),
        artifact_dir=Path(os.getenv("ARTIFACT_DIR", "artifacts")),
        trace=_env_true("PW_TRACE"),
    )
