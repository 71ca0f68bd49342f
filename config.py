"""Runtime settings, overridable through JPLAY_CTL_* environment variables."""

import os
from dataclasses import dataclass

DEFAULT_PROCESS_NAME = "UPnP Player"
DEFAULT_BUNDLE_ID = "com.jplay.jplay"
DEFAULT_WINDOW_TITLE = "JPLAY"
DEFAULT_MAX_DEPTH = 5
DEFAULT_TIMEOUT = 2.0
DEFAULT_POLL_INTERVAL = 0.05  # 50ms


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    process_name: str = DEFAULT_PROCESS_NAME
    bundle_id: str = DEFAULT_BUNDLE_ID
    window_title: str = DEFAULT_WINDOW_TITLE
    max_depth: int = DEFAULT_MAX_DEPTH
    timeout: float = DEFAULT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            process_name=os.getenv("JPLAY_CTL_PROCESS_NAME", DEFAULT_PROCESS_NAME),
            bundle_id=os.getenv("JPLAY_CTL_BUNDLE_ID", DEFAULT_BUNDLE_ID),
            window_title=os.getenv("JPLAY_CTL_WINDOW_TITLE", DEFAULT_WINDOW_TITLE),
            max_depth=_env_int("JPLAY_CTL_MAX_DEPTH", DEFAULT_MAX_DEPTH),
            timeout=_env_float("JPLAY_CTL_TIMEOUT", DEFAULT_TIMEOUT),
            poll_interval=_env_float("JPLAY_CTL_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            verbose=_env_bool("JPLAY_CTL_VERBOSE", False),
        )
