# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "PortfolioEngine"
COMPANY_NAME = "TECHASH"


def _platform_base() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def user_data_dir() -> Path:
    """
    Per-user directory for engine output (logs), e.g. ~/.local/share/TECHASH/PortfolioEngine.
    PM_DATA_DIR overrides the platform location (batch hosts, CI).
    """
    override = (os.getenv("PM_DATA_DIR") or "").strip()
    path = Path(override) if override else _platform_base() / COMPANY_NAME / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        # Last-resort fallback: use home directory
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_log_dir() -> Path:
    override = (os.getenv("PM_LOG_DIR") or "").strip()
    if override:
        return Path(override)
    return user_data_dir() / "logs"
