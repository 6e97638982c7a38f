"""
Environment variable loading and parsing.

- SOLANA_RPC_URL: chain RPC endpoint (default: Sonic testnet)
- REWARDS_API_URL: rewards API base URL
- PRIVATE_KEYS_PATH / SUMMARY_PATH: key file and summary sink
- TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID: optional run notification
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from daily_checkin.core.exceptions import ConfigError

# Project root: config is daily_checkin/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_RPC_URL = "https://api.testnet.sonic.game"
DEFAULT_REWARDS_API_URL = "https://odyssey-api-beta.sonic.game"
DEFAULT_PRIVATE_KEYS_PATH = "privateKeys.json"
DEFAULT_SUMMARY_PATH = "summary_daily.json"


def load_checkin_env() -> None:
    """Load .env from project root, then from the working directory. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)
    load_dotenv()


def env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def mask_url(url: str) -> str:
    """Mask an API key in an RPC URL before logging it."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url
