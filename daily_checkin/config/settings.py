"""
Run settings for the check-in agent.

CheckinSettings takes every default from the environment (after loading .env)
and validates numeric limits. Invalid values raise ConfigError, which is
fatal at startup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from daily_checkin.config.env import (
    DEFAULT_PRIVATE_KEYS_PATH,
    DEFAULT_REWARDS_API_URL,
    DEFAULT_RPC_URL,
    DEFAULT_SUMMARY_PATH,
    env_float,
    env_int,
    env_str,
    load_checkin_env,
)
from daily_checkin.core.exceptions import ConfigError

DEFAULT_DAILY_TX_QUOTA = 100
DEFAULT_SIGNATURE_FETCH_LIMIT = 100
DEFAULT_TX_MAX_ATTEMPTS = 8
DEFAULT_TX_RETRY_INTERVAL_SEC = 1.0
DEFAULT_HTTP_TIMEOUT_SEC = 30.0
# getSignaturesForAddress accepts at most 1000 per request
MAX_SIGNATURE_FETCH_LIMIT = 1000


@dataclass
class CheckinSettings:
    """Settings for one check-in run (env or explicit)."""

    solana_rpc_url: str = field(default_factory=lambda: env_str("SOLANA_RPC_URL", DEFAULT_RPC_URL))
    rewards_api_url: str = field(default_factory=lambda: env_str("REWARDS_API_URL", DEFAULT_REWARDS_API_URL))
    private_keys_path: Path = field(default_factory=lambda: Path(env_str("PRIVATE_KEYS_PATH", DEFAULT_PRIVATE_KEYS_PATH)))
    summary_path: Path = field(default_factory=lambda: Path(env_str("SUMMARY_PATH", DEFAULT_SUMMARY_PATH)))
    daily_tx_quota: int = field(default_factory=lambda: env_int("DAILY_TX_QUOTA", DEFAULT_DAILY_TX_QUOTA))
    signature_fetch_limit: int = field(default_factory=lambda: env_int("SIGNATURE_FETCH_LIMIT", DEFAULT_SIGNATURE_FETCH_LIMIT))
    tx_max_attempts: int = field(default_factory=lambda: env_int("TX_MAX_ATTEMPTS", DEFAULT_TX_MAX_ATTEMPTS))
    tx_retry_interval_sec: float = field(default_factory=lambda: env_float("TX_RETRY_INTERVAL_SEC", DEFAULT_TX_RETRY_INTERVAL_SEC))
    http_timeout_sec: float = field(default_factory=lambda: env_float("HTTP_TIMEOUT_SEC", DEFAULT_HTTP_TIMEOUT_SEC))
    telegram_bot_token: str = field(default_factory=lambda: env_str("TELEGRAM_BOT_TOKEN"))
    telegram_chat_id: str = field(default_factory=lambda: env_str("TELEGRAM_CHAT_ID"))

    def __post_init__(self) -> None:
        self.private_keys_path = Path(self.private_keys_path)
        self.summary_path = Path(self.summary_path)
        if not self.solana_rpc_url:
            raise ConfigError("SOLANA_RPC_URL must be non-empty")
        if not self.rewards_api_url:
            raise ConfigError("REWARDS_API_URL must be non-empty")
        if self.daily_tx_quota < 1:
            raise ConfigError("DAILY_TX_QUOTA must be positive")
        if not (1 <= self.signature_fetch_limit <= MAX_SIGNATURE_FETCH_LIMIT):
            raise ConfigError(f"SIGNATURE_FETCH_LIMIT must be between 1 and {MAX_SIGNATURE_FETCH_LIMIT}")
        if self.tx_max_attempts < 1:
            raise ConfigError("TX_MAX_ATTEMPTS must be at least 1")
        if self.tx_retry_interval_sec < 0:
            raise ConfigError("TX_RETRY_INTERVAL_SEC must not be negative")
        if self.http_timeout_sec <= 0:
            raise ConfigError("HTTP_TIMEOUT_SEC must be positive")

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)


def get_settings() -> CheckinSettings:
    """Load .env and return settings built from the environment."""
    load_checkin_env()
    return CheckinSettings()
