"""
Structured JSON logging: timestamp, wallet_id, event_type.

structlog with ISO timestamps, log level, and consistent keys. All modules
use get_logger() and pass an event_type (and wallet_id where relevant).

LOG_LEVEL and LOG_FORMAT are read from the environment after .env is
loaded, so both can be set there. Only daily_checkin.config.env is imported
(it does not log), which keeps this module free of circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

from daily_checkin.config.env import load_checkin_env

DEFAULT_LOG_LEVEL = "INFO"
# JSON output for CI/cron (LOG_FORMAT=json); human-readable for local runs
DEFAULT_LOG_FORMAT = "json"


def log_settings() -> tuple[int, str]:
    """Return (level, format) from LOG_LEVEL / LOG_FORMAT as currently set."""
    level_name = (os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    fmt = (os.getenv("LOG_FORMAT") or DEFAULT_LOG_FORMAT).strip().lower()
    return getattr(logging, level_name, logging.INFO), fmt


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog() -> None:
    """Configure structlog from the current env: JSON or console, timestamp, level, event_type."""
    level, fmt = log_settings()
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if fmt == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    load_checkin_env()
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("checkin_gate_checked", wallet_id="7F1WzV...", daily_tx_count=12)
    """
    return structlog.get_logger(name).bind(logger=name)


def short_address(address: str) -> str:
    """Shorten an address for log output (first 6 chars + '...')."""
    return address[:6] + "..." if len(address) > 6 else address


def bind_wallet(address: str) -> structlog.BoundLogger:
    """Return a logger with wallet_id bound to all subsequent log calls."""
    return get_logger("daily_checkin").bind(wallet_id=short_address(address))
