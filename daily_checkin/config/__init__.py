"""
Configuration management for the daily check-in agent.

Loads and validates settings from environment variables and an optional
.env file. Exposes a single source of truth for all run configuration.
"""

from daily_checkin.config.settings import CheckinSettings, get_settings  # noqa: F401

__all__ = ["CheckinSettings", "get_settings"]
