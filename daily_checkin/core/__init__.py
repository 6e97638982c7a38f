"""Shared error types for the check-in agent."""

from daily_checkin.core.exceptions import (
    AccountError,
    AuthError,
    ChainError,
    CheckinError,
    ConfigError,
    FetchError,
    ReportError,
    RewardsApiError,
    SubmissionError,
)

__all__ = [
    "AccountError",
    "AuthError",
    "ChainError",
    "CheckinError",
    "ConfigError",
    "FetchError",
    "ReportError",
    "RewardsApiError",
    "SubmissionError",
]
