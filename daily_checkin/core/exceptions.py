"""
Application-level exceptions.

- ConfigError is fatal and only raised at startup.
- AccountError subclasses are scoped to one account; the check-in flow
  converts them into a Failed outcome and moves on to the next account.
- RewardsApiError and ChainError are raised at the HTTP / RPC boundary and
  carry the upstream message decoded once from the response.
"""

from __future__ import annotations


class CheckinError(Exception):
    """Base error. Carries an optional message reported by the remote service."""

    def __init__(self, message: str, *, upstream_message: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.upstream_message = upstream_message

    @property
    def display_message(self) -> str:
        """Upstream message when the server sent one, otherwise our own."""
        return self.upstream_message or self.message


class ConfigError(CheckinError):
    """Invalid or missing startup configuration (key file, settings)."""


class RewardsApiError(CheckinError):
    """Rewards API call failed: transport error, HTTP >= 400, or unexpected body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        upstream_message: str | None = None,
    ) -> None:
        super().__init__(message, upstream_message=upstream_message)
        self.status_code = status_code


class ChainError(CheckinError):
    """Solana RPC call failed (transport, RPC error, or failed transaction)."""


class AccountError(CheckinError):
    """Per-account failure; never propagated past the check-in flow."""

    @classmethod
    def wrap(cls, message: str, cause: CheckinError) -> "AccountError":
        return cls(f"{message}: {cause.message}", upstream_message=cause.upstream_message)


class AuthError(AccountError):
    """Challenge or authorize call failed."""


class FetchError(AccountError):
    """Activity lookup or check-in transaction fetch failed."""


class SubmissionError(AccountError):
    """Signed transaction could not be broadcast and confirmed."""

    def __init__(
        self,
        message: str,
        *,
        attempts: int = 0,
        last_error: BaseException | None = None,
        upstream_message: str | None = None,
    ) -> None:
        super().__init__(message, upstream_message=upstream_message)
        self.attempts = attempts
        self.last_error = last_error


class ReportError(AccountError):
    """Check-in confirmation call failed or returned nothing."""
