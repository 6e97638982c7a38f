"""
Per-account check-in flow.

States: START -> GATE_CHECKED -> AUTHENTICATED -> TX_FETCHED -> TX_SUBMITTED
-> REPORTED -> DONE, with FAILED reachable from any non-terminal state.
run() never raises: every account yields exactly one AccountOutcome.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum
from typing import Any

from solders.transaction import Transaction

from daily_checkin.chain.activity_gate import ActivityGate
from daily_checkin.chain.submitter import TransactionSubmitter
from daily_checkin.checkin_logging import bind_wallet
from daily_checkin.core.exceptions import (
    AccountError,
    FetchError,
    ReportError,
    RewardsApiError,
    SubmissionError,
)
from daily_checkin.rewards_api.auth import AuthSession
from daily_checkin.rewards_api.client import RewardsApiClient
from daily_checkin.wallets.keystore import Account


class FlowState(str, Enum):
    START = "start"
    GATE_CHECKED = "gate_checked"
    AUTHENTICATED = "authenticated"
    TX_FETCHED = "tx_fetched"
    TX_SUBMITTED = "tx_submitted"
    REPORTED = "reported"
    DONE = "done"
    FAILED = "failed"


class OutcomeStatus(str, Enum):
    SKIPPED = "skipped"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class AccountOutcome:
    """Terminal result of one account for this run. Never mutated after creation."""

    address: str
    status: OutcomeStatus
    signature: str | None = None
    checkin_status: Any = None
    error: str | None = None
    failed_at: FlowState | None = None  # last state reached before the failure

    @classmethod
    def skipped(cls, address: str) -> "AccountOutcome":
        return cls(address=address, status=OutcomeStatus.SKIPPED)

    @classmethod
    def succeeded(cls, address: str, signature: str, checkin_status: Any = None) -> "AccountOutcome":
        return cls(address=address, status=OutcomeStatus.SUCCESS, signature=signature, checkin_status=checkin_status)

    @classmethod
    def failed(cls, address: str, error: str, failed_at: FlowState) -> "AccountOutcome":
        return cls(address=address, status=OutcomeStatus.FAILED, error=error, failed_at=failed_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "status": self.status.value,
            "signature": self.signature,
            "checkin_status": self.checkin_status,
            "error": self.error,
            "failed_at": self.failed_at.value if self.failed_at else None,
        }


def decode_transaction(tx_b64: str) -> Transaction:
    """Decode the server's base64 unsigned transaction. Raises FetchError."""
    try:
        return Transaction.from_bytes(base64.b64decode(tx_b64, validate=True))
    except Exception as e:
        raise FetchError(f"Malformed check-in transaction: {e}") from e


def partial_sign(tx: Transaction, account: Account) -> Transaction:
    """Add the account's signature, keeping the server's blockhash and other signatures."""
    try:
        tx.partial_sign([account.keypair], tx.message.recent_blockhash)
    except Exception as e:
        raise SubmissionError(f"Failed to sign check-in transaction: {e}") from e
    return tx


class CheckInFlow:
    """Gate check, login, fetch, sign, submit and report for one account."""

    def __init__(
        self,
        gate: ActivityGate,
        auth: AuthSession,
        api: RewardsApiClient,
        submitter: TransactionSubmitter,
    ) -> None:
        self._gate = gate
        self._auth = auth
        self._api = api
        self._submitter = submitter

    async def _fetch_transaction(self, token: str) -> Transaction:
        try:
            tx_b64 = await self._api.get_checkin_transaction(token)
        except RewardsApiError as e:
            raise FetchError.wrap("Failed to fetch check-in transaction", e) from e
        return decode_transaction(tx_b64)

    async def _report(self, token: str, signature: str) -> dict[str, Any]:
        try:
            return await self._api.confirm_checkin(token, signature)
        except RewardsApiError as e:
            raise ReportError.wrap("Failed to report check-in", e) from e

    async def run(self, account: Account) -> AccountOutcome:
        log = bind_wallet(account.address)
        state = FlowState.START
        try:
            if await self._gate.should_skip(account.address):
                log.info("checkin_skipped", reason="daily_quota_reached", quota=self._gate.quota)
                return AccountOutcome.skipped(account.address)
            state = FlowState.GATE_CHECKED

            token = await self._auth.authenticate(account)
            state = FlowState.AUTHENTICATED

            tx = await self._fetch_transaction(token)
            state = FlowState.TX_FETCHED

            signature = await self._submitter.submit(partial_sign(tx, account))
            state = FlowState.TX_SUBMITTED

            confirmation = await self._report(token, signature)
            state = FlowState.REPORTED
        except AccountError as e:
            log.warning("checkin_failed", state=state.value, error=e.display_message)
            return AccountOutcome.failed(account.address, e.display_message, failed_at=state)
        except Exception as e:
            log.exception("checkin_unexpected_error", state=state.value, error=str(e))
            return AccountOutcome.failed(account.address, str(e) or type(e).__name__, failed_at=state)

        checkin_status = confirmation.get("status")
        log.info("checkin_succeeded", signature=signature, checkin_status=checkin_status)
        return AccountOutcome.succeeded(account.address, signature, checkin_status)
