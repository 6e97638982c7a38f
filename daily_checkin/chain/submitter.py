"""
Transaction submission with bounded fixed-interval retry.

The transaction is serialized once; every attempt rebroadcasts the same
payload (no re-signing, no rebuild). An attempt fails if either the
broadcast or the confirmation fails. Between attempts the submitter sleeps
a fixed interval; there is no sleep after the final attempt.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Protocol

from daily_checkin.checkin_logging import get_logger
from daily_checkin.config.settings import DEFAULT_TX_MAX_ATTEMPTS, DEFAULT_TX_RETRY_INTERVAL_SEC
from daily_checkin.core.exceptions import ChainError, SubmissionError

logger = get_logger(__name__)


class RawTransactionSink(Protocol):
    async def send_raw_transaction(self, payload: bytes) -> str: ...

    async def confirm_transaction(self, signature: str) -> None: ...


class TransactionSubmitter:
    """Broadcast a signed transaction and await confirmation, retrying ChainError up to max_attempts."""

    def __init__(
        self,
        chain: RawTransactionSink,
        *,
        max_attempts: int = DEFAULT_TX_MAX_ATTEMPTS,
        retry_interval_sec: float = DEFAULT_TX_RETRY_INTERVAL_SEC,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._chain = chain
        self._max_attempts = max_attempts
        self._retry_interval = retry_interval_sec
        self._sleep = sleep

    async def submit(self, signed_tx: Any) -> str:
        """Return the confirmed signature. Raises SubmissionError once attempts are exhausted."""
        payload = bytes(signed_tx)
        last_error = ChainError("no attempt made")

        for attempt in range(self._max_attempts):
            try:
                signature = await self._chain.send_raw_transaction(payload)
                await self._chain.confirm_transaction(signature)
            except ChainError as e:
                last_error = e
                remaining = self._max_attempts - attempt - 1
                logger.warning(
                    "tx_attempt_failed",
                    attempt=attempt + 1,
                    retries_left=remaining,
                    error=e.message,
                )
                if remaining > 0:
                    await self._sleep(self._retry_interval)
                continue
            logger.info("tx_confirmed", signature=signature, attempts=attempt + 1)
            return signature

        logger.error("tx_retries_exhausted", attempts=self._max_attempts, error=last_error.message)
        raise SubmissionError(
            f"Transaction failed after {self._max_attempts} attempts: {last_error.message}",
            attempts=self._max_attempts,
            last_error=last_error,
            upstream_message=last_error.upstream_message,
        ) from last_error
