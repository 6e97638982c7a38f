"""
Daily activity gate.

Counts how many of an address's most recent confirmed signatures fall on the
current local calendar day and compares that with the daily quota.

Known limitation: only the last `fetch_limit` signatures of any kind are
inspected, not an unbounded daily count. Once an account has more than
`fetch_limit` transactions in total, today's count is capped by that window.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol

from daily_checkin.chain.models import ActivityRecord
from daily_checkin.checkin_logging import get_logger
from daily_checkin.checkin_logging.logger import short_address
from daily_checkin.config.settings import DEFAULT_DAILY_TX_QUOTA, DEFAULT_SIGNATURE_FETCH_LIMIT
from daily_checkin.core.exceptions import ChainError, FetchError

logger = get_logger(__name__)


class SignatureSource(Protocol):
    async def get_confirmed_signatures(self, address: str, limit: int) -> list[ActivityRecord]: ...


def local_now() -> datetime:
    return datetime.now().astimezone()


def start_of_day(instant: datetime) -> datetime:
    """Midnight of the instant's calendar day, in the instant's timezone."""
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def count_since(records: list[ActivityRecord], since: datetime) -> int:
    """Number of records with a block time at or after `since`. Input is not modified."""
    threshold = since.timestamp()
    return sum(1 for r in records if r.block_time is not None and r.block_time >= threshold)


class ActivityGate:
    """Decide once per account, before submission, whether today's quota is already reached."""

    def __init__(
        self,
        chain: SignatureSource,
        *,
        quota: int = DEFAULT_DAILY_TX_QUOTA,
        fetch_limit: int = DEFAULT_SIGNATURE_FETCH_LIMIT,
        now: Callable[[], datetime] = local_now,
    ) -> None:
        self._chain = chain
        self._quota = quota
        self._fetch_limit = fetch_limit
        self._now = now

    @property
    def quota(self) -> int:
        return self._quota

    async def count_today(self, address: str) -> int:
        """Count today's confirmed signatures among the most recent fetch_limit. Raises FetchError."""
        day_start = start_of_day(self._now())
        try:
            records = await self._chain.get_confirmed_signatures(address, self._fetch_limit)
        except ChainError as e:
            raise FetchError.wrap("Failed to fetch daily transactions", e) from e

        for r in records:
            when = r.occurred_at(day_start.tzinfo)
            logger.debug(
                "gate_record",
                wallet_id=short_address(address),
                signature=r.signature,
                block_time=when.isoformat() if when else None,
            )
        daily = count_since(records, day_start)
        logger.info(
            "gate_daily_count",
            wallet_id=short_address(address),
            fetched=len(records),
            daily_tx_count=daily,
            day_start=day_start.isoformat(),
        )
        return daily

    async def should_skip(self, address: str) -> bool:
        """True iff today's activity count is at or above the quota."""
        return await self.count_today(address) >= self._quota
