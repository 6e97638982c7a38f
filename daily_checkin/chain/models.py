"""
Data models for chain responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ActivityRecord:
    """
    One confirmed signature for an address, from getSignaturesForAddress.

    Transient: only used for the daily gating decision.
    """

    signature: str
    block_time: int | None  # Unix timestamp; None if the node has no block time

    @classmethod
    def from_rpc_item(cls, item: Any) -> "ActivityRecord":
        """Build from a solders RpcConfirmedTransactionStatusWithSignature."""
        return cls(signature=str(item.signature), block_time=item.block_time)

    def occurred_at(self, tz: Any = None) -> datetime | None:
        if self.block_time is None:
            return None
        return datetime.fromtimestamp(self.block_time, tz=tz)
