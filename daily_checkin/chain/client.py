"""
Thin async capability over a Solana RPC connection.

Every failure surfaces as ChainError chained from the underlying cause, so
callers only deal with one error type at the RPC boundary.
"""

from __future__ import annotations

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.models import TxOpts
from solders.pubkey import Pubkey
from solders.signature import Signature

from daily_checkin.chain.models import ActivityRecord
from daily_checkin.checkin_logging import get_logger
from daily_checkin.core.exceptions import ChainError

logger = get_logger(__name__)


class ChainClient:
    """Fetch recent signatures, broadcast raw transactions, await confirmation."""

    def __init__(
        self,
        rpc_url: str,
        *,
        commitment: Commitment = Confirmed,
        timeout_sec: float = 30.0,
        client: AsyncClient | None = None,
    ) -> None:
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self._rpc_url = rpc_url.rstrip("/")
        self._commitment = commitment
        self._client = client or AsyncClient(self._rpc_url, commitment=commitment, timeout=timeout_sec)

    async def get_confirmed_signatures(self, address: str, limit: int) -> list[ActivityRecord]:
        """Return up to `limit` most recent confirmed signatures for address, newest first."""
        try:
            resp = await self._client.get_signatures_for_address(
                Pubkey.from_string(address), limit=limit, commitment=self._commitment
            )
        except Exception as e:
            raise ChainError(f"getSignaturesForAddress failed: {e}") from e
        return [ActivityRecord.from_rpc_item(item) for item in resp.value or []]

    async def send_raw_transaction(self, payload: bytes) -> str:
        """Broadcast a serialized transaction; return its signature."""
        try:
            resp = await self._client.send_raw_transaction(
                payload,
                opts=TxOpts(skip_preflight=False, preflight_commitment=self._commitment),
            )
        except Exception as e:
            raise ChainError(f"sendTransaction failed: {e}") from e
        return str(resp.value)

    async def confirm_transaction(self, signature: str) -> None:
        """Wait for the signature to reach the client's commitment. Raise ChainError if it fails."""
        try:
            resp = await self._client.confirm_transaction(
                Signature.from_string(signature), commitment=self._commitment
            )
        except Exception as e:
            raise ChainError(f"Transaction {signature} not confirmed: {e}") from e
        statuses = resp.value or []
        status = statuses[0] if statuses else None
        if status is not None and status.err is not None:
            raise ChainError(f"Transaction {signature} failed: {status.err}")

    async def close(self) -> None:
        await self._client.close()
