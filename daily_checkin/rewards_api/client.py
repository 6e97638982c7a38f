"""
Rewards API HTTP client (Sonic Odyssey).

Responsibilities:
- Build requests with browser-like headers and optional bearer auth.
- Decode every response once: transport errors, HTTP >= 400 and bodies
  without the expected `data` field raise RewardsApiError carrying the
  server's `message`.
"""

from __future__ import annotations

from typing import Any

import httpx

from daily_checkin.checkin_logging import get_logger
from daily_checkin.config.env import DEFAULT_REWARDS_API_URL
from daily_checkin.core.exceptions import RewardsApiError

logger = get_logger(__name__)

CHALLENGE_PATH = "/auth/sonic/challenge"
AUTHORIZE_PATH = "/auth/sonic/authorize"
CHECKIN_TRANSACTION_PATH = "/user/check-in/transaction"
CHECKIN_PATH = "/user/check-in"

DEFAULT_HEADERS = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
    "content-type": "application/json",
    "origin": "https://odyssey.sonic.game",
    "referer": "https://odyssey.sonic.game/",
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-site",
    "user-agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
    ),
}


def _upstream_message(resp: httpx.Response) -> str | None:
    """Pull `message` out of a JSON error body, if there is one."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        msg = body.get("message")
        if msg:
            return str(msg)
    return None


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class RewardsApiClient:
    """Async client for the challenge, authorize, check-in transaction and check-in endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_REWARDS_API_URL,
        *,
        timeout_sec: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=DEFAULT_HEADERS,
            timeout=httpx.Timeout(timeout_sec),
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Perform one call and return the body's `data` field."""
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise RewardsApiError(f"{method} {path} failed: {e}") from e

        if resp.status_code >= 400:
            upstream = _upstream_message(resp)
            logger.warning(
                "rewards_api_error",
                method=method,
                path=path,
                status_code=resp.status_code,
                upstream_message=upstream,
            )
            raise RewardsApiError(
                f"{method} {path} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                upstream_message=upstream,
            )
        try:
            body = resp.json()
        except ValueError as e:
            raise RewardsApiError(f"{method} {path} returned non-JSON body") from e
        if not isinstance(body, dict) or body.get("data") is None:
            raise RewardsApiError(
                f"{method} {path} returned no data",
                status_code=resp.status_code,
                upstream_message=body.get("message") if isinstance(body, dict) else None,
            )
        return body["data"]

    async def get_challenge(self, address: str) -> str:
        data = await self._request("GET", CHALLENGE_PATH, params={"wallet": address})
        return str(data)

    async def authorize(self, address: str, address_encoded: str, signature: str) -> dict[str, Any]:
        data = await self._request(
            "POST",
            AUTHORIZE_PATH,
            json={
                "address": address,
                "address_encoded": address_encoded,
                "signature": signature,
            },
        )
        if not isinstance(data, dict):
            raise RewardsApiError(f"POST {AUTHORIZE_PATH} returned unexpected data")
        return data

    async def get_checkin_transaction(self, token: str) -> str:
        """Return the base64 unsigned check-in transaction."""
        data = await self._request("GET", CHECKIN_TRANSACTION_PATH, headers=_bearer(token))
        tx_hash = data.get("hash") if isinstance(data, dict) else None
        if not tx_hash:
            raise RewardsApiError(f"GET {CHECKIN_TRANSACTION_PATH} returned no transaction")
        return str(tx_hash)

    async def confirm_checkin(self, token: str, signature: str) -> dict[str, Any]:
        """Report the submitted signature; return the check-in confirmation payload."""
        data = await self._request("POST", CHECKIN_PATH, json={"hash": signature}, headers=_bearer(token))
        if not data:
            raise RewardsApiError(f"POST {CHECKIN_PATH} returned an empty confirmation")
        return data if isinstance(data, dict) else {"status": data}

    async def close(self) -> None:
        await self._client.aclose()
