"""
Challenge/authorize login against the rewards API.

The server issues a challenge for the wallet; we sign its UTF-8 bytes with
the account's ed25519 key (detached signature), then send the base64
signature and base64 public key to the authorize endpoint in exchange for a
bearer token. No retry here: a failed login fails the current account only.
"""

from __future__ import annotations

import base64

from daily_checkin.checkin_logging import get_logger
from daily_checkin.core.exceptions import AuthError, RewardsApiError
from daily_checkin.rewards_api.client import RewardsApiClient
from daily_checkin.wallets.keystore import Account

logger = get_logger(__name__)


def sign_challenge(account: Account, challenge: str) -> str:
    """Detached ed25519 signature over the challenge bytes, base64-encoded."""
    signature = account.keypair.sign_message(challenge.encode("utf-8"))
    return base64.b64encode(bytes(signature)).decode("ascii")


class AuthSession:
    def __init__(self, api: RewardsApiClient) -> None:
        self._api = api

    async def authenticate(self, account: Account) -> str:
        """Return a bearer token for account. Raises AuthError."""
        try:
            challenge = await self._api.get_challenge(account.address)
            signature = sign_challenge(account, challenge)
            data = await self._api.authorize(account.address, account.public_key_b64, signature)
        except RewardsApiError as e:
            raise AuthError.wrap("Error fetching token", e) from e

        token = data.get("token")
        if not token:
            raise AuthError("Error fetching token: authorize response has no token")
        logger.info("auth_token_issued", wallet_id=account.short_address)
        return str(token)
