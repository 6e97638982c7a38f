"""
Pytest fixtures for check-in tests.

Real solders keypairs and transactions; the chain and the rewards API are
in-memory fakes (the API behind httpx.MockTransport).
"""

from __future__ import annotations

import base64
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from daily_checkin.chain.models import ActivityRecord
from daily_checkin.core.exceptions import ChainError
from daily_checkin.rewards_api.client import (
    AUTHORIZE_PATH,
    CHALLENGE_PATH,
    CHECKIN_PATH,
    CHECKIN_TRANSACTION_PATH,
    RewardsApiClient,
)
from daily_checkin.wallets.keystore import Account

# Fixed gate instant: 2026-10-19 15:30 UTC, so "today" starts at 2026-10-19 00:00 UTC
GATE_NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)
DAY_START_TS = int(datetime(2026, 10, 19, tzinfo=timezone.utc).timestamp())
FAKE_SIGNATURE = str(Signature.new_unique())


def gate_clock() -> datetime:
    return GATE_NOW


def today_records(count: int, prefix: str = "today") -> list[ActivityRecord]:
    return [ActivityRecord(signature=f"{prefix}-{i}", block_time=DAY_START_TS + 60 * i) for i in range(count)]


def older_records(count: int, prefix: str = "old") -> list[ActivityRecord]:
    day_before = DAY_START_TS - int(timedelta(hours=1).total_seconds())
    return [ActivityRecord(signature=f"{prefix}-{i}", block_time=day_before - 60 * i) for i in range(count)]


def build_unsigned_tx(payer: Pubkey) -> Transaction:
    """Unsigned one-instruction transaction with `payer` as fee payer and only signer."""
    ix = transfer(TransferParams(from_pubkey=payer, to_pubkey=Pubkey.new_unique(), lamports=1))
    msg = Message.new_with_blockhash([ix], payer, Hash.new_unique())
    return Transaction.new_unsigned(msg)


class FakeChain:
    """In-memory chain: per-address signature history and scripted submission failures."""

    def __init__(
        self,
        records: dict[str, list[ActivityRecord]] | None = None,
        *,
        send_failures: int = 0,
        confirm_failures: int = 0,
        fetch_error: str | None = None,
    ) -> None:
        self.records = records or {}
        self.send_failures = send_failures
        self.confirm_failures = confirm_failures
        self.fetch_error = fetch_error
        self.fetch_calls: list[tuple[str, int]] = []
        self.sent_payloads: list[bytes] = []
        self.confirmed: list[str] = []

    async def get_confirmed_signatures(self, address: str, limit: int) -> list[ActivityRecord]:
        self.fetch_calls.append((address, limit))
        if self.fetch_error:
            raise ChainError(self.fetch_error)
        return self.records.get(address, [])[:limit]

    async def send_raw_transaction(self, payload: bytes) -> str:
        self.sent_payloads.append(payload)
        if self.send_failures > 0:
            self.send_failures -= 1
            raise ChainError("Blockhash not found")
        try:
            return str(Transaction.from_bytes(payload).signatures[0])
        except Exception:
            return FAKE_SIGNATURE

    async def confirm_transaction(self, signature: str) -> None:
        if self.confirm_failures > 0:
            self.confirm_failures -= 1
            raise ChainError(f"Transaction {signature} not confirmed")
        self.confirmed.append(signature)


class FakeRewardsApi:
    """MockTransport-backed rewards API. Tokens are 'token-<address>'."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.challenge_fail: dict[str, tuple[int, str]] = {}
        self.checkin_tx_fail: dict[str, tuple[int, str]] = {}
        self.checkin_fail: dict[str, tuple[int, str]] = {}
        self.issued_challenges: dict[str, str] = {}
        self.authorize_bodies: list[dict] = []
        self.reported: list[tuple[str, str]] = []
        self.transport = httpx.MockTransport(self._handle)

    def client(self) -> RewardsApiClient:
        return RewardsApiClient("https://rewards.test", transport=self.transport)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    @staticmethod
    def _address_from_token(request: httpx.Request) -> str:
        return request.headers["Authorization"].removeprefix("Bearer token-")

    @staticmethod
    def _error(failure: tuple[int, str]) -> httpx.Response:
        status, message = failure
        return httpx.Response(status, json={"code": status, "message": message})

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == CHALLENGE_PATH:
            wallet = request.url.params["wallet"]
            if wallet in self.challenge_fail:
                return self._error(self.challenge_fail[wallet])
            challenge = f"Sign in to Sonic Odyssey: {wallet[:8]}-nonce-42"
            self.issued_challenges[wallet] = challenge
            return httpx.Response(200, json={"code": 0, "data": challenge})
        if path == AUTHORIZE_PATH:
            body = json.loads(request.content)
            self.authorize_bodies.append(body)
            return httpx.Response(200, json={"code": 0, "data": {"token": f"token-{body['address']}"}})
        if path == CHECKIN_TRANSACTION_PATH:
            address = self._address_from_token(request)
            if address in self.checkin_tx_fail:
                return self._error(self.checkin_tx_fail[address])
            tx = build_unsigned_tx(Pubkey.from_string(address))
            return httpx.Response(200, json={"code": 0, "data": {"hash": base64.b64encode(bytes(tx)).decode()}})
        if path == CHECKIN_PATH:
            address = self._address_from_token(request)
            if address in self.checkin_fail:
                return self._error(self.checkin_fail[address])
            signature = json.loads(request.content)["hash"]
            self.reported.append((address, signature))
            return httpx.Response(200, json={"code": 0, "data": {"status": "success", "accumulative_days": 3}})
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def make_account():
    def _make() -> Account:
        return Account(Keypair())

    return _make


@pytest.fixture
def account(make_account) -> Account:
    return make_account()


@pytest.fixture
def fake_api() -> FakeRewardsApi:
    return FakeRewardsApi()


@pytest.fixture
def no_sleep():
    """Recording sleep: keeps the delays instead of waiting."""
    delays: list[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep
