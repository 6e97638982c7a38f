"""
Key store: load the managed accounts' secret keys once at startup.

The key file is a JSON array. Each entry is either a base58 string of a
64-byte secret key or a JSON array of 64 bytes (solana-keygen format).
Any problem with the file is a ConfigError; secret material never appears
in error messages or logs.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import base58
from solders.keypair import Keypair

from daily_checkin.checkin_logging import get_logger
from daily_checkin.checkin_logging.logger import short_address
from daily_checkin.core.exceptions import ConfigError

logger = get_logger(__name__)

SECRET_KEY_LEN = 64


@dataclass(frozen=True)
class Account:
    """One managed Solana account. Immutable for the run."""

    keypair: Keypair

    @property
    def address(self) -> str:
        return str(self.keypair.pubkey())

    @property
    def short_address(self) -> str:
        return short_address(self.address)

    @property
    def public_key_bytes(self) -> bytes:
        return bytes(self.keypair.pubkey())

    @property
    def public_key_b64(self) -> str:
        return base64.b64encode(self.public_key_bytes).decode("ascii")


def parse_keypair(entry: Any) -> Keypair:
    """Build a Keypair from a base58 string or a list of at least 64 ints. Raises ValueError."""
    if isinstance(entry, list):
        if len(entry) < SECRET_KEY_LEN:
            raise ValueError(f"byte array must hold {SECRET_KEY_LEN} values, got {len(entry)}")
        return Keypair.from_bytes(bytes(entry[:SECRET_KEY_LEN]))
    if not isinstance(entry, str) or not entry.strip():
        raise ValueError("entry must be a base58 string or a byte array")
    secret = base58.b58decode(entry.strip())
    if len(secret) != SECRET_KEY_LEN:
        raise ValueError(f"decoded key must be {SECRET_KEY_LEN} bytes, got {len(secret)}")
    return Keypair.from_bytes(secret)


def load_accounts(path: str | Path) -> list[Account]:
    """
    Read the key file and return one Account per distinct key, in file order.

    Raises ConfigError if the file is missing, not a non-empty JSON array,
    or holds an entry that does not decode to a valid keypair.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Key file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Key file {path} is not readable JSON: {e}") from e

    if not isinstance(raw, list) or not raw:
        raise ConfigError(f"Key file {path} must be a non-empty JSON array")

    accounts: list[Account] = []
    seen: set[str] = set()
    for index, entry in enumerate(raw):
        try:
            keypair = parse_keypair(entry)
        except (ValueError, TypeError) as e:
            raise ConfigError(f"Invalid private key at index {index}: {e}") from None
        account = Account(keypair)
        if account.address in seen:
            logger.warning("keystore_duplicate_key", index=index, wallet_id=account.short_address)
            continue
        seen.add(account.address)
        accounts.append(account)

    logger.info("keystore_loaded", path=str(path), account_count=len(accounts))
    return accounts
