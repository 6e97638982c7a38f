"""Account key material: load secret keys and derive signing identities."""

from daily_checkin.wallets.keystore import Account, load_accounts, parse_keypair

__all__ = ["Account", "load_accounts", "parse_keypair"]
