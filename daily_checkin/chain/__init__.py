"""
Solana chain access for the check-in agent.

ChainClient wraps the RPC connection; ActivityGate decides whether an
account already hit its daily quota; TransactionSubmitter broadcasts a
signed transaction with bounded retry.
"""

from daily_checkin.chain.activity_gate import ActivityGate
from daily_checkin.chain.client import ChainClient
from daily_checkin.chain.models import ActivityRecord
from daily_checkin.chain.submitter import TransactionSubmitter

__all__ = [
    "ActivityGate",
    "ActivityRecord",
    "ChainClient",
    "TransactionSubmitter",
]
