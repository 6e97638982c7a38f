"""
Sonic daily check-in agent.

Runs once per invocation over a fixed list of Solana accounts: checks each
account's daily on-chain activity, logs in to the rewards API with a signed
challenge, signs and submits the check-in transaction, and reports the
result. Outcomes are folded into a run summary.
"""

__version__ = "0.1.0"
