"""
Structured logging for the daily check-in agent.

JSON logs with timestamp, wallet_id and event_type.
"""

from daily_checkin.checkin_logging.logger import bind_wallet, get_logger

__all__ = ["bind_wallet", "get_logger"]
