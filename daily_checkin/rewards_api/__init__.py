"""
Rewards API access: HTTP client and challenge/authorize login.
"""

from daily_checkin.rewards_api.auth import AuthSession
from daily_checkin.rewards_api.client import DEFAULT_HEADERS, RewardsApiClient

__all__ = ["AuthSession", "DEFAULT_HEADERS", "RewardsApiClient"]
