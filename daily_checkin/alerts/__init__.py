"""
Run notification: best-effort delivery of the run summary.
"""

from daily_checkin.alerts.notifier import TelegramNotifier, notifier_from_settings

__all__ = ["TelegramNotifier", "notifier_from_settings"]
