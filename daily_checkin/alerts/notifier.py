"""
Telegram notifier for the run summary.

Best-effort: failures are logged (token redacted) and reported as False,
never raised, so a notification problem cannot fail the run.
"""

from __future__ import annotations

import re

import httpx

from daily_checkin.checkin_logging import get_logger
from daily_checkin.config.settings import CheckinSettings

logger = get_logger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"
MAX_MESSAGE_LEN = 4096

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x0c\x0e-\x1f]")


def sanitize_text(text: str, max_len: int = MAX_MESSAGE_LEN) -> str:
    cleaned = _CONTROL_CHARS.sub("", text or "")
    if len(cleaned) > max_len:
        cleaned = cleaned[: max_len - 20] + "... [truncated]"
    return cleaned


def redact_token(token: str) -> str:
    if len(token) <= 12:
        return "***"
    return token[:8] + "..." + token[-4:]


class TelegramNotifier:
    def __init__(
        self,
        token: str,
        chat_id: str,
        *,
        timeout_sec: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._chat_id = chat_id
        self._timeout = timeout_sec
        self._transport = transport

    async def send(self, text: str) -> bool:
        """Send text to the configured chat. Returns True on success."""
        url = f"{TELEGRAM_API_URL}/bot{self._token}/sendMessage"
        payload = {"chat_id": self._chat_id, "text": sanitize_text(text), "parse_mode": "Markdown"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(url, json=payload)
                resp.raise_for_status()
        except Exception as e:
            # covers httpx.InvalidURL too; error strings include the URL, which embeds the token
            logger.warning(
                "notify_failed",
                error=type(e).__name__,
                token=redact_token(self._token),
            )
            return False
        logger.info("notify_sent", chat_id=self._chat_id)
        return True


def notifier_from_settings(settings: CheckinSettings) -> TelegramNotifier | None:
    if not settings.telegram_enabled:
        return None
    return TelegramNotifier(settings.telegram_bot_token, settings.telegram_chat_id)
