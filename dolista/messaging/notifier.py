"""Outbound Telegram Bot API calls.

Fire-and-forget: transport errors and non-2xx answers are logged and
reported as ``False``, never raised.  Request URLs embed the bot token,
so they are never logged.
"""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from ..config.settings import DEFAULT_TELEGRAM_API_BASE

logger = logging.getLogger(__name__)


class TelegramNotifier:
    def __init__(self, token: str, *, api_base: str | None = None) -> None:
        self._token = token
        self._api_base = (api_base or DEFAULT_TELEGRAM_API_BASE).rstrip("/")

    def _method_url(self, method: str) -> str:
        return f"{self._api_base}/bot{self._token}/{method}"

    async def _post_form(self, method: str, form: dict[str, str]) -> bool:
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self._method_url(method), data=form) as resp:
                    if resp.status >= 300:
                        body = await resp.text()
                        logger.warning(
                            "[notify] %s answered HTTP %s: %s", method, resp.status, body[:200],
                        )
                        return False
                    return True
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("[notify] %s failed: %s", method, exc)
            return False

    async def send(self, chat_id: int, text: str) -> bool:
        """POST ``sendMessage`` with form fields ``chat_id`` and ``text``."""
        return await self._post_form("sendMessage", {"chat_id": str(chat_id), "text": text})

    async def set_webhook(self, url: str) -> bool:
        """Point the bot's webhook at *url*."""
        return await self._post_form("setWebhook", {"url": url})
