"""Telegram webhook endpoint -- POST <WEBHOOK_PATH>.

Every POST is answered with 200, whatever happened, so Telegram never
redelivers an update.  Failures are only visible in the logs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from functools import partial

from aiohttp import web
from pydantic import ValidationError

from ..config.app_config import AppConfig, ConfigError, decode_app_config
from ..config.settings import cfg
from ..messaging.commands import CommandDispatcher
from ..messaging.notifier import TelegramNotifier
from ..messaging.updates import Update
from ..state.summary_store import SummaryStore, open_summary_store

logger = logging.getLogger(__name__)

StoreFactory = Callable[[AppConfig], AbstractAsyncContextManager[SummaryStore]]
NotifierFactory = Callable[[AppConfig], TelegramNotifier]


def _default_notifier(config: AppConfig) -> TelegramNotifier:
    return TelegramNotifier(config.telegram_token, api_base=cfg.telegram_api_base)


class WebhookEndpoint:
    """Decodes an update, resolves ``APP_CONFIG`` and dispatches the command."""

    def __init__(
        self,
        store_factory: StoreFactory | None = None,
        notifier_factory: NotifierFactory | None = None,
        path: str | None = None,
    ) -> None:
        self._store_factory = store_factory or open_summary_store
        self._notifier_factory = notifier_factory or _default_notifier
        self.path = path or cfg.webhook_path

    def register(self, router: web.UrlDispatcher) -> None:
        router.add_post(self.path, self.handle)
        router.add_get(self.path, self._probe)

    async def _probe(self, _req: web.Request) -> web.Response:
        """GET -- simple probe so a browser hit does not look like an error."""
        return web.json_response({"status": "ok", "method": "POST required"})

    async def handle(self, req: web.Request) -> web.Response:
        raw_body = await req.read()
        try:
            update = Update.model_validate_json(raw_body)
        except ValidationError as exc:
            logger.error(
                "[webhook] Failed to decode request body: %s | raw=%s",
                exc.errors(include_url=False)[:1], raw_body[:200],
            )
            return web.Response(status=200)

        try:
            config = decode_app_config(cfg.app_config_raw)
        except ConfigError as exc:
            logger.error("[webhook] %s", exc)
            return web.Response(status=200)

        chat_id = update.message.chat.id
        notifier = self._notifier_factory(config)
        dispatcher = CommandDispatcher(
            open_store=partial(self._store_factory, config),
            replies=config.replies,
        )
        try:
            handled = await dispatcher.try_handle(
                update.message.text, chat_id, partial(notifier.send, chat_id),
            )
        except Exception:
            logger.exception(
                "[webhook] Error handling update %s (chat=%s)", update.update_id, chat_id,
            )
            return web.Response(status=200)

        if not handled:
            logger.debug("[webhook] Update %s ignored (no command)", update.update_id)
        return web.Response(status=200)
