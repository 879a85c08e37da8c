"""Tests for TelegramNotifier against a fake Bot API server."""

from __future__ import annotations

import logging

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from dolista.messaging.notifier import TelegramNotifier

TOKEN = "123:abc"


class FakeTelegram:
    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def handle(self, req: web.Request) -> web.Response:
        form = await req.post()
        self.calls.append((req.match_info["method"], dict(form)))
        if self.status != 200:
            return web.json_response({"ok": False, "description": "Bad Request"}, status=self.status)
        return web.json_response({"ok": True, "result": {}})

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/bot" + TOKEN + "/{method}", self.handle)
        return app


async def _notifier(fake: FakeTelegram) -> tuple[TelegramNotifier, TestServer]:
    server = TestServer(fake.app())
    await server.start_server()
    return TelegramNotifier(TOKEN, api_base=str(server.make_url("/"))), server


class TestSend:
    @pytest.mark.asyncio
    async def test_form_fields(self) -> None:
        fake = FakeTelegram()
        notifier, server = await _notifier(fake)
        try:
            assert await notifier.send(42, "olá\nmundo")
        finally:
            await server.close()
        assert fake.calls == [("sendMessage", {"chat_id": "42", "text": "olá\nmundo"})]

    @pytest.mark.asyncio
    async def test_error_status_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        fake = FakeTelegram(status=400)
        notifier, server = await _notifier(fake)
        try:
            with caplog.at_level(logging.WARNING, logger="dolista.messaging.notifier"):
                assert not await notifier.send(42, "hi")
        finally:
            await server.close()
        assert "HTTP 400" in caplog.text
        assert TOKEN not in caplog.text

    @pytest.mark.asyncio
    async def test_connection_error_swallowed(self, caplog: pytest.LogCaptureFixture) -> None:
        fake = FakeTelegram()
        notifier, server = await _notifier(fake)
        await server.close()
        with caplog.at_level(logging.WARNING, logger="dolista.messaging.notifier"):
            assert not await notifier.send(42, "hi")
        assert "sendMessage failed" in caplog.text
        assert TOKEN not in caplog.text


class TestSetWebhook:
    @pytest.mark.asyncio
    async def test_posts_url(self) -> None:
        fake = FakeTelegram()
        notifier, server = await _notifier(fake)
        try:
            assert await notifier.set_webhook("https://example.com/hook")
        finally:
            await server.close()
        assert fake.calls == [("setWebhook", {"url": "https://example.com/hook"})]
