"""Webhook server -- app factory and entry point."""

from __future__ import annotations

import logging

from aiohttp import web
from aiohttp.abc import AbstractAccessLogger

from .. import __version__
from ..config.settings import cfg
from .webhook_endpoint import WebhookEndpoint

logger = logging.getLogger(__name__)

_QUIET_PATHS = frozenset({"/health"})


class QuietAccessLogger(AbstractAccessLogger):
    """Demotes health-probe log entries to DEBUG."""

    def log(self, request: web.BaseRequest, response: web.StreamResponse, time: float) -> None:
        level = logging.DEBUG if request.path in _QUIET_PATHS else logging.INFO
        self.logger.log(
            level,
            "%s %s %s %s %.3fs",
            request.remote,
            request.method,
            request.path,
            response.status,
            time,
        )


async def _health(_req: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "version": __version__})


def create_app(endpoint: WebhookEndpoint | None = None) -> web.Application:
    app = web.Application()
    app.router.add_get("/health", _health)
    (endpoint or WebhookEndpoint()).register(app.router)
    return app


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )


def main() -> None:
    configure_logging()
    logger.info(
        "Starting dolista %s on %s:%d (webhook path %s)",
        __version__, cfg.host, cfg.port, cfg.webhook_path,
    )
    web.run_app(create_app(), host=cfg.host, port=cfg.port, access_log_class=QuietAccessLogger)


if __name__ == "__main__":
    main()
