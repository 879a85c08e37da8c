"""Command-line entry point -- serve the webhook and deployment helpers.

Usage:
    dolista serve
    dolista encode-config --token 123:abc --credentials service-account.json
    dolista set-webhook https://example.cloudfunctions.net/telegram
"""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from rich.console import Console

from .config.app_config import ConfigError, decode_app_config, encode_app_config
from .config.settings import cfg
from .messaging.notifier import TelegramNotifier

console = Console()
err_console = Console(stderr=True)


def _cmd_serve(_args: argparse.Namespace) -> int:
    from .server.app import main as serve

    serve()
    return 0


def _cmd_encode_config(args: argparse.Namespace) -> int:
    try:
        credentials = json.loads(Path(args.credentials).read_text())
    except (OSError, json.JSONDecodeError) as exc:
        err_console.print(f"[red]Cannot read credentials:[/red] {exc}")
        return 1
    replies = None
    if args.replies:
        try:
            replies = json.loads(Path(args.replies).read_text())
        except (OSError, json.JSONDecodeError) as exc:
            err_console.print(f"[red]Cannot read replies:[/red] {exc}")
            return 1
    # soft_wrap keeps the blob on a single line
    console.print(encode_app_config(args.token, credentials, replies), soft_wrap=True)
    return 0


def _cmd_set_webhook(args: argparse.Namespace) -> int:
    try:
        config = decode_app_config(cfg.app_config_raw)
    except ConfigError as exc:
        err_console.print(f"[red]{exc}[/red]")
        return 1
    notifier = TelegramNotifier(config.telegram_token, api_base=cfg.telegram_api_base)
    if not asyncio.run(notifier.set_webhook(args.url)):
        err_console.print("[red]Telegram rejected the webhook URL (see log).[/red]")
        return 1
    console.print(f"[green]Webhook set:[/green] {args.url}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dolista", description="Telegram summary bot")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the webhook server")
    serve.set_defaults(func=_cmd_serve)

    enc = sub.add_parser("encode-config", help="Print an APP_CONFIG value")
    enc.add_argument("--token", required=True, help="Telegram bot token")
    enc.add_argument(
        "--credentials", required=True, help="Path to the service-account JSON file",
    )
    enc.add_argument("--replies", help="Optional JSON file overriding reply texts")
    enc.set_defaults(func=_cmd_encode_config)

    hook = sub.add_parser("set-webhook", help="Register the webhook URL with Telegram")
    hook.add_argument("url", help="Public URL of the deployed webhook")
    hook.set_defaults(func=_cmd_set_webhook)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
