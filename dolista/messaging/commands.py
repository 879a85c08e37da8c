"""Slash-command dispatcher.

Commands are matched by case-sensitive prefix, in table order, and at
most one handler runs per message.  Because ``/r`` is itself a prefix of
``/resumo``, table order matters: a command must never come after one
whose prefix also matches it.  :func:`shadowed_commands` checks that and
the dispatcher refuses to start with a shadowed table.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from ..state.summary_store import SummaryStore
from .digest import build_digest
from .replies import Replies

logger = logging.getLogger(__name__)

ReplyFn = Callable[[str], Awaitable[object]]
StoreOpener = Callable[[], AbstractAsyncContextManager[SummaryStore]]


@dataclass(frozen=True)
class Command:
    prefix: str
    handler: str

    def matches(self, text: str) -> bool:
        return text.startswith(self.prefix)


@dataclass
class CommandContext:
    text: str
    chat_id: int
    reply: ReplyFn


def shadowed_commands(commands: Sequence[Command]) -> list[tuple[Command, Command]]:
    """Return ``(earlier, later)`` pairs where *later* can never be reached."""
    return [
        (earlier, later)
        for i, earlier in enumerate(commands)
        for later in commands[i + 1:]
        if later.prefix.startswith(earlier.prefix)
    ]


class CommandDispatcher:
    COMMANDS: tuple[Command, ...] = (
        Command("/hello", "_cmd_hello"),
        Command("/safada", "_cmd_safada"),
        Command("/resumo", "_cmd_resumo"),
        Command("/r", "_cmd_add"),
    )

    def __init__(self, open_store: StoreOpener, replies: Replies | None = None) -> None:
        shadowed = shadowed_commands(self.COMMANDS)
        if shadowed:
            pairs = ", ".join(f"{a.prefix} hides {b.prefix}" for a, b in shadowed)
            raise ValueError(f"Unreachable commands: {pairs}")
        self._open_store = open_store
        self._replies = replies or Replies()

    def match(self, text: str) -> Command | None:
        for command in self.COMMANDS:
            if command.matches(text):
                return command
        return None

    async def try_handle(self, text: str, chat_id: int, reply: ReplyFn) -> bool:
        command = self.match(text)
        if command is None:
            return False
        logger.info("[commands] %s from chat %s", command.prefix, chat_id)
        ctx = CommandContext(text=text, chat_id=chat_id, reply=reply)
        await getattr(self, command.handler)(ctx)
        return True

    async def _cmd_hello(self, ctx: CommandContext) -> None:
        await ctx.reply(self._replies.hello)

    async def _cmd_safada(self, ctx: CommandContext) -> None:
        await ctx.reply(self._replies.safada)

    async def _cmd_resumo(self, ctx: CommandContext) -> None:
        async with self._open_store() as store:
            try:
                digest = await build_digest(store, ctx.chat_id, self._replies)
            except Exception:
                logger.exception("[resumo] Failed to read entries for chat %s", ctx.chat_id)
                return
        await ctx.reply(digest)

    async def _cmd_add(self, ctx: CommandContext) -> None:
        words = ctx.text.split()[1:]
        if not words:
            await ctx.reply(self._replies.missing_text)
            return

        text = " ".join(words)
        async with self._open_store() as store:
            try:
                await store.add(ctx.chat_id, text)
            except Exception as exc:
                logger.error("[resumo] Failed to add entry for chat %s: %s", ctx.chat_id, exc)
                await ctx.reply(self._replies.add_failed)
                return
        await ctx.reply(self._replies.added.format(text=text))
