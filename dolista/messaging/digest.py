"""The ``/resumo`` digest: expire, order and annotate a chat's entries."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from .formatting import format_digest, format_digest_line
from .replies import Replies

if TYPE_CHECKING:
    from ..state.summary_store import Entry, SummaryStore

logger = logging.getLogger(__name__)

ENTRY_TTL = timedelta(hours=24)


def is_expired(entry: Entry, ttl: timedelta = ENTRY_TTL) -> bool:
    return entry.age >= ttl


async def collect_live_entries(store: SummaryStore, chat_id: int) -> list[Entry]:
    """Query *chat_id*'s entries, deleting every expired one on the way.

    A failed delete is logged and the entry is still left out.  Query
    errors propagate.  The result is sorted oldest first; ties keep query
    order.
    """
    live: list[Entry] = []
    for entry in await store.list_for_chat(chat_id):
        if not is_expired(entry):
            live.append(entry)
            continue
        try:
            await store.delete(entry)
            logger.info("[resumo] Expired entry %s (chat=%s, age=%s)", entry.id, chat_id, entry.age)
        except Exception as exc:
            logger.warning("[resumo] Failed to delete expired entry %s: %s", entry.id, exc)
    live.sort(key=lambda e: e.created_at)
    return live


async def build_digest(store: SummaryStore, chat_id: int, replies: Replies | None = None) -> str:
    replies = replies or Replies()
    entries = await collect_live_entries(store, chat_id)
    return format_digest(
        (format_digest_line(e.age, e.text, replies) for e in entries),
        replies,
    )
