"""Summary entries in Firestore -- one document per ``/r`` message.

Documents live in a single collection (``summary`` by default) and hold
``{"chat_id": int, "message": str}``.  Creation and read timestamps come
from the server and are never written by this module.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from ..config.settings import cfg
from ..util.async_helpers import run_sync

if TYPE_CHECKING:
    from ..config.app_config import AppConfig, ServiceAccount

logger = logging.getLogger(__name__)

CHAT_ID_FIELD = "chat_id"
MESSAGE_FIELD = "message"


@dataclass(frozen=True)
class Entry:
    id: str
    text: str
    created_at: datetime
    read_at: datetime
    chat_id: int | None = None
    reference: Any = field(default=None, repr=False, compare=False)

    @property
    def age(self) -> timedelta:
        return self.read_at - self.created_at


def _entry_from_snapshot(snapshot: Any) -> Entry:
    data = snapshot.to_dict() or {}
    return Entry(
        id=snapshot.id,
        text=str(data.get(MESSAGE_FIELD, "")),
        created_at=snapshot.create_time,
        read_at=snapshot.read_time,
        chat_id=data.get(CHAT_ID_FIELD),
        reference=snapshot.reference,
    )


class SummaryStore:
    """Async facade over a blocking :class:`google.cloud.firestore.Client`."""

    def __init__(self, client: firestore.Client, collection: str | None = None) -> None:
        self._client = client
        self._collection = collection or cfg.summary_collection

    @property
    def collection_name(self) -> str:
        return self._collection

    def _query_chat(self, chat_id: int) -> list[Entry]:
        query = self._client.collection(self._collection).where(
            filter=FieldFilter(CHAT_ID_FIELD, "==", chat_id)
        )
        return [_entry_from_snapshot(snap) for snap in query.stream()]

    def _add(self, chat_id: int, text: str) -> str:
        _, ref = self._client.collection(self._collection).add(
            {CHAT_ID_FIELD: chat_id, MESSAGE_FIELD: text}
        )
        return ref.id

    def _delete(self, entry: Entry) -> None:
        ref = entry.reference or self._client.collection(self._collection).document(entry.id)
        ref.delete()

    async def list_for_chat(self, chat_id: int) -> list[Entry]:
        """Every entry whose ``chat_id`` equals *chat_id*, in query order."""
        return await run_sync(self._query_chat, chat_id)

    async def add(self, chat_id: int, text: str) -> str:
        """Store a new entry and return its document id."""
        return await run_sync(self._add, chat_id, text)

    async def delete(self, entry: Entry) -> None:
        await run_sync(self._delete, entry)

    def close(self) -> None:
        self._client.close()


def create_client(account: ServiceAccount) -> firestore.Client:
    credentials = service_account.Credentials.from_service_account_info(account.as_info())
    return firestore.Client(
        project=account.project_id or None,
        credentials=credentials,
    )


@asynccontextmanager
async def open_summary_store(
    config: AppConfig,
    collection: str | None = None,
) -> AsyncIterator[SummaryStore]:
    """Yield a :class:`SummaryStore` whose client is closed on every exit path."""
    client = await run_sync(create_client, config.firebase_config)
    store = SummaryStore(client, collection)
    try:
        yield store
    finally:
        try:
            store.close()
        except Exception:
            logger.warning("[store] Failed to close Firestore client", exc_info=True)
