"""Plain-text rendering of the summary digest."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

from .replies import Replies


def format_elapsed(delta: timedelta) -> str:
    """Render an age as ``<m>min`` under an hour, ``<h>h<m>min`` otherwise.

    Both components are floored; negative ages render as ``0min``.
    """
    total_minutes = max(int(delta.total_seconds() // 60), 0)
    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return f"{minutes}min"
    return f"{hours}h{minutes}min"


def format_digest_line(elapsed: timedelta, text: str, replies: Replies | None = None) -> str:
    replies = replies or Replies()
    return replies.digest_line.format(elapsed=format_elapsed(elapsed), text=text)


def format_digest(lines: Iterable[str], replies: Replies | None = None) -> str:
    """Header followed by *lines* joined with ``\\n`` (no trailing newline)."""
    replies = replies or Replies()
    return replies.digest_header + "\n".join(lines)
