"""Telegram ``Update`` payload, trimmed to the fields the bot reads."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Chat(BaseModel):
    id: int = 0


class Message(BaseModel):
    text: str = ""
    chat: Chat = Field(default_factory=Chat)


class Update(BaseModel):
    update_id: int = 0
    # Updates without a message (edits, callbacks, ...) carry an empty one.
    message: Message = Field(default_factory=Message)
