"""Per-request application config decoded from the ``APP_CONFIG`` blob.

The blob is base64 (padding optional) wrapping a JSON document::

    {
      "telegramToken": "123:abc",
      "firebaseConfig": { ...service account JSON... },
      "replies": { "hello": "oi!" }          # optional
    }
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..messaging.replies import Replies


class ConfigError(Exception):
    """``APP_CONFIG`` is missing or cannot be decoded."""


class ServiceAccount(BaseModel):
    """Google service-account document, kept in its native JSON shape."""

    model_config = ConfigDict(extra="allow")

    type: str = "service_account"
    project_id: str = ""
    private_key_id: str = ""
    private_key: str = ""
    client_email: str = ""
    client_id: str = ""
    auth_uri: str = ""
    token_uri: str = ""
    auth_provider_x509_cert_url: str = ""
    client_x509_cert_url: str = ""

    def as_info(self) -> dict[str, Any]:
        return self.model_dump()


class AppConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    telegram_token: str = Field(alias="telegramToken", min_length=1)
    firebase_config: ServiceAccount = Field(alias="firebaseConfig")
    replies: Replies = Field(default_factory=Replies)


def _b64decode(raw: str) -> bytes:
    data = raw.strip().rstrip("=")
    data += "=" * (-len(data) % 4)
    return base64.b64decode(data, validate=True)


def decode_app_config(raw: str | None) -> AppConfig:
    """Decode and validate an ``APP_CONFIG`` value.

    Raises :class:`ConfigError` on any failure.
    """
    if not raw or not raw.strip():
        raise ConfigError("APP_CONFIG is not set")
    try:
        payload = _b64decode(raw)
    except (binascii.Error, ValueError) as exc:
        raise ConfigError(f"failed to decode app config: {exc}") from exc
    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"failed to parse app config: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("failed to parse app config: expected a JSON object")
    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid app config: {exc}") from exc


def encode_app_config(
    telegram_token: str,
    credentials: dict[str, Any],
    replies: dict[str, str] | None = None,
) -> str:
    """Build an unpadded ``APP_CONFIG`` value (the inverse of :func:`decode_app_config`)."""
    doc: dict[str, Any] = {"telegramToken": telegram_token, "firebaseConfig": credentials}
    if replies:
        doc["replies"] = replies
    blob = base64.b64encode(json.dumps(doc).encode("utf-8")).decode("ascii")
    return blob.rstrip("=")
