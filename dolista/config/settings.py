"""Process settings -- reads from environment and ``.env`` file.

Only deployment knobs live here.  The bot token and the datastore
credential travel inside ``APP_CONFIG`` and are decoded per request by
:mod:`dolista.config.app_config`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from dotenv import dotenv_values

from ..util.singletons import register_singleton

DEFAULT_TELEGRAM_API_BASE = "https://api.telegram.org"
DEFAULT_COLLECTION = "summary"


class Settings:
    """Runtime configuration sourced from environment variables and ``.env``.

    Real environment variables win over the ``.env`` file, which is only
    parsed, never loaded into ``os.environ``.
    """

    APP_CONFIG_ENV: ClassVar[str] = "APP_CONFIG"

    def __init__(self, dotenv_path: str | Path | None = None) -> None:
        self.dotenv_path = Path(dotenv_path or os.getenv("DOTENV_PATH") or ".env")
        self.reload()

    def reload(self) -> None:
        """Re-read the ``.env`` file and environment variables."""
        self._dotenv: dict[str, str | None] = (
            dotenv_values(self.dotenv_path) if self.dotenv_path.is_file() else {}
        )
        e = self._read

        self.host: str = e("HOST") or "0.0.0.0"
        self.port: int = int(e("PORT") or "8080")
        self.log_level: str = (e("LOG_LEVEL") or "INFO").upper()
        self.webhook_path: str = e("WEBHOOK_PATH") or "/"
        self.telegram_api_base: str = (
            e("TELEGRAM_API_BASE") or DEFAULT_TELEGRAM_API_BASE
        ).rstrip("/")
        self.summary_collection: str = e("SUMMARY_COLLECTION") or DEFAULT_COLLECTION

    @property
    def app_config_raw(self) -> str:
        # Never cached: every request decodes whatever is deployed right now.
        return self._read(self.APP_CONFIG_ENV)

    def _read(self, key: str) -> str:
        value = os.getenv(key)
        if value is None:
            value = self._dotenv.get(key) or ""
        return value.strip()


# Module-level singleton
cfg = Settings()


@register_singleton
def _reset_cfg() -> None:
    global cfg
    cfg = Settings()
