"""dolista -- Telegram webhook bot that keeps a rolling 24h summary per chat."""

__version__ = "1.0.0"
