"""Shared utilities."""

from .async_helpers import run_sync
from .singletons import register_singleton, reset_all_singletons

__all__ = [
    "register_singleton",
    "reset_all_singletons",
    "run_sync",
]
