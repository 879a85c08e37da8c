"""Reset hooks for module-level singletons.

Tests call :func:`reset_all_singletons` so every case starts from a fresh
``cfg`` built from the (monkeypatched) environment.
"""

from __future__ import annotations

from collections.abc import Callable

ResetFn = Callable[[], None]

_reset_fns: list[ResetFn] = []


def register_singleton(reset_fn: ResetFn) -> ResetFn:
    """Remember *reset_fn*; usable as a decorator."""
    if reset_fn not in _reset_fns:
        _reset_fns.append(reset_fn)
    return reset_fn


def reset_all_singletons() -> None:
    for fn in list(_reset_fns):
        fn()
