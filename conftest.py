"""Root conftest -- opt-in flag for tests that need a Firestore emulator."""

from __future__ import annotations

import os

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Include tests marked @pytest.mark.slow (need FIRESTORE_EMULATOR_HOST).",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: talks to a Firestore emulator")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-slow"):
        reason = "slow test -- pass --run-slow to include"
    elif not os.getenv("FIRESTORE_EMULATOR_HOST"):
        reason = "FIRESTORE_EMULATOR_HOST is not set"
    else:
        return
    skip_slow = pytest.mark.skip(reason=reason)
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)
