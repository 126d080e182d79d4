"""
Pytest configuration for unit tests.

Keeps EVALMATCH_* settings from the developer's environment out of the tests.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Clear EVALMATCH_ environment variables and ignore any local .env file."""
    for key in list(os.environ):
        if key.startswith("EVALMATCH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
