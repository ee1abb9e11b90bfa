import os

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep DIRECTDECISIONS_* variables from the host out of every test."""
    for key in list(os.environ):
        if key.startswith("DIRECTDECISIONS_"):
            monkeypatch.delenv(key, raising=False)
    yield
