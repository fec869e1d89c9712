import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep RELNOTE_* variables of the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("RELNOTE_"):
            monkeypatch.delenv(name, raising=False)
    yield
