"""Root test configuration: isolate tests from the caller's MDPOST_ environment"""

import logging
import os

import pytest

from mdpost.config import ENV_PREFIX


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MDPOST_* variables so settings come only from what each test sets."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)


@pytest.fixture(scope="session", autouse=True)
def reset_logging():
    """Remove root handlers installed by CLI invocations during the session."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
