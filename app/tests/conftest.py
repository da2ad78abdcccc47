"""Shared pytest configuration.

Settings are read from the environment, so variables that tune argument
resolution are cleared for every test to keep results independent of the
developer's shell.
"""

import pytest
import structlog

ARGUMENT_ENV_VARS = (
    "ARGUMENTS_DEFAULT_WAIT",
    "ARGUMENTS_PROMPT_LIMIT",
    "ARGUMENTS_ALLOW_SINGLE_QUOTES",
)


@pytest.fixture(autouse=True)
def isolated_argument_env(monkeypatch):
    for name in ARGUMENT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clean_log_context():
    """Start and finish every test with an empty structlog context."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
