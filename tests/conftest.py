from __future__ import annotations

import logging

import pytest
from hypothesis import HealthCheck, settings

from infra.config_loader import reset_config_cache
from infra.logging_config import is_own_handler

# Keep hypothesis from flagging slow CI boxes; this is not a functional failure.
settings.register_profile(
    "log_reader_stable",
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)

settings.load_profile("log_reader_stable")


@pytest.fixture(autouse=True)
def _isolate_logging_and_config(monkeypatch):
    """Drop handlers installed by setup_logging() and the cached config after each test."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    root = logging.getLogger()
    level = root.level
    reset_config_cache()
    yield
    for handler in [h for h in root.handlers if is_own_handler(h)]:
        root.removeHandler(handler)
    root.setLevel(level)
    reset_config_cache()
