from __future__ import annotations

import pytest

from lessonmarket.core.config import get_config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    for name in ("ENV", "DEBUG", "LOG_LEVEL", "LOG_FILE", "LOG_TRANSITIONS", "APP_VERSION"):
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()
