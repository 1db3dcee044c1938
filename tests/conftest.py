from __future__ import annotations

from pathlib import Path

import pytest

from ttygreet import config as config_module
from ttygreet.config import get_config


@pytest.fixture(autouse=True)
def _isolate_home(tmp_path_factory, monkeypatch):
    """Keep the user's real ~/.config/ttygreet and TTYGREET_* variables out of the tests."""
    base = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(base))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / ".config"))
    for var in (
        "TTYGREET_CONFIG",
        "TTYGREET_FIELD_WIDTH",
        "TTYGREET_MASK_CHAR",
        "TTYGREET_LAST_USER",
        "TTYGREET_LAST_SESSION",
        "TTYGREET_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(Path, "home", lambda: base)
    monkeypatch.setattr(config_module, "_override_config_path", None)
    get_config.cache_clear()
    yield
    get_config.cache_clear()
