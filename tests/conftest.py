"""Global test configuration for threader tests."""

import pytest

_SETTINGS_ENV_VARS = [
    "THREADER_MAX_LENGTH",
    "THREADER_PRESET",
    "BREAK_ON_SENTENCES",
    "BREAK_ON_PARAGRAPHS",
    "ENUMERATE",
    "ENUMERATION_TEMPLATE",
    "STATS_TEMPLATE",
    "LOG_FORMAT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep each test away from the developer's env, .env and config files."""
    from threader.core import config as config_module

    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    settings = config_module.Settings()
    monkeypatch.setattr(config_module, "SETTINGS", settings)
    yield settings


@pytest.fixture
def options_factory():
    """Build ThreadingOptions with everything switched off unless overridden."""
    from threader.core.models import ThreadingOptions

    def _make(**overrides):
        values = {
            "maximum_length": 280,
            "break_on_sentences": False,
            "break_on_paragraphs": False,
            "enumerate": False,
        }
        values.update(overrides)
        return ThreadingOptions(**values)

    return _make


@pytest.fixture(autouse=True)
def quiet_logging():
    """Restore the import-time logging setup between tests."""
    from threader.core.logging import setup_logging

    setup_logging("plain")
    yield
    setup_logging("plain")
