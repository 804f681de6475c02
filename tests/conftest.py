"""
Shared fixtures.

Every test starts with no configuration variables set and no snapshot
installed, so defaults are what the code defines and nothing leaks
between tests.
"""

import pytest

from asset_manager.config import settings as settings_module
from asset_manager.config.settings import Settings

# Documented names plus the attribute spellings, which must never be read
CONFIG_VARIABLES = [
    field.validation_alias for field in Settings.model_fields.values()
] + list(Settings.model_fields)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """Unset every configuration variable and drop the installed snapshot."""
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module, "_settings", None)
    yield
