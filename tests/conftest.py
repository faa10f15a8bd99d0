import pytest


@pytest.fixture(autouse=True)
def _clear_specguard_env(monkeypatch):
    # Tests pick folder names and log levels explicitly.
    monkeypatch.delenv("SPECGUARD_FOLDER_NAME", raising=False)
    monkeypatch.delenv("SPECGUARD_LOG_LEVEL", raising=False)
