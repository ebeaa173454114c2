import pytest


@pytest.fixture(autouse=True)
def settings_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("UPTIME_API_URL", "https://uptime.test/api")
    monkeypatch.setenv("UPTIME_TAGS", "MC")

    from tierlink.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
