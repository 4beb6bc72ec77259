"""Tests for configuration loading."""

from rssdesk.config.settings import DEFAULT_SOURCES, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("SOURCES", raising=False)
    settings = Settings(_env_file=None)

    assert settings.control_port == 7878
    assert settings.max_response_bytes == 10 * 1024 * 1024
    assert settings.reject_duplicate_urls is False
    assert [s.url for s in settings.sources] == [s.url for s in DEFAULT_SOURCES]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CONTROL_PORT", "9000")
    monkeypatch.setenv("FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv(
        "SOURCES", '[{"name": "Example", "url": "http://example.com/feed"}]'
    )

    settings = Settings(_env_file=None)

    assert settings.control_port == 9000
    assert settings.fetch_timeout == 2.5
    assert len(settings.sources) == 1
    assert settings.sources[0].name == "Example"
