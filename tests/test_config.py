"""
Unit tests for environment-driven settings.
"""

from netsecdash.config import Settings, load_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "NETSECDASH_RECORDS",
            "NETSECDASH_FETCH_TIMEOUT",
            "NETSECDASH_TOP_SOURCES",
            "NETSECDASH_FILL_HOURS",
            "NETSECDASH_MAX_FILL_HOURS",
        ):
            monkeypatch.delenv(name, raising=False)
        assert load_settings() == Settings()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("NETSECDASH_RECORDS", "https://dash.local/output.json")
        monkeypatch.setenv("NETSECDASH_FETCH_TIMEOUT", "2.5")
        monkeypatch.setenv("NETSECDASH_TOP_SOURCES", "10")
        monkeypatch.setenv("NETSECDASH_FILL_HOURS", "yes")
        monkeypatch.setenv("NETSECDASH_MAX_FILL_HOURS", "48")

        s = load_settings()

        assert s.records == "https://dash.local/output.json"
        assert s.fetch_timeout == 2.5
        assert s.top_sources == 10
        assert s.fill_hours is True
        assert s.max_fill_hours == 48

    def test_bad_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("NETSECDASH_TOP_SOURCES", "many")
        monkeypatch.setenv("NETSECDASH_FETCH_TIMEOUT", "soon")
        monkeypatch.setenv("NETSECDASH_FILL_HOURS", "maybe")
        monkeypatch.setenv("NETSECDASH_MAX_FILL_HOURS", "a week")
        monkeypatch.setenv("NETSECDASH_RECORDS", "   ")

        s = load_settings()

        assert s.top_sources == 25
        assert s.fetch_timeout == 10.0
        assert s.fill_hours is False
        assert s.max_fill_hours == 2160
        assert s.records == "output.json"
