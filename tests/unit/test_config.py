"""Tests for config.py: environment defaults and CORS origins."""

import config


class TestDefaults:

    def test_alert_thresholds_are_numeric(self):
        assert isinstance(config.ALERT_DAYS_THRESHOLD, int)
        assert isinstance(config.ALERT_DISTANCE_THRESHOLD, float)

    def test_nasa_base_url(self):
        assert config.NASA_BASE_URL.startswith("https://")


class TestCorsOrigins:

    def test_single_origin(self, monkeypatch):
        monkeypatch.setattr(config, "CLIENT_URL", "http://localhost:5173")
        assert config.cors_origins() == ["http://localhost:5173"]

    def test_comma_separated(self, monkeypatch):
        monkeypatch.setattr(config, "CLIENT_URL", "http://a.test, http://b.test,")
        assert config.cors_origins() == ["http://a.test", "http://b.test"]
