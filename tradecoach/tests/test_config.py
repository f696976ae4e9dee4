"""Tests for environment-driven settings."""

from tradecoach.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("TRADECOACH_SEED", "TRADECOACH_OUTPUT_DIR", "TRADECOACH_LOG_LEVEL",
                     "TRADECOACH_CORS_ORIGINS", "TRADECOACH_HOST", "TRADECOACH_PORT"):
            monkeypatch.delenv(name, raising=False)
        s = Settings.from_env()
        assert s.seed is None
        assert s.output_dir == "./output"
        assert s.log_level == "INFO"
        assert s.cors_origins == ("http://localhost:3000",)
        assert s.port == 8000

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("TRADECOACH_SEED", "42")
        monkeypatch.setenv("TRADECOACH_LOG_LEVEL", "debug")
        monkeypatch.setenv("TRADECOACH_CORS_ORIGINS", "http://a.test, http://b.test,")
        monkeypatch.setenv("TRADECOACH_PORT", "9100")
        s = Settings.from_env()
        assert s.seed == 42
        assert s.log_level == "DEBUG"
        assert s.cors_origins == ("http://a.test", "http://b.test")
        assert s.port == 9100
