"""Unit tests for settings and logging helpers."""

from immo_fiscal.core.logging import configure_logging, get_logger
from immo_fiscal.core.settings import AppSettings


class TestAppSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("IMMOFISCAL_SWEEP_MAX_WORKERS", raising=False)
        settings = AppSettings(_env_file=None)
        assert settings.sweep_max_workers == 1
        assert settings.export_dir == "results"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("IMMOFISCAL_SIMULATION_CACHE_SIZE", "16")
        monkeypatch.setenv("IMMOFISCAL_JSON_LOGS", "true")
        settings = AppSettings(_env_file=None)
        assert settings.simulation_cache_size == 16
        assert settings.json_logs is True


class TestLogging:
    def test_idempotent(self):
        first = configure_logging()
        second = configure_logging()
        assert first is not None and second is not None

    def test_named_logger(self):
        log = get_logger("immo_fiscal.tests")
        log.debug("test_event", value=1)
