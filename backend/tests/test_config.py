"""
Tests for config.py and logging_config.py
"""

import logging
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging_config
from config import Settings, get_settings, is_development, is_testing, reload_settings
from logging_config import default_log_file, setup_logging


@pytest.fixture
def clean_settings():
    """Drop the cached settings before and after the test."""
    reload_settings()
    yield
    reload_settings()


@pytest.fixture
def restore_root_logger(monkeypatch):
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_config, "_logging_initialized", False)
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# ==========================================
#  SETTINGS
# ==========================================

class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("EXCERPT_LENGTH", raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.excerpt_length == 150
        assert settings.default_proximity_range == 10

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("ENVIRONMENT", "Development")
        monkeypatch.setenv("SEARCH_MAX_WORKERS", "8")
        settings = Settings(_env_file=None)
        assert settings.log_level == "DEBUG"
        assert settings.is_development
        assert not settings.is_production
        assert settings.search_max_workers == 8

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "loud")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="moon")

    def test_worker_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, search_max_workers=0)

    def test_cors_origin_list(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,,")
        assert settings.cors_origin_list == ["http://a.test", "http://b.test"]

    def test_default_normalization(self):
        settings = Settings(
            _env_file=None,
            normalize_final_letters=True,
            normalize_expand_hebrew_numbers=False,
            normalize_expand_acronyms=True,
        )
        options = settings.default_normalization()
        assert options.normalize_final_letters
        assert not options.expand_hebrew_numbers
        assert options.expand_acronyms
        assert not options.final_letter_variants
        assert options.remove_nikud

    def test_singleton_and_reload(self, clean_settings, monkeypatch):
        first = get_settings()
        assert get_settings() is first
        monkeypatch.setenv("EXCERPT_LENGTH", "42")
        reloaded = reload_settings()
        assert reloaded is not first
        assert reloaded.excerpt_length == 42

    def test_environment_shortcuts(self, clean_settings, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "test")
        reload_settings()
        assert is_testing()
        assert not is_development()


# ==========================================
#  LOGGING
# ==========================================

class TestLogging:

    def test_console_and_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "search.log"
        root = setup_logging(log_level="warning", log_file=log_file)

        assert root is restore_root_logger
        assert logging_config.is_initialized()
        assert len(root.handlers) == 2
        assert root.handlers[0].level == logging.WARNING
        assert root.handlers[1].level == logging.DEBUG

        logging.getLogger("test").debug("written to file only")
        for handler in root.handlers:
            handler.flush()
        assert "written to file only" in log_file.read_text(encoding="utf-8")

    def test_second_call_is_noop(self, restore_root_logger):
        setup_logging()
        handlers = list(restore_root_logger.handlers)
        setup_logging(log_level="DEBUG")
        assert restore_root_logger.handlers == handlers

    def test_force_reinitializes(self, restore_root_logger):
        setup_logging()
        setup_logging(log_level="ERROR", force=True)
        assert restore_root_logger.handlers[0].level == logging.ERROR

    def test_noisy_libraries_quieted(self, restore_root_logger):
        setup_logging(quiet_libs=("some.library",))
        assert logging.getLogger("some.library").level == logging.WARNING

    def test_default_log_file_name(self, tmp_path):
        path = default_log_file(tmp_path)
        assert path.parent == tmp_path
        assert path.name.startswith("psak_din_search_")
        assert path.suffix == ".log"
