"""Tests for readygate/config.py — Settings defaults, validators, and env overrides."""

from pathlib import Path

import pytest

from readygate.config import Settings, get_settings


class TestSettingsDefaults:
    def test_default_timeout_ms(self):
        assert Settings().default_timeout_ms == 2000

    def test_default_gate_name(self):
        assert Settings().gate_name == "ReadinessGate"

    def test_default_log_level(self):
        assert Settings().log_level == "INFO"

    def test_default_log_dir_none(self):
        assert Settings().log_dir is None

    def test_default_log_json(self):
        assert Settings().log_json is False


class TestSettingsEnv:
    def test_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv("READYGATE_DEFAULT_TIMEOUT_MS", "500")
        assert Settings().default_timeout_ms == 500

    def test_empty_timeout_disables(self, monkeypatch):
        monkeypatch.setenv("READYGATE_DEFAULT_TIMEOUT_MS", "")
        assert Settings().default_timeout_ms == 0

    def test_negative_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("READYGATE_DEFAULT_TIMEOUT_MS", "-1")
        with pytest.raises(Exception):
            Settings()

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("READYGATE_LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(Exception):
            Settings(log_level="chatty")

    def test_log_dir_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("READYGATE_LOG_DIR", str(tmp_path / "logs"))
        assert Settings().log_dir == tmp_path / "logs"

    def test_empty_log_dir_is_none(self, monkeypatch):
        monkeypatch.setenv("READYGATE_LOG_DIR", "")
        assert Settings().log_dir is None

    def test_env_file(self, tmp_path):
        Path(tmp_path / ".env").write_text("READYGATE_GATE_NAME=FromFile\n")
        assert Settings().gate_name == "FromFile"

    def test_unprefixed_vars_ignored(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_TIMEOUT_MS", "1")
        assert Settings().default_timeout_ms == 2000


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_picks_up_env(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("READYGATE_GATE_NAME", "Other")
        get_settings.cache_clear()
        assert get_settings() is not first
        assert get_settings().gate_name == "Other"
