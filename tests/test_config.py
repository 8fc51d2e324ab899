import importlib

from config import get_settings_module
from src.attendance_import.attendance_import.ingest.settings import ImportSettings


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module() == "config.production"
    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "config.testing"
    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_testing_settings_build_import_settings():
    settings = ImportSettings.from_settings(importlib.import_module("config.testing"))
    assert settings.batch_size == 10
    assert settings.pool_size == 2
    assert settings.suggestion_threshold == 0.6
    assert settings.max_suggestions == 3
