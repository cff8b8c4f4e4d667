"""Tests for environment-driven settings."""

import pytest

from schema_templates.config import (
    DEFAULT_GENERATOR_NAME,
    TemplateSettings,
    clear_settings_cache,
    get_settings,
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


def test_defaults(monkeypatch):
    for var in ("GENERATOR_NAME", "LOG_LEVEL", "RUNTIME", "README_NAME", "PROJECT_NAME"):
        monkeypatch.delenv(f"SCHEMA_TEMPLATES_{var}", raising=False)

    settings = TemplateSettings()
    assert settings.generator_name == DEFAULT_GENERATOR_NAME == "Pulumi Templates Generator"
    assert settings.log_level == "INFO"
    assert settings.runtime == "yaml"
    assert settings.readme_name == "README.md"
    assert settings.project_name == "Pulumi.yaml"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SCHEMA_TEMPLATES_GENERATOR_NAME", "Custom Generator")
    monkeypatch.setenv("schema_templates_runtime", "nodejs")

    settings = get_settings()
    assert settings.generator_name == "Custom Generator"
    assert settings.runtime == "nodejs"


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("SCHEMA_TEMPLATES_RUNTIME", "go")
    assert get_settings() is first

    clear_settings_cache()
    assert get_settings().runtime == "go"


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("SCHEMA_TEMPLATES_LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError):
        TemplateSettings()


@pytest.mark.parametrize("value", ["debug", "Debug", "DEBUG"])
def test_log_level_is_case_insensitive(monkeypatch, value):
    monkeypatch.setenv("SCHEMA_TEMPLATES_LOG_LEVEL", value)
    assert TemplateSettings().log_level == "DEBUG"
