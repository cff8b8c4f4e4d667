"""Runtime settings for schema-templates.

Resolution order: CLI flags > env vars (SCHEMA_TEMPLATES_*) > defaults.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GENERATOR_NAME = "Pulumi Templates Generator"


class TemplateSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_TEMPLATES_",
        case_sensitive=False,
        extra="ignore",
    )

    generator_name: str = DEFAULT_GENERATOR_NAME
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # Runtime written into every generated Pulumi.yaml
    runtime: str = "yaml"
    readme_name: str = "README.md"
    project_name: str = "Pulumi.yaml"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> TemplateSettings:
    return TemplateSettings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
