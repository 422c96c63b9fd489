"""
Process settings from environment variables.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class AppSettings(BaseSettings):
    # Path of the YAML proxy configuration, overridable with CONFIG_PATH
    config_path: str = Field(default="config.yaml", validation_alias="CONFIG_PATH")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
