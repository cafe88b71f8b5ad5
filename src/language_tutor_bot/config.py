"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from config/settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested structure to match Settings field names
        flattened = {}
        if "server" in data:
            flattened["host"] = data["server"].get("host")
            flattened["port"] = data["server"].get("port")
        if "bot" in data:
            bot = data["bot"]
            flattened["default_native_language"] = bot.get("default_native_language")
            flattened["reinforcement_threshold"] = bot.get("reinforcement_threshold")
            flattened["correction_cache_ttl_seconds"] = bot.get("correction_cache_ttl_seconds")
        if "openai" in data:
            flattened["correction_model"] = data["openai"].get("correction_model")
            flattened["correction_temperature"] = data["openai"].get("correction_temperature")
            flattened["practice_temperature"] = data["openai"].get("practice_temperature")

        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = Field(default="", description="OpenAI API key")
    correction_model: str = Field(default="gpt-4o-mini")
    correction_temperature: float = Field(default=0.3)
    practice_temperature: float = Field(default=0.7)

    # Redis (required by the stores, checked when they are built)
    redis_url: str | None = Field(default=None)

    # Telegram (required only by the Telegram entry point)
    telegram_bot_token: str | None = Field(default=None)

    # Bot behaviour
    default_native_language: str = Field(default="Portuguese (Brazilian)")
    reinforcement_threshold: int = Field(default=3, ge=1)
    correction_cache_ttl_seconds: int = Field(default=3600, ge=1)

    # HTTP adapter
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()
