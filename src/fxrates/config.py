"""Configuration system using pydantic-settings with environment variable loading."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fxrates.loader import LoaderService
from fxrates.logging import setup_logging


class ProviderSettings(BaseSettings):
    """Rate provider wiring: loader thread pool and start-up loading."""

    model_config = SettingsConfigDict(env_prefix="FXRATES_PROVIDER_")

    loader_workers: int = Field(default=2, ge=1)  # threads used by LoaderService.load_data_async
    autoload: bool = True  # trigger an async load when a provider is constructed


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_prefix="FXRATES_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    provider: ProviderSettings = ProviderSettings()

    def build_loader(self) -> LoaderService:
        """Create a LoaderService sized from the provider settings."""
        return LoaderService(max_workers=self.provider.loader_workers)

    def configure_logging(self) -> None:
        """Apply ``log_level`` and ``log_format`` to structlog and stdlib logging."""
        setup_logging(self.log_level, self.log_format)
