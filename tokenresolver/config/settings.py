"""
settings.py

This module provides configuration management for token-resolver.

Features:
- Centralized library configuration using Pydantic settings
- Default token shape (delimiters, separators, segment bounds) overridable
  through `TKR_` environment variables or a user-level JSON config file
- Shared rich console for command-line output

Usage:
Import appsettings for configuration values, or call
`appsettings.token_config()` for the configured token shape.
"""

from pathlib import Path
from typing import Final, Literal
from appdirs import user_config_dir
from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from rich.console import Console
from tokenresolver.lib.errors import ConfigError
from tokenresolver.models.dataModel import TokenConfig

# Console instance for rich output
console: Final[Console] = Console()

# Set up the configuration directory and file using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("tokenresolver", ""))
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"


class App(BaseSettings):
    """
    Library settings model.

    Settings can be overridden through environment variables with TKR_ prefix,
    or through a JSON document at CONFIG_FILE. Environment wins over the file.

    Attributes:
        beQuiet: Suppress detailed logging output
        token_open: Default opening delimiter
        token_close: Default closing delimiter
        token_separators: Default ordered separator list
        token_min_segments: Default minimum segment count
        token_max_segments: Default maximum segment count (None is unbounded)
        token_segment_pattern: Default regex fragment for one segment character
        on_missing: Default policy for tokens without a replacement
    """

    beQuiet: bool = False

    token_open: str = "{"
    token_close: str = "}"
    token_separators: list[str] = ["|"]
    token_min_segments: int = 2
    token_max_segments: int | None = None
    token_segment_pattern: str = r"\w"

    on_missing: Literal["raise", "keep", "remove"] = "raise"

    model_config = SettingsConfigDict(
        env_prefix="TKR_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        json_file=CONFIG_FILE,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    def token_config(self) -> TokenConfig:
        """
        Build the token configuration described by these settings.

        Returns:
            TokenConfig: The configured token shape

        Raises:
            ConfigError: If the configured values violate a token invariant
        """
        return TokenConfig(
            open=self.token_open,
            close=self.token_close,
            separators=self.token_separators,
            min_segments=self.token_min_segments,
            max_segments=self.token_max_segments,
            segment_pattern=self.token_segment_pattern,
        )


def settings_load() -> App:
    """
    Load settings, converting validation failures into ConfigError.

    Returns:
        App: Freshly loaded settings
    """
    try:
        return App()
    except ValidationError as e:
        raise ConfigError(f"Invalid token-resolver settings: {e}") from e


# Create the library settings instance
appsettings: Final[App] = settings_load()
