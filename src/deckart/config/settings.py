"""
Configuration management for Deck Art Mirror.

Uses Pydantic for type-safe, validated configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class DeckArtSettings(BaseSettings):
    """Main configuration for Deck Art Mirror.

    Settings can be overridden via:
    1. Environment variables (prefixed with DECKART_)
    2. .env file in the working directory
    3. Programmatic overrides

    Example:
        export DECKART_CARD_API_INTERVAL=0.25
        export DECKART_LOG_LEVEL=DEBUG
    """

    # === Remote services ===
    moxfield_api_base: str = Field(
        default="https://api2.moxfield.com",
        description="Base URL of the Moxfield deck API",
    )
    scryfall_api_base: str = Field(
        default="https://api.scryfall.com",
        description="Base URL of the Scryfall card API",
    )
    user_agent: str = Field(
        default="DeckArtMirror/1.0",
        description="User-Agent header sent with every request",
    )

    # === Politeness ===
    deck_api_interval: float = Field(
        default=0.5,
        ge=0.0,
        le=10.0,
        description="Pause before each deck-listing and deck-detail call (seconds)",
    )
    card_api_interval: float = Field(
        default=0.2,
        ge=0.0,
        le=10.0,
        description="Pause before each card-metadata and image download (seconds)",
    )

    # === HTTP ===
    http_timeout: int = Field(
        default=30, ge=5, le=300, description="HTTP request timeout in seconds"
    )
    max_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum attempts for rate-limited or failing requests",
    )
    retry_base_delay: float = Field(
        default=0.5,
        ge=0.1,
        le=10.0,
        description="Base delay for exponential backoff (seconds)",
    )

    # === Images ===
    default_color: str = Field(
        default="black", description="Border color used when none is given"
    )
    temp_dir: Optional[Path] = Field(
        default=None,
        description="Where raw downloads are staged (system temp dir if unset)",
    )

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_rotation: str = Field(default="10 MB", description="Log file rotation size")
    log_retention: str = Field(
        default="10 days", description="Log file retention period"
    )
    log_to_file: bool = Field(default=False, description="Enable file logging")
    logs_dir: Path = Field(default=Path("logs"), description="Log files directory")

    model_config = {
        "env_prefix": "DECKART_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Global settings instance
settings = DeckArtSettings()


def reload_settings() -> DeckArtSettings:
    """Reload settings from environment and .env file.

    Useful for testing or runtime configuration changes.
    """
    global settings
    settings = DeckArtSettings()
    return settings
