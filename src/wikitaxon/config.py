# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to logging, corpus and extraction settings

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="WIKITAXON_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    # Corpus Configuration
    corpus_encoding: str = Field(default="utf-8", description="Character encoding of the corpus file")
    resources_file: Path | None = Field(
        default=None, description="Default JSON file with patterns, preferred meanings and the WordNet hierarchy"
    )
    expected_pages: int = Field(default=3_900_000, description="Expected number of pages, used for progress display")

    # Extraction Settings
    english_language: str = Field(default="en", description="Language tag of English labels")
    wikipedia_base_url: str = Field(
        default="http://en.wikipedia.org/wiki/", description="Base URL used for the source of extracted facts"
    )
    language_prefix_max_length: int = Field(
        default=8, description="Interlanguage links must have their colon before this position"
    )
    link_text_limit: int = Field(
        default=1000, description="Maximum length of link text; longer unterminated links are skipped"
    )


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
