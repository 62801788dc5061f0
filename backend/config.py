"""
Centralized Configuration for Psak Din Search
=============================================

Every tunable of the search service in one place: server, logging, corpus
search and the normalization defaults used when a request sends none.
"""

from typing import List, Optional
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from models import NormalizationOptions


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
ENVIRONMENTS = ("development", "staging", "production", "test")


class Settings(BaseSettings):
    """
    Settings read from the environment, then from .env.

    Field names map to upper-case variables (LOG_LEVEL, SEARCH_MAX_WORKERS).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================
    #  APPLICATION SETTINGS
    # ==========================================

    app_name: str = "Psak Din Search"
    app_version: str = "1.0.0"
    environment: str = "production"

    # ==========================================
    #  SERVER SETTINGS
    # ==========================================

    host: str = "0.0.0.0"
    port: int = 8000

    # Comma-separated; see cors_origin_list
    cors_origins: str = "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173"

    # ==========================================
    #  LOGGING
    # ==========================================

    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    log_format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    log_date_format: str = "%H:%M:%S"

    # ==========================================
    #  SEARCH SETTINGS
    # ==========================================

    excerpt_length: int = Field(150, ge=1)
    default_proximity_range: int = Field(10, ge=0)

    # Corpus search goes parallel above this many documents
    search_max_workers: int = Field(4, ge=1)
    parallel_search_threshold: int = Field(500, ge=1)

    # Normalization defaults
    normalize_remove_nikud: bool = True
    normalize_remove_quotes: bool = True
    normalize_remove_punctuation: bool = False
    normalize_remove_dashes: bool = False
    normalize_final_letters: bool = False
    normalize_expand_hebrew_numbers: bool = True
    normalize_expand_acronyms: bool = False
    normalize_final_letter_variants: bool = False

    # ==========================================
    #  VALIDATORS
    # ==========================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}")
        return level

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        environment = v.lower()
        if environment not in ENVIRONMENTS:
            raise ValueError(f"environment must be one of {ENVIRONMENTS}")
        return environment

    # ==========================================
    #  COMPUTED PROPERTIES
    # ==========================================

    @property
    def cors_origin_list(self) -> List[str]:
        """Comma-separated origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "test"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def default_normalization(self) -> NormalizationOptions:
        """NormalizationOptions built from the configured defaults."""
        return NormalizationOptions(
            remove_nikud=self.normalize_remove_nikud,
            remove_quotes=self.normalize_remove_quotes,
            remove_punctuation=self.normalize_remove_punctuation,
            remove_dashes=self.normalize_remove_dashes,
            normalize_final_letters=self.normalize_final_letters,
            expand_hebrew_numbers=self.normalize_expand_hebrew_numbers,
            expand_acronyms=self.normalize_expand_acronyms,
            final_letter_variants=self.normalize_final_letter_variants,
        )


# ==========================================
#  GLOBAL SETTINGS INSTANCE
# ==========================================

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Process-wide settings, loaded and validated on first use."""
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """Discard the cached settings and read the environment again."""
    global _settings
    _settings = None
    return get_settings()


# ==========================================
#  CONVENIENCE FUNCTIONS
# ==========================================

def is_development() -> bool:
    """Shortcut for get_settings().is_development."""
    return get_settings().is_development


def is_testing() -> bool:
    """Shortcut for get_settings().is_testing."""
    return get_settings().is_testing
