"""
Centralized Configuration System
Environment-aware settings for the prompt pipeline and its collaborators.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal, Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )
    """
    Production-grade configuration management.
    Loads from environment variables with sensible defaults.
    """

    # ============================================
    # ANTHROPIC CONFIGURATION
    # ============================================
    anthropic_api_key: Optional[str] = None  # Unset -> mock generation mode

    # ============================================
    # GENERATION
    # ============================================
    generation_model: str = "anthropic:claude-sonnet-4-5-20250929"
    max_output_tokens: int = 4096

    # ============================================
    # RETRY POLICY
    # ============================================
    max_retries: int = 3
    retry_min_wait_seconds: int = 2
    retry_max_wait_seconds: int = 10

    # ============================================
    # BUSINESS DEFAULTS
    # ============================================
    default_ai_name: str = "Koya"
    default_timezone: str = "America/New_York"
    default_minutes_included: int = 200
    default_phone_region: str = "US"

    # ============================================
    # REGENERATION QUEUE
    # ============================================
    regeneration_batch_size: int = 10
    regeneration_poll_interval_seconds: float = 30.0

    # ============================================
    # MONGODB
    # ============================================
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "receptionist"
    mongodb_max_pool_size: int = 50
    mongodb_min_pool_size: int = 5
    mongodb_server_selection_timeout_ms: int = 5000

    # ============================================
    # LOGGING
    # ============================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    enable_structured_logging: bool = False  # Set to True for production JSON logs

    # ============================================
    # ENVIRONMENT
    # ============================================
    environment: Literal["development", "staging", "production", "test"] = "development"

    @property
    def is_mock_mode(self) -> bool:
        """True when no generation credential is configured."""
        return not self.anthropic_api_key


@lru_cache()
def get_settings() -> Settings:
    """
    Singleton pattern for settings.
    Uses LRU cache to ensure only one Settings instance exists.
    """
    return Settings()


# Convenience accessor for common use
settings = get_settings()
