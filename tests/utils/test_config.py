"""
Tests for centralized configuration system.
Verifies environment variable loading and default values.
"""
import pytest
from src.config import Settings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Don't leak environment-specific settings into other tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestConfigurationSystem:
    """Test suite for configuration management."""

    def test_default_values(self):
        """Verify all configuration fields have sensible defaults."""
        settings = Settings(anthropic_api_key="test-key")

        # Generation
        assert settings.generation_model.startswith("anthropic:")
        assert settings.max_output_tokens == 4096

        # Retry policy
        assert settings.max_retries == 3
        assert settings.retry_min_wait_seconds == 2
        assert settings.retry_max_wait_seconds == 10

        # Business defaults
        assert settings.default_ai_name == "Koya"
        assert settings.default_minutes_included == 200
        assert settings.default_phone_region == "US"

        # Queue
        assert settings.regeneration_batch_size == 10
        assert settings.regeneration_poll_interval_seconds == 30.0

        assert settings.log_level == "INFO"
        assert settings.enable_structured_logging is False

    def test_mock_mode_without_credential(self):
        assert Settings(anthropic_api_key=None).is_mock_mode is True
        assert Settings(anthropic_api_key="").is_mock_mode is True
        assert Settings(anthropic_api_key="sk-test").is_mock_mode is False

    def test_environment_variable_override(self, monkeypatch):
        """Verify environment variables override defaults."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "custom-key")
        monkeypatch.setenv("GENERATION_MODEL", "anthropic:claude-haiku-4-5")
        monkeypatch.setenv("MAX_RETRIES", "5")
        monkeypatch.setenv("REGENERATION_BATCH_SIZE", "25")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = get_settings()

        assert settings.anthropic_api_key == "custom-key"
        assert settings.generation_model == "anthropic:claude-haiku-4-5"
        assert settings.max_retries == 5
        assert settings.regeneration_batch_size == 25
        assert settings.log_level == "DEBUG"
        assert settings.environment == "production"
        assert settings.is_mock_mode is False

    def test_boolean_environment_variables(self, monkeypatch):
        monkeypatch.setenv("ENABLE_STRUCTURED_LOGGING", "true")

        assert get_settings().enable_structured_logging is True

    def test_singleton_pattern(self):
        """Verify get_settings() returns same instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2
