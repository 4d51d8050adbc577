"""Tests for configuration module."""

import pytest

from cloud_cost_optimizer.config.loader import load_config
from cloud_cost_optimizer.config.schema import (
    Config,
    LLMConfig,
    SessionConfig,
    ValidationConfig,
)


class TestConfig:
    """Tests for Config schema."""

    def test_default_config(self):
        """Test that default config is valid."""
        config = Config()
        assert config.project_name == "cloud-cost-optimizer"
        assert config.environment == "dev"
        assert config.aws.region == "us-east-1"
        assert config.storage.table_name is None

    def test_config_from_dict(self, sample_config_dict):
        """Test creating config from dictionary."""
        config = Config(**sample_config_dict)
        assert config.project_name == "test-optimizer"
        assert config.llm.provider == "openai"
        assert config.llm.model_id == "gpt-4o-mini"
        assert config.credentials.secret_name == "optimizer/llm"
        assert config.validation.strict_resources is True

    def test_llm_defaults(self):
        """Test LLM default values."""
        config = LLMConfig()
        assert config.provider == "gemini"
        assert config.model_id == "gemini-2.5-pro"
        assert config.temperature == 0.2
        assert config.timeout_seconds is None

    def test_validation_and_session_defaults(self):
        """Test validation and session default values."""
        assert ValidationConfig().strict_resources is False
        assert ValidationConfig().enforce_confidence is True
        assert SessionConfig().discard_superseded is True


class TestConfigValidation:
    """Tests for config validation."""

    def test_invalid_provider(self):
        """Test that an unknown provider raises error."""
        with pytest.raises(ValueError):
            LLMConfig(provider="mistral")

    def test_invalid_temperature(self):
        """Test that temperature above 1 raises error."""
        with pytest.raises(ValueError):
            LLMConfig(temperature=1.5)

    def test_invalid_timeout(self):
        """Test that a non-positive timeout raises error."""
        with pytest.raises(ValueError):
            LLMConfig(timeout_seconds=0)


class TestLoadConfig:
    """Tests for YAML loading and overrides."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        """Remove override variables from the environment."""
        for var in (
            "AWS_REGION",
            "LLM_PROVIDER",
            "LLM_MODEL_ID",
            "PREFERENCES_TABLE",
            "LLM_API_KEY_SECRET",
            "STRICT_RESOURCES",
        ):
            monkeypatch.delenv(var, raising=False)

    def test_missing_directory_uses_defaults(self, tmp_path):
        """Test loading from an empty config directory."""
        config = load_config(tmp_path, environment="dev")
        assert config == Config()

    def test_environment_file_merges(self, tmp_path):
        """Test that config.<env>.yaml overrides nested keys only."""
        (tmp_path / "config.yaml").write_text(
            "llm:\n  provider: anthropic\n  temperature: 0.3\n"
        )
        (tmp_path / "config.prod.yaml").write_text("llm:\n  temperature: 0.1\n")

        config = load_config(tmp_path, environment="prod")
        assert config.environment == "prod"
        assert config.llm.provider == "anthropic"
        assert config.llm.temperature == 0.1

    def test_env_overrides(self, tmp_path, monkeypatch):
        """Test environment variable overrides."""
        monkeypatch.setenv("LLM_PROVIDER", "openai")
        monkeypatch.setenv("LLM_MODEL_ID", "gpt-4.1")
        monkeypatch.setenv("PREFERENCES_TABLE", "optimizer-prefs")
        monkeypatch.setenv("STRICT_RESOURCES", "yes")

        config = load_config(tmp_path, environment="dev")
        assert config.llm.provider == "openai"
        assert config.llm.model_id == "gpt-4.1"
        assert config.storage.table_name == "optimizer-prefs"
        assert config.validation.strict_resources is True
