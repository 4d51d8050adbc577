"""Pydantic configuration schema for Cloud Cost Optimizer."""

from typing import Literal

from pydantic import BaseModel, Field


class AWSConfig(BaseModel):
    """AWS account configuration."""

    region: str = "us-east-1"


class GeminiConfig(BaseModel):
    """Google Gemini API configuration."""

    model_id: str = "gemini-2.5-pro"
    # api_key resolved from the preference store or Secrets Manager


class AnthropicConfig(BaseModel):
    """Anthropic API configuration."""

    model_id: str = "claude-sonnet-4-20250514"


class OpenAIConfig(BaseModel):
    """OpenAI API configuration."""

    model_id: str = "gpt-4o"


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: Literal["gemini", "anthropic", "openai"] = "gemini"
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    temperature: float = Field(default=0.2, ge=0, le=1)
    max_tokens: int = Field(default=8192, ge=100, le=32768)
    timeout_seconds: float | None = Field(default=None, gt=0)  # None = SDK default

    @property
    def model_id(self) -> str:
        """Model id for the selected provider."""
        return getattr(self, self.provider).model_id


class CredentialsConfig(BaseModel):
    """Where the model API key comes from."""

    preference_key: str = "gemini-api-key"
    secret_name: str | None = None  # Optional Secrets Manager fallback


class StorageConfig(BaseModel):
    """Preference storage configuration."""

    table_name: str | None = None  # None = in-memory store


class ValidationConfig(BaseModel):
    """Input and response validation switches."""

    strict_resources: bool = False  # Field-level checks on each input record
    enforce_confidence: bool = True  # Reject confidence values outside HIGH/MEDIUM/LOW


class SessionConfig(BaseModel):
    """Analysis session behavior."""

    discard_superseded: bool = True  # Only the latest-started analysis may update state


class Config(BaseModel):
    """Root configuration for Cloud Cost Optimizer."""

    project_name: str = "cloud-cost-optimizer"
    environment: Literal["dev", "staging", "prod"] = "dev"

    aws: AWSConfig = Field(default_factory=AWSConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
