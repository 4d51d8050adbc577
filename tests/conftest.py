"""Pytest configuration and fixtures."""

import json

import pytest

import cloud_cost_optimizer.llm.client as client_module
from cloud_cost_optimizer.config.schema import Config
from cloud_cost_optimizer.llm.base import LLMProvider, LLMResponse


class FakeProvider(LLMProvider):
    """Provider that returns canned text and records every request."""

    def __init__(self, content: str = "", error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls = []
        self.api_keys = []

    @property
    def provider_name(self) -> str:
        return "fake"

    def generate_structured(self, messages, output, **kwargs):
        self.calls.append({"messages": messages, "output": output, "kwargs": kwargs})
        if self.error:
            raise self.error
        return LLMResponse(
            content=self.content,
            model="fake-model",
            usage={"input_tokens": 120, "output_tokens": 40},
            finish_reason="stop",
        )


@pytest.fixture
def fake_provider(monkeypatch):
    """Replace the Gemini provider with a FakeProvider."""
    provider = FakeProvider()

    def factory(api_key, config):
        provider.api_keys.append(api_key)
        return provider

    monkeypatch.setitem(client_module.PROVIDERS, "gemini", factory)
    return provider


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def scenario_input():
    """Single idle VM."""
    return '[{"id":"x","type":"VM","cpuUsagePercent":2}]'


@pytest.fixture
def scenario_response():
    """Model reply recommending a downsize for resource x."""
    return json.dumps([
        {
            "resourceId": "x",
            "issue": "Idle",
            "recommendation": "Downsize",
            "estimatedMonthlySavings": 12.5,
            "confidence": "HIGH",
        }
    ])


@pytest.fixture
def multi_recommendation_response():
    """Model reply with three recommendations."""
    return json.dumps([
        {
            "resourceId": "prod-web-server-01",
            "issue": "Over-provisioned CPU",
            "recommendation": "Downsize instance to m5.large",
            "estimatedMonthlySavings": 140.16,
            "confidence": "MEDIUM",
        },
        {
            "resourceId": "staging-db-instance",
            "issue": "Idle Resource",
            "recommendation": "Stop the database outside business hours",
            "estimatedMonthlySavings": 87.6,
            "confidence": "HIGH",
        },
        {
            "resourceId": "backup-storage-main",
            "issue": "Wrong storage tier",
            "recommendation": "Move backups to an archive storage class",
            "estimatedMonthlySavings": 22.3,
            "confidence": "LOW",
        },
    ])


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary."""
    return {
        "project_name": "test-optimizer",
        "environment": "dev",
        "aws": {
            "region": "eu-west-1",
        },
        "llm": {
            "provider": "openai",
            "openai": {"model_id": "gpt-4o-mini"},
            "temperature": 0.1,
        },
        "credentials": {
            "preference_key": "test-api-key",
            "secret_name": "optimizer/llm",
        },
        "validation": {
            "strict_resources": True,
        },
    }
