"""LLM provider implementations."""

from cloud_cost_optimizer.llm.providers.anthropic import AnthropicProvider
from cloud_cost_optimizer.llm.providers.gemini import GeminiProvider
from cloud_cost_optimizer.llm.providers.openai import OpenAIProvider

__all__ = ["AnthropicProvider", "GeminiProvider", "OpenAIProvider"]
