"""LLM integration for AI-powered cost optimization."""

from cloud_cost_optimizer.llm.base import LLMMessage, LLMProvider, LLMResponse, StructuredOutput
from cloud_cost_optimizer.llm.client import LLMClient
from cloud_cost_optimizer.llm.errors import LLMProviderError, classify_llm_error
from cloud_cost_optimizer.llm.prompts import SYSTEM_PROMPT, build_optimization_prompt
from cloud_cost_optimizer.llm.schemas import RECOMMENDATIONS_OUTPUT, RECOMMENDATIONS_SCHEMA

__all__ = [
    "LLMClient",
    "LLMMessage",
    "LLMProvider",
    "LLMProviderError",
    "LLMResponse",
    "StructuredOutput",
    "SYSTEM_PROMPT",
    "RECOMMENDATIONS_OUTPUT",
    "RECOMMENDATIONS_SCHEMA",
    "build_optimization_prompt",
    "classify_llm_error",
]
