"""Base classes for LLM provider abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class LLMMessage:
    """Message for LLM conversation."""

    role: str  # "system" or "user"
    content: str


@dataclass
class LLMResponse:
    """Response from LLM provider."""

    content: str
    model: str
    usage: dict[str, int]  # {"input_tokens": x, "output_tokens": y}
    finish_reason: str


@dataclass
class StructuredOutput:
    """
    JSON schema the model's reply must conform to.

    Providers that only accept an object at the top level wrap ``schema``
    under ``wrapper_key`` and unwrap the reply again, so callers always get
    back the JSON text of a value matching ``schema``.
    """

    name: str
    description: str
    schema: dict[str, Any]  # JSON Schema
    wrapper_key: str = "items"


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def generate_structured(
        self,
        messages: list[LLMMessage],
        output: StructuredOutput,
        **kwargs,
    ) -> LLMResponse:
        """
        Send one completion request constrained to a JSON schema.

        Args:
            messages: System and user messages for the request.
            output: Schema the reply must follow.
            **kwargs: Provider-specific options (max_tokens, temperature, etc.)

        Returns:
            LLMResponse whose content is the JSON text of the reply.

        Raises:
            LLMProviderError: If the provider rejects or fails the request.
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass
