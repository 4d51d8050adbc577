"""OpenAI API provider."""

from __future__ import annotations

from typing import Any

import openai

from cloud_cost_optimizer.config.schema import LLMConfig
from cloud_cost_optimizer.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    StructuredOutput,
)
from cloud_cost_optimizer.llm.errors import LLMProviderError
from cloud_cost_optimizer.llm.schemas import unwrap_structured_text, wrapped_schema


class OpenAIProvider(LLMProvider):
    """OpenAI API provider."""

    def __init__(self, api_key: str, config: LLMConfig):
        """
        Initialize the OpenAI provider.

        Args:
            api_key: OpenAI API key.
            config: LLM configuration.
        """
        client_kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
        if config.timeout_seconds:
            client_kwargs["timeout"] = config.timeout_seconds
        self.client = openai.OpenAI(**client_kwargs)
        self.config = config
        self.model_id = config.openai.model_id

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "openai"

    def _convert_messages(self, messages: list[LLMMessage]) -> list[dict[str, Any]]:
        """Convert LLMMessages to OpenAI format."""
        return [{"role": m.role, "content": m.content} for m in messages]

    def _response_format(self, output: StructuredOutput) -> dict[str, Any]:
        """Build a strict json_schema response format."""
        return {
            "type": "json_schema",
            "json_schema": {
                "name": output.name,
                "description": output.description,
                "schema": wrapped_schema(output, strict=True),
                "strict": True,
            },
        }

    def generate_structured(
        self,
        messages: list[LLMMessage],
        output: StructuredOutput,
        **kwargs,
    ) -> LLMResponse:
        """
        Send a schema-constrained chat completion request to OpenAI.

        Args:
            messages: System and user messages.
            output: Schema the reply must follow.
            **kwargs: Optional overrides for max_tokens, temperature.

        Returns:
            LLMResponse with the unwrapped JSON text.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model_id,
                max_tokens=kwargs.get("max_tokens", self.config.max_tokens),
                temperature=kwargs.get("temperature", self.config.temperature),
                messages=self._convert_messages(messages),
                response_format=self._response_format(output),
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise LLMProviderError(
                str(e), self.provider_name, status_code=e.status_code, unauthorized=True
            ) from e
        except openai.APIStatusError as e:
            raise LLMProviderError(str(e), self.provider_name, status_code=e.status_code) from e
        except openai.APIError as e:
            raise LLMProviderError(str(e), self.provider_name) from e

        choice = response.choices[0]
        return LLMResponse(
            content=unwrap_structured_text(choice.message.content or "", output.wrapper_key),
            model=response.model,
            usage={
                "input_tokens": response.usage.prompt_tokens if response.usage else 0,
                "output_tokens": response.usage.completion_tokens if response.usage else 0,
            },
            finish_reason=choice.finish_reason or "unknown",
        )
