"""Anthropic Claude API provider."""

from __future__ import annotations

import json
from typing import Any

import anthropic

from cloud_cost_optimizer.config.schema import LLMConfig
from cloud_cost_optimizer.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    StructuredOutput,
)
from cloud_cost_optimizer.llm.errors import LLMProviderError
from cloud_cost_optimizer.llm.schemas import wrapped_schema


class AnthropicProvider(LLMProvider):
    """
    Anthropic Claude API provider.

    Structured output is obtained by forcing a single tool call whose input
    schema wraps the requested schema.
    """

    def __init__(self, api_key: str, config: LLMConfig):
        """
        Initialize the Anthropic provider.

        Args:
            api_key: Anthropic API key.
            config: LLM configuration.
        """
        client_kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
        if config.timeout_seconds:
            client_kwargs["timeout"] = config.timeout_seconds
        self.client = anthropic.Anthropic(**client_kwargs)
        self.config = config
        self.model_id = config.anthropic.model_id

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "anthropic"

    def _convert_messages(
        self, messages: list[LLMMessage]
    ) -> tuple[str, list[dict[str, Any]]]:
        """
        Convert LLMMessages to Anthropic format.

        Returns:
            Tuple of (system_message, user_messages).
        """
        system_msg = next((m.content for m in messages if m.role == "system"), "")
        api_messages = [
            {"role": m.role, "content": m.content} for m in messages if m.role != "system"
        ]
        return system_msg, api_messages

    def _output_tool(self, output: StructuredOutput) -> dict[str, Any]:
        """Convert a StructuredOutput to an Anthropic tool definition."""
        return {
            "name": output.name,
            "description": output.description,
            "input_schema": wrapped_schema(output),
        }

    def generate_structured(
        self,
        messages: list[LLMMessage],
        output: StructuredOutput,
        **kwargs,
    ) -> LLMResponse:
        """
        Send a forced-tool request to Claude.

        Args:
            messages: System and user messages.
            output: Schema the reply must follow.
            **kwargs: Optional overrides for max_tokens, temperature.

        Returns:
            LLMResponse with the JSON text of the tool input's wrapped value.
        """
        system_msg, user_messages = self._convert_messages(messages)

        try:
            response = self.client.messages.create(
                model=self.model_id,
                max_tokens=kwargs.get("max_tokens", self.config.max_tokens),
                temperature=kwargs.get("temperature", self.config.temperature),
                system=system_msg,
                messages=user_messages,
                tools=[self._output_tool(output)],
                tool_choice={"type": "tool", "name": output.name},
            )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            raise LLMProviderError(
                str(e), self.provider_name, status_code=e.status_code, unauthorized=True
            ) from e
        except anthropic.APIStatusError as e:
            raise LLMProviderError(str(e), self.provider_name, status_code=e.status_code) from e
        except anthropic.APIError as e:
            raise LLMProviderError(str(e), self.provider_name) from e

        content = ""
        for block in response.content:
            if block.type == "tool_use" and block.name == output.name:
                tool_input = block.input if isinstance(block.input, dict) else {}
                content = json.dumps(tool_input.get(output.wrapper_key, tool_input))
                break
            if block.type == "text":
                content = block.text

        return LLMResponse(
            content=content,
            model=response.model,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
            finish_reason=response.stop_reason or "unknown",
        )
