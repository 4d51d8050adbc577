"""Google Gemini API provider."""

from __future__ import annotations

from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from cloud_cost_optimizer.config.schema import LLMConfig
from cloud_cost_optimizer.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    StructuredOutput,
)
from cloud_cost_optimizer.llm.errors import LLMProviderError


def _to_gemini_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Convert a JSON schema dict to Gemini's OpenAPI subset (upper-case types)."""
    converted: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "type" and isinstance(value, str):
            converted[key] = value.upper()
        elif key == "properties":
            converted[key] = {name: _to_gemini_schema(prop) for name, prop in value.items()}
        elif key == "items":
            converted[key] = _to_gemini_schema(value)
        elif key == "additionalProperties":
            continue
        else:
            converted[key] = value
    return converted


class GeminiProvider(LLMProvider):
    """
    Google Gemini API provider.

    Gemini accepts an array at the top level of the response schema, so no
    wrapping is needed.
    """

    def __init__(self, api_key: str, config: LLMConfig):
        """
        Initialize the Gemini provider.

        Args:
            api_key: Gemini API key.
            config: LLM configuration.
        """
        http_options = None
        if config.timeout_seconds:
            http_options = genai_types.HttpOptions(timeout=int(config.timeout_seconds * 1000))
        self.client = genai.Client(api_key=api_key, http_options=http_options)
        self.config = config
        self.model_id = config.gemini.model_id

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "gemini"

    def generate_structured(
        self,
        messages: list[LLMMessage],
        output: StructuredOutput,
        **kwargs,
    ) -> LLMResponse:
        """
        Send a JSON-mode generate_content request to Gemini.

        Args:
            messages: System and user messages.
            output: Schema the reply must follow.
            **kwargs: Optional overrides for max_tokens, temperature.

        Returns:
            LLMResponse with the reply text.
        """
        system_msg = next((m.content for m in messages if m.role == "system"), None)
        contents = "\n\n".join(m.content for m in messages if m.role != "system")

        try:
            response = self.client.models.generate_content(
                model=self.model_id,
                contents=contents,
                config=genai_types.GenerateContentConfig(
                    system_instruction=system_msg,
                    response_mime_type="application/json",
                    response_schema=_to_gemini_schema(output.schema),
                    temperature=kwargs.get("temperature", self.config.temperature),
                    max_output_tokens=kwargs.get("max_tokens", self.config.max_tokens),
                ),
            )
        except genai_errors.APIError as e:
            unauthorized = "API_KEY_INVALID" in str(e) or "API key not valid" in str(e)
            raise LLMProviderError(
                str(e), self.provider_name, status_code=e.code, unauthorized=unauthorized
            ) from e

        usage = response.usage_metadata
        finish_reason = "unknown"
        if response.candidates and response.candidates[0].finish_reason:
            finish_reason = str(response.candidates[0].finish_reason)

        return LLMResponse(
            content=response.text or "",
            model=response.model_version or self.model_id,
            usage={
                "input_tokens": (usage.prompt_token_count or 0) if usage else 0,
                "output_tokens": (usage.candidates_token_count or 0) if usage else 0,
            },
            finish_reason=finish_reason,
        )
