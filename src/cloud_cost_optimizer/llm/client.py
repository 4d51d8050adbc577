"""LLM client with provider abstraction and error classification."""

from __future__ import annotations

from typing import Any

from cloud_cost_optimizer.config.schema import LLMConfig
from cloud_cost_optimizer.errors import MissingCredentialError
from cloud_cost_optimizer.llm.base import LLMMessage, LLMProvider, LLMResponse, StructuredOutput
from cloud_cost_optimizer.llm.errors import classify_llm_error
from cloud_cost_optimizer.llm.prompts import SYSTEM_PROMPT, build_optimization_prompt
from cloud_cost_optimizer.llm.providers import AnthropicProvider, GeminiProvider, OpenAIProvider
from cloud_cost_optimizer.llm.schemas import RECOMMENDATIONS_OUTPUT

PROVIDERS: dict[str, type[LLMProvider]] = {
    "gemini": GeminiProvider,
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


class LLMClient:
    """
    LLM client for the optimization request.

    The API key is passed in explicitly; the client never looks it up.
    Each analysis makes exactly one provider call and failures are
    reclassified into pipeline errors rather than swallowed.
    """

    def __init__(self, config: LLMConfig, api_key: str | None):
        """
        Initialize the LLM client.

        Args:
            config: LLM configuration specifying provider and settings.
            api_key: API key for the configured provider.

        Raises:
            MissingCredentialError: If no API key was supplied.
            ValueError: If the configured provider is unknown.
        """
        if not api_key:
            raise MissingCredentialError()
        if config.provider not in PROVIDERS:
            raise ValueError(f"Unknown provider: {config.provider}")
        self.config = config
        self._api_key = api_key
        self._provider: LLMProvider | None = None

    def _get_provider(self) -> LLMProvider:
        """
        Get or create the LLM provider instance.

        Returns:
            The configured LLM provider.
        """
        if self._provider is None:
            provider_cls = PROVIDERS[self.config.provider]
            self._provider = provider_cls(self._api_key, self.config)

        return self._provider

    def generate(
        self,
        messages: list[LLMMessage],
        output: StructuredOutput,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Send one schema-constrained request.

        Raises:
            InvalidCredentialError: If the provider rejected the API key.
            AnalysisFailedError: On any other provider or network failure.
        """
        try:
            provider = self._get_provider()
            response = provider.generate_structured(messages, output, **kwargs)
        except Exception as e:
            error = classify_llm_error(e)
            print(f"LLM request to {self.config.provider} failed ({error.error_type}): {e}")
            raise error from e

        print(
            f"LLM request completed: {response.usage.get('input_tokens', 0)} in, "
            f"{response.usage.get('output_tokens', 0)} out ({response.finish_reason})"
        )
        return response

    def request_recommendations(self, resources: list[dict[str, Any]]) -> str:
        """
        Ask the model for cost optimization recommendations.

        Args:
            resources: Validated resource records.

        Returns:
            Raw JSON text of the recommendation array (possibly empty).
        """
        messages = [
            LLMMessage(role="system", content=SYSTEM_PROMPT),
            LLMMessage(role="user", content=build_optimization_prompt(resources)),
        ]
        print(f"Requesting recommendations for {len(resources)} resource(s) from {self.config.provider}")
        response = self.generate(messages, RECOMMENDATIONS_OUTPUT)
        return response.content
