"""Classify provider failures into credential errors and everything else."""

from __future__ import annotations

from cloud_cost_optimizer.errors import (
    AnalysisFailedError,
    CostOptimizerError,
    InvalidCredentialError,
)

# Fallback for transports that only give us an error message
CREDENTIAL_ERROR_PATTERNS = (
    "API key not valid",
    "API_KEY_INVALID",
    "invalid x-api-key",
    "Incorrect API key",
)

UNAUTHORIZED_STATUS_CODES = (401, 403)


class LLMProviderError(Exception):
    """A provider request failed."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        unauthorized: bool = False,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.unauthorized = unauthorized or status_code in UNAUTHORIZED_STATUS_CODES


def looks_like_credential_error(message: str) -> bool:
    """Check an error message for known invalid-key phrases."""
    return any(pattern in message for pattern in CREDENTIAL_ERROR_PATTERNS)


def classify_llm_error(error: Exception) -> CostOptimizerError:
    """
    Map a failure from the request stage to a pipeline error.

    Structured status from LLMProviderError wins; the message is checked
    against known phrases otherwise.

    Args:
        error: Exception raised while calling the provider.

    Returns:
        InvalidCredentialError or AnalysisFailedError.
    """
    if isinstance(error, CostOptimizerError):
        return error
    if isinstance(error, LLMProviderError) and error.unauthorized:
        return InvalidCredentialError(str(error))
    if looks_like_credential_error(str(error)):
        return InvalidCredentialError(str(error))
    return AnalysisFailedError(str(error))
