"""Error taxonomy for the analysis pipeline.

Every stage fails with exactly one of these exceptions. Each carries a
``user_message`` suitable for display in place of the report.
"""

from __future__ import annotations


class CostOptimizerError(Exception):
    """Base class for all pipeline failures."""

    user_message = "An unexpected error occurred during analysis."

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(detail or self.user_message)

    @property
    def error_type(self) -> str:
        """Short name used in API error payloads."""
        return type(self).__name__


class ParseError(CostOptimizerError):
    """Input text is not well-formed JSON."""

    user_message = "Invalid JSON format. Please check the structure and try again."


class ShapeError(CostOptimizerError):
    """Input JSON is not a non-empty array of resource objects."""

    user_message = "Input must be a non-empty array of cloud resources."

    def __init__(self, detail: str | None = None):
        super().__init__(detail)
        if detail:
            self.user_message = f"{type(self).user_message} {detail}"


class MissingCredentialError(CostOptimizerError):
    """No API key was available before dispatch."""

    user_message = "Please set your API Key before analyzing resources."


class InvalidCredentialError(CostOptimizerError):
    """The model service rejected the API key."""

    user_message = "The provided API Key is not valid. Please check your key and try again."


class InvalidResponseError(CostOptimizerError):
    """The model service replied with something other than the expected array."""

    user_message = "The AI returned recommendations in an unexpected format. Please try again."


class AnalysisFailedError(CostOptimizerError):
    """Any other model or network failure."""

    user_message = (
        "Failed to get optimization recommendations from the AI. "
        "This could be due to an invalid API key or a network issue."
    )
