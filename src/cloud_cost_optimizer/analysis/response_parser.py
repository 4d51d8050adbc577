"""Validate the model's reply before it reaches the report."""

from __future__ import annotations

import json

from pydantic import ValidationError

from cloud_cost_optimizer.analysis.input_validator import reject_json_constant
from cloud_cost_optimizer.analysis.models import OptimizationRecommendation
from cloud_cost_optimizer.errors import InvalidResponseError


def parse_recommendations(
    response_text: str | None,
    enforce_confidence: bool = True,
) -> list[OptimizationRecommendation]:
    """
    Parse the model's JSON reply into recommendations.

    An empty or blank reply means "nothing to recommend" and yields an
    empty list.

    Args:
        response_text: Raw text returned by the provider.
        enforce_confidence: Reject confidence values outside HIGH/MEDIUM/LOW.

    Returns:
        Recommendations in the order the model returned them.

    Raises:
        InvalidResponseError: If the text is not a JSON array of
            recommendation objects.
    """
    text = (response_text or "").strip()
    if not text:
        return []

    try:
        data = json.loads(text, parse_constant=reject_json_constant)
    except ValueError as e:
        raise InvalidResponseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise InvalidResponseError(
            f"Expected a JSON array of recommendations, got {type(data).__name__}"
        )

    recommendations = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise InvalidResponseError(f"Recommendation {index} is not an object")
        try:
            recommendations.append(
                OptimizationRecommendation.model_validate(
                    item, context={"enforce_confidence": enforce_confidence}
                )
            )
        except ValidationError as e:
            raise InvalidResponseError(f"Recommendation {index} is invalid: {e}") from e

    return recommendations
