"""Response schema for optimization recommendations."""

from __future__ import annotations

import copy
import json
from typing import Any

from cloud_cost_optimizer.llm.base import StructuredOutput

RECOMMENDATION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "resourceId": {
            "type": "string",
            "description": "The ID of the cloud resource being analyzed.",
        },
        "issue": {
            "type": "string",
            "description": (
                "A concise description of the identified inefficiency or waste "
                "(e.g., 'Over-provisioned CPU', 'Idle Resource')."
            ),
        },
        "recommendation": {
            "type": "string",
            "description": (
                "The specific, actionable recommendation to optimize the resource "
                "(e.g., 'Downsize instance to t2.small', "
                "'Enable auto-shutdown during non-business hours')."
            ),
        },
        "estimatedMonthlySavings": {
            "type": "number",
            "description": "The estimated cost savings in USD per month if the recommendation is implemented.",
        },
        "confidence": {
            "type": "string",
            "enum": ["HIGH", "MEDIUM", "LOW"],
            "description": "The confidence level of this recommendation.",
        },
    },
    "required": [
        "resourceId",
        "issue",
        "recommendation",
        "estimatedMonthlySavings",
        "confidence",
    ],
}

RECOMMENDATIONS_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": RECOMMENDATION_SCHEMA,
}

RECOMMENDATIONS_OUTPUT = StructuredOutput(
    name="report_recommendations",
    description="Report cost optimization recommendations for the analyzed resources.",
    schema=RECOMMENDATIONS_SCHEMA,
    wrapper_key="recommendations",
)


def _close_objects(schema: dict[str, Any]) -> None:
    """Set additionalProperties: false on every object schema, in place."""
    if schema.get("type") == "object":
        schema["additionalProperties"] = False
        for prop in schema.get("properties", {}).values():
            _close_objects(prop)
    if isinstance(schema.get("items"), dict):
        _close_objects(schema["items"])


def wrapped_schema(output: StructuredOutput, strict: bool = False) -> dict[str, Any]:
    """
    Wrap the output schema in a single-property object.

    Args:
        output: The structured output definition.
        strict: Close every object schema (required by OpenAI strict mode).
    """
    schema = {
        "type": "object",
        "properties": {output.wrapper_key: copy.deepcopy(output.schema)},
        "required": [output.wrapper_key],
    }
    if strict:
        _close_objects(schema)
    return schema


def unwrap_structured_text(text: str, wrapper_key: str) -> str:
    """
    Return the JSON text of the wrapped value.

    Text that is not a JSON object holding ``wrapper_key`` is returned
    unchanged, leaving it to response validation to reject.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return text
    if isinstance(data, dict) and wrapper_key in data:
        return json.dumps(data[wrapper_key])
    return text
