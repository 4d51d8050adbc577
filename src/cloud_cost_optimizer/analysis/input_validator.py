"""Parse and structurally validate the resource JSON typed into the form."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from cloud_cost_optimizer.analysis.models import CloudResource
from cloud_cost_optimizer.errors import ParseError, ShapeError


def reject_json_constant(name: str) -> Any:
    # json accepts NaN/Infinity, which are not valid JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_resource_input(raw_text: str, strict: bool = False) -> list[dict[str, Any]]:
    """
    Parse the raw form text into a list of resource records.

    Args:
        raw_text: Text expected to hold a JSON array of resource objects.
        strict: Also validate each record's fields against CloudResource.

    Returns:
        The parsed records, unchanged and in input order.

    Raises:
        ParseError: If the text is not well-formed JSON.
        ShapeError: If the value is not a non-empty array of objects, or a
            record fails field validation in strict mode.
    """
    try:
        data = json.loads(raw_text, parse_constant=reject_json_constant)
    except (json.JSONDecodeError, ValueError, TypeError) as e:
        raise ParseError(str(e)) from e

    if not isinstance(data, list) or not data:
        raise ShapeError()

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ShapeError(f"Item {index} is not an object.")

    if strict:
        for index, item in enumerate(data):
            try:
                CloudResource.model_validate(item)
            except ValidationError as e:
                fields = ", ".join(
                    ".".join(str(p) for p in err["loc"]) for err in e.errors()
                )
                raise ShapeError(f"Item {index} has invalid fields: {fields}.") from e

    return data
