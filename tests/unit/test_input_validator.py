"""Tests for resource input validation."""

import json

import pytest

from cloud_cost_optimizer.analysis.input_validator import parse_resource_input
from cloud_cost_optimizer.analysis.samples import SAMPLE_RESOURCES, sample_resources_json
from cloud_cost_optimizer.errors import ParseError, ShapeError


class TestParseResourceInput:
    """Tests for parse_resource_input."""

    def test_accepts_sample_data_unchanged(self):
        """Test that the sample data round-trips unchanged and in order."""
        resources = parse_resource_input(sample_resources_json())
        assert resources == SAMPLE_RESOURCES
        assert [r["id"] for r in resources] == [
            "prod-web-server-01",
            "staging-db-instance",
            "dev-vm-for-testing",
            "backup-storage-main",
        ]

    def test_forwards_unknown_fields_and_duplicates(self):
        """Test permissive mode keeps extra keys and duplicate ids."""
        text = json.dumps([
            {"id": "a", "type": "VM", "owner": "team-x"},
            {"id": "a", "type": "WHATEVER", "cpuUsagePercent": -5},
        ])
        resources = parse_resource_input(text)
        assert resources[0]["owner"] == "team-x"
        assert resources[1]["type"] == "WHATEVER"
        assert resources[1]["cpuUsagePercent"] == -5

    @pytest.mark.parametrize("text", ["not json", "", "[1, 2", "{'id': 'x'}", "[NaN]"])
    def test_rejects_invalid_json(self, text):
        """Test that malformed JSON raises ParseError."""
        with pytest.raises(ParseError):
            parse_resource_input(text)

    @pytest.mark.parametrize("text", ["[]", "{}", '{"id": "x"}', "42", '"text"', "null"])
    def test_rejects_non_array_or_empty(self, text):
        """Test that valid JSON that is not a non-empty array raises ShapeError."""
        with pytest.raises(ShapeError):
            parse_resource_input(text)

    def test_rejects_non_object_elements(self):
        """Test that array elements must be objects."""
        with pytest.raises(ShapeError) as exc_info:
            parse_resource_input('[{"id": "x"}, "y"]')
        assert "Item 1" in exc_info.value.user_message

    def test_error_messages(self):
        """Test the user-facing messages."""
        with pytest.raises(ParseError) as parse_error:
            parse_resource_input("not json")
        assert parse_error.value.user_message.startswith("Invalid JSON format")

        with pytest.raises(ShapeError) as shape_error:
            parse_resource_input("[]")
        assert shape_error.value.user_message == (
            "Input must be a non-empty array of cloud resources."
        )


class TestStrictValidation:
    """Tests for strict field-level validation."""

    def test_accepts_complete_records(self):
        """Test that the sample data passes strict validation."""
        assert parse_resource_input(sample_resources_json(), strict=True) == SAMPLE_RESOURCES

    def test_rejects_unknown_type(self):
        """Test that resource type must be in the enum."""
        text = '[{"id": "x", "type": "MAINFRAME", "region": "us-east-1"}]'
        with pytest.raises(ShapeError) as exc_info:
            parse_resource_input(text, strict=True)
        assert "type" in exc_info.value.user_message

    def test_rejects_missing_id(self):
        """Test that id is required."""
        with pytest.raises(ShapeError):
            parse_resource_input('[{"type": "VM", "region": "us-east-1"}]', strict=True)

    def test_rejects_non_numeric_telemetry(self):
        """Test that telemetry must be numeric."""
        text = '[{"id": "x", "type": "VM", "region": "us-east-1", "cpuUsagePercent": "high"}]'
        with pytest.raises(ShapeError) as exc_info:
            parse_resource_input(text, strict=True)
        assert "cpuUsagePercent" in exc_info.value.user_message
