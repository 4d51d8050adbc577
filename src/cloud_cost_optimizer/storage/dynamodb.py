"""DynamoDB storage operations for Cloud Cost Optimizer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource

import boto3

from cloud_cost_optimizer.storage.models import PreferenceItem
from cloud_cost_optimizer.storage.preferences import KeyValueStore


class DynamoDBKeyValueStore(KeyValueStore):
    """Key-value preference store backed by a DynamoDB table (PK/SK schema)."""

    def __init__(
        self,
        table_name: str,
        dynamodb_resource: DynamoDBServiceResource | None = None,
        region: str | None = None,
    ):
        """
        Initialize DynamoDB storage.

        Args:
            table_name: Name of the DynamoDB table.
            dynamodb_resource: Optional boto3 DynamoDB resource. If None, creates one.
            region: AWS region used when creating the resource.
        """
        self.dynamodb = dynamodb_resource or boto3.resource("dynamodb", region_name=region)
        self.table = self.dynamodb.Table(table_name)
        self.table_name = table_name

    def _key(self, key: str) -> dict[str, str]:
        item = PreferenceItem(key=key, value="")
        return {"PK": item.pk, "SK": item.sk}

    def get(self, key: str) -> str | None:
        """
        Get a stored preference value.

        Args:
            key: Preference name.

        Returns:
            The value if found, None otherwise.
        """
        response = self.table.get_item(Key=self._key(key))
        if "Item" in response:
            return PreferenceItem.from_dynamodb_item(response["Item"]).value
        return None

    def put(self, key: str, value: str) -> None:
        """Store a preference value."""
        self.table.put_item(Item=PreferenceItem(key=key, value=value).to_dynamodb_item())

    def delete(self, key: str) -> None:
        """Delete a preference value."""
        self.table.delete_item(Key=self._key(key))
