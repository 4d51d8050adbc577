"""Resolve the model API key before an analysis is dispatched."""

from __future__ import annotations

import json
from typing import Any

import boto3
from botocore.exceptions import ClientError

from cloud_cost_optimizer.config.schema import Config
from cloud_cost_optimizer.storage.dynamodb import DynamoDBKeyValueStore
from cloud_cost_optimizer.storage.preferences import (
    InMemoryKeyValueStore,
    KeyValueStore,
    Preferences,
)


def create_preference_store(config: Config) -> KeyValueStore:
    """Create the configured preference store (DynamoDB if a table is set)."""
    if config.storage.table_name:
        return DynamoDBKeyValueStore(config.storage.table_name, region=config.aws.region)
    return InMemoryKeyValueStore()


def get_secret_api_key(
    secret_name: str,
    provider: str,
    region: str = "us-east-1",
    secrets_client: Any | None = None,
) -> str | None:
    """
    Retrieve the provider API key from Secrets Manager.

    The secret is a JSON object holding ``{provider}_api_key``.

    Returns:
        The API key, or None if the secret has no key for this provider.

    Raises:
        RuntimeError: If the secret cannot be retrieved.
    """
    if secrets_client is None:
        secrets_client = boto3.client("secretsmanager", region_name=region)

    try:
        response = secrets_client.get_secret_value(SecretId=secret_name)
    except ClientError as e:
        raise RuntimeError(f"Failed to retrieve LLM API key: {e}") from e

    secret_data = json.loads(response["SecretString"])
    return secret_data.get(f"{provider}_api_key") or None


def resolve_api_key(
    preferences: Preferences,
    config: Config,
    secrets_client: Any | None = None,
) -> str | None:
    """
    Resolve the API key for the next analysis.

    The saved preference wins; the Secrets Manager secret is consulted only
    when no preference is saved and a secret name is configured.

    Returns:
        The API key, or None if none is available.
    """
    if preferences.has_api_key:
        return preferences.api_key

    if config.credentials.secret_name:
        return get_secret_api_key(
            config.credentials.secret_name,
            config.llm.provider,
            region=config.aws.region,
            secrets_client=secrets_client,
        )

    return None
