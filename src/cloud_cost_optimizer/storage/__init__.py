"""Storage layer for Cloud Cost Optimizer."""

from cloud_cost_optimizer.storage.models import PreferenceItem
from cloud_cost_optimizer.storage.preferences import (
    InMemoryKeyValueStore,
    KeyValueStore,
    Preferences,
)
from cloud_cost_optimizer.storage.dynamodb import DynamoDBKeyValueStore
from cloud_cost_optimizer.storage.credentials import (
    create_preference_store,
    get_secret_api_key,
    resolve_api_key,
)

__all__ = [
    "PreferenceItem",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "DynamoDBKeyValueStore",
    "Preferences",
    "create_preference_store",
    "get_secret_api_key",
    "resolve_api_key",
]
