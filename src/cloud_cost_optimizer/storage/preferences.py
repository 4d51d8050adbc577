"""Key-value preference storage and the API key preference."""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""
        pass

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a value. Missing keys are ignored."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for tests and local runs."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class Preferences:
    """
    The user's persisted API key preference.

    Loaded explicitly once with ``load()`` and written through to the store
    on every change.
    """

    def __init__(self, store: KeyValueStore, api_key_name: str = "gemini-api-key"):
        """
        Args:
            store: Backing key-value store.
            api_key_name: Key under which the API key is stored.
        """
        self.store = store
        self.api_key_name = api_key_name
        self._api_key = ""

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def load(self) -> "Preferences":
        """Read the stored API key; absent means empty."""
        self._api_key = self.store.get(self.api_key_name) or ""
        return self

    def set_api_key(self, api_key: str) -> None:
        """Save a new API key. An empty key clears the stored one."""
        api_key = api_key.strip()
        self._api_key = api_key
        if api_key:
            self.store.put(self.api_key_name, api_key)
        else:
            self.store.delete(self.api_key_name)
