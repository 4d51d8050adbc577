"""Data models for DynamoDB storage."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _utc_now_iso() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S") + "Z"


class PreferenceItem(BaseModel):
    """
    A single stored string preference.

    DynamoDB Key Structure:
    - PK: PREFERENCE#{key} (e.g., "PREFERENCE#gemini-api-key")
    - SK: VALUE
    """

    key: str
    value: str
    updated_at: str = Field(default_factory=_utc_now_iso)

    @property
    def pk(self) -> str:
        """Generate partition key."""
        return f"PREFERENCE#{self.key}"

    @property
    def sk(self) -> str:
        """Generate sort key."""
        return "VALUE"

    def to_dynamodb_item(self) -> dict:
        """Convert to DynamoDB item format."""
        return {
            "PK": self.pk,
            "SK": self.sk,
            "key": self.key,
            "value": self.value,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dynamodb_item(cls, item: dict) -> "PreferenceItem":
        """Create from DynamoDB item."""
        return cls(
            key=item["key"],
            value=item["value"],
            updated_at=item.get("updated_at", ""),
        )
