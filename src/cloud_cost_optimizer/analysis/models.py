"""Data models for resources, recommendations and rendered reports."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ResourceType(str, Enum):
    """Kinds of cloud resources the form accepts."""

    VM = "VM"
    DATABASE = "DATABASE"
    STORAGE_BUCKET = "STORAGE_BUCKET"
    LOAD_BALANCER = "LOAD_BALANCER"


class Confidence(str, Enum):
    """Confidence tier of a recommendation."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class CloudResource(BaseModel):
    """
    One cloud resource record as typed into the form.

    Only used for strict input validation; accepted records are forwarded
    to the model as the original JSON objects.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    type: ResourceType
    region: str
    size: str | None = None  # e.g. "t2.micro", "db.r5.large"
    cpu_usage_percent: float | None = Field(default=None, alias="cpuUsagePercent")
    memory_usage_percent: float | None = Field(default=None, alias="memoryUsagePercent")
    network_traffic_gb: float | None = Field(default=None, alias="networkTrafficGB")
    idle_hours_per_day: float | None = Field(default=None, alias="idleHoursPerDay")


class OptimizationRecommendation(BaseModel):
    """
    One recommendation returned by the model.

    Validate with ``context={"enforce_confidence": False}`` to accept
    confidence values outside HIGH/MEDIUM/LOW.
    """

    model_config = ConfigDict(populate_by_name=True)

    resource_id: str = Field(alias="resourceId")
    issue: str
    recommendation: str
    estimated_monthly_savings: float = Field(alias="estimatedMonthlySavings")
    confidence: str

    @field_validator("estimated_monthly_savings", mode="before")
    @classmethod
    def _require_number(cls, value: object) -> object:
        # JSON numbers only; no coercion from strings or booleans
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("estimatedMonthlySavings must be a JSON number")
        return value

    @field_validator("confidence")
    @classmethod
    def _check_confidence(cls, value: str, info: ValidationInfo) -> str:
        enforce = (info.context or {}).get("enforce_confidence", True)
        if enforce and value not in Confidence._value2member_map_:
            raise ValueError(f"confidence must be one of HIGH, MEDIUM, LOW (got {value!r})")
        return value

    @property
    def confidence_level(self) -> Confidence | None:
        """Confidence as an enum member, or None if the model sent something else."""
        return Confidence._value2member_map_.get(self.confidence)

    def to_dict(self) -> dict:
        """Serialize with the wire (camelCase) field names."""
        return self.model_dump(by_alias=True)


class RecommendationCard(BaseModel):
    """Display record for one recommendation."""

    resource_id: str
    issue: str
    recommendation: str
    savings_display: str  # "$12.50"
    confidence: str
    confidence_style: str  # high / medium / low / unknown


class OptimizationReport(BaseModel):
    """Recommendations in returned order plus the aggregated total."""

    recommendations: list[OptimizationRecommendation] = Field(default_factory=list)
    total_savings: float = 0.0
    cards: list[RecommendationCard] = Field(default_factory=list)

    @property
    def formatted_total(self) -> str:
        """Total rounded to cents for display."""
        return format_currency(self.total_savings)

    @property
    def is_empty(self) -> bool:
        return not self.recommendations

    def to_api_dict(self) -> dict:
        """Payload returned by the JSON analysis endpoint."""
        return {
            "recommendations": [r.to_dict() for r in self.recommendations],
            "totalSavings": self.total_savings,
            "formattedTotal": self.formatted_total,
        }


def format_currency(amount: float) -> str:
    """Format a USD amount with two decimals, e.g. ``$12.50``."""
    return f"${amount:.2f}"
