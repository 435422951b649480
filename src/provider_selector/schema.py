"""Pydantic models for the provider selector.

Catalog schemas for cloud providers and output schemas for analysis results.
The output models serialize to the same payload shape the web front-end reads.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Criteria
# =============================================================================


class Criterion(str, Enum):
    """Recognised comparison criteria (allow-list)."""
    PRICE = "price"  # Cost magnitude, lower is better
    EFFICIENCY = "efficiency"
    SPEED = "speed"
    RELIABILITY = "reliability"  # Uptime percentage
    SECURITY = "security"
    SCALABILITY = "scalability"
    GLOBAL_REACH = "global_reach"
    SUPPORT = "support"
    SERVICE_VARIETY = "service_variety"
    EASE_OF_USE = "ease_of_use"
    SUSTAINABILITY = "sustainability"

    @classmethod
    def keys(cls) -> list[str]:
        """Return the criterion keys in allow-list order."""
        return [c.value for c in cls]

    @property
    def label(self) -> str:
        """Human-readable label (underscores become spaces)."""
        return self.value.replace("_", " ")


# Ordered mapping of criterion key -> positive weight
WeightSet = dict[str, float]

MetricValue = Optional[Union[int, float]]


# =============================================================================
# Catalog
# =============================================================================


class Provider(BaseModel):
    """A single scorable cloud provider.

    Metrics may be given nested under ``metrics`` or flat on the record,
    which is how the original provider dataset was written.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(..., min_length=1, description="Catalog key, e.g. 'AWS'")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field("", description="One-sentence summary used in reasoning")
    metrics: dict[str, MetricValue] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_flat_metrics(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "metrics" in data:
            return data
        reserved = {"id", "name", "description"}
        metrics = {k: v for k, v in data.items() if k not in reserved}
        collected = {k: v for k, v in data.items() if k in reserved}
        collected["metrics"] = metrics
        return collected

    def metric(self, key: str) -> MetricValue:
        """Return the raw metric value, or None if the provider lacks it."""
        return self.metrics.get(key)

    def to_record(self) -> dict[str, Any]:
        """Flat record form: name, each metric, then description."""
        record: dict[str, Any] = {"name": self.name}
        record.update(self.metrics)
        record["description"] = self.description
        return record


class ProviderCatalog(BaseModel):
    """Read-only, ordered collection of providers keyed by id."""
    model_config = ConfigDict(frozen=True)

    version: str = "1.0.0"
    providers: dict[str, Provider] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.providers)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self.providers

    def get(self, provider_id: str) -> Optional[Provider]:
        return self.providers.get(provider_id)

    @property
    def ids(self) -> list[str]:
        return list(self.providers)


# =============================================================================
# Analysis output
# =============================================================================


class FailureReason(str, Enum):
    """Why an analysis request was rejected."""
    INVALID_INPUT = "invalid_input"
    NO_CRITERIA_SELECTED = "no_criteria_selected"


class ProviderScore(BaseModel):
    """One entry of the ranking."""
    provider: str
    score: str = Field(..., description="Score formatted to fixed decimals")


class AnalysisResult(BaseModel):
    """Successful analysis: the winner, its reasoning and the full ranking."""
    success: bool = True
    best_provider: str = Field(..., alias="bestProvider")
    provider_details: dict[str, Any] = Field(..., alias="providerDetails")
    score: float
    reasoning: str
    all_scores: list[ProviderScore] = Field(default_factory=list, alias="allScores")
    weights: WeightSet = Field(default_factory=dict, exclude=True)

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible payload using the camelCase wire names."""
        return self.model_dump(by_alias=True)


class AnalysisFailure(BaseModel):
    """Rejected analysis request. Carries no partial result."""
    success: bool = False
    error: str
    reason: FailureReason = Field(..., exclude=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


AnalysisOutcome = Union[AnalysisResult, AnalysisFailure]
