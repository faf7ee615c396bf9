"""Curation output models."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .candidate import Candidate


class ScoredCandidate(Candidate):
    """Candidate annotated by a curation strategy."""

    selection_score: float = Field(..., description="Selection score", ge=0.0, le=100.0)
    selection_reason: str = Field(..., description="Trace of contributing factors")
    target_section: str = Field("general", description="Display section")
    confidence_score: float = Field(0.5, description="Confidence in the selection", ge=0.0, le=1.0)
    ai_summary: Optional[str] = Field(None, description="One-line summary from the reasoning service")

    @classmethod
    def from_candidate(cls, candidate: Candidate, **fields) -> "ScoredCandidate":
        """Annotate a plain candidate."""
        data = candidate.model_dump(include=set(Candidate.model_fields))
        data.update(fields)
        return cls(**data)


class QualityMetrics(BaseModel):
    """Aggregate metrics of a curated selection."""

    average_score: float = Field(0.0, description="Mean selection score")
    section_distribution: Dict[str, int] = Field(default_factory=dict, description="Articles per section")
    sources_diversity: int = Field(0, description="Distinct source count")


class CurationResult(BaseModel):
    """Result of one curation run."""

    articles: List[ScoredCandidate] = Field(default_factory=list, description="Ranked selection")
    total_processed: int = Field(..., description="Input count before filtering")
    curation_method: str = Field(..., description="Strategy label")
    processing_time_ms: float = Field(0.0, description="Elapsed time in milliseconds")
    quality_metrics: QualityMetrics = Field(default_factory=QualityMetrics)
    used_fallback: bool = Field(False, description="Whether a paid strategy degraded to local scoring")


class UsageStats(BaseModel):
    """Usage of a curation strategy in the current billing period."""

    requests_this_month: int = Field(0, description="Successful external calls")
    estimated_cost: float = Field(0.0, description="Estimated cost in USD")
    monthly_budget: Optional[float] = Field(None, description="Budget in USD, None when unlimited")
    remaining_budget: Optional[float] = Field(None, description="Budget left, None when unlimited")


class HealthReport(BaseModel):
    """Outcome of a pipeline health check."""

    status: str = Field(..., description="healthy or unhealthy")
    checks: Dict[str, bool] = Field(default_factory=dict, description="Pass/fail per check")
    problems: Dict[str, str] = Field(default_factory=dict, description="Reason per failed check")
    provider_name: str = Field(..., description="Active provider")
    cost_per_month: str = Field(..., description="Provider cost label")
    effectiveness: str = Field(..., description="Provider effectiveness label")
    features: List[str] = Field(default_factory=list)
    usage: UsageStats = Field(default_factory=UsageStats)
    checked_at: datetime
    version: str

    @property
    def healthy(self) -> bool:
        return self.status == "healthy"
