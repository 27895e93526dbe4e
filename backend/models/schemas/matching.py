"""Matching engine contracts: filters, weights, features, scores and outputs."""

from typing import Literal

from pydantic import BaseModel, Field

MatchMode = Literal["batch", "top3"]
SchemaVersion = Literal["legacy", "capability"]


class MatchingFilters(BaseModel):
    """Hard-filter configuration applied before any scoring."""
    max_timezone_difference_hours: float = Field(6, ge=0)
    require_available_capacity: bool = True


class MatchingWeights(BaseModel):
    """Points awarded per unit of each feature (capacity_penalty is subtracted)."""
    capability: float = 0.0  # capability_match, or topics overlap for legacy pairs
    semantic: float = 0.0
    domain: float = 0.0
    seniority: float = 0.0
    timezone: float = 0.0
    industry: float = 0.0  # legacy only
    language: float = 0.0  # legacy only
    capacity_penalty: float = 0.0


class MatchingFeatures(BaseModel):
    """Per-pair feature vector, every value in [0, 1]."""
    capability_match: float = 0.0
    domain_match: float = 0.0
    role_seniority_fit: float = 0.0
    semantic_similarity: float = 0.0
    tz_overlap_bonus: float = 0.0
    capacity_penalty: float = 0.0  # magnitude in [0, 0.1]

    # Legacy-only dimensions, 0 for capability pairs
    industry_overlap: float = 0.0
    language_bonus: float = 0.0

    schema_version: SchemaVersion = "legacy"


class Logistics(BaseModel):
    timezone_mentee: str | None = None
    timezone_mentor: str | None = None
    languages_shared: list[str] = []
    capacity_remaining: int | None = None


class MatchScore(BaseModel):
    total_score: float = 0.0  # 0-100, clamped
    features: MatchingFeatures = MatchingFeatures()
    reasons: list[str] = []
    risks: list[str] = []
    logistics: Logistics = Logistics()
    icebreaker: str | None = None
    is_embedding_based: bool = False
    ai_explanation: str | None = None


class Recommendation(BaseModel):
    mentor_id: str
    mentor_name: str | None = None
    score: MatchScore


class ProposedAssignment(BaseModel):
    mentor_id: str
    mentor_name: str | None = None


class MatchingResult(BaseModel):
    mentee_id: str
    mentee_name: str | None = None
    recommendations: list[Recommendation] = []
    # Always None in top3 mode; None in batch mode when no mentor was eligible
    proposed_assignment: ProposedAssignment | None = None


class MatchingStats(BaseModel):
    mentees_total: int = 0
    mentors_total: int = 0
    pairs_evaluated: int = 0
    after_filters: int = 0
    assigned: int = 0
    unassigned: int = 0
    average_score: float = 0.0


class MatchingOutput(BaseModel):
    mode: MatchMode
    timestamp: str
    stats: MatchingStats = MatchingStats()
    results: list[MatchingResult] = []
