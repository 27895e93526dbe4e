"""Weighted total score, reason strings and candidate ranking."""

from models.schemas.matching import MatchingFeatures, MatchingWeights, MatchScore

# Product defaults: capability-schema cohorts
CAPABILITY_WEIGHTS = MatchingWeights(
    capability=45,
    semantic=30,
    domain=5,
    seniority=10,
    timezone=5,
    capacity_penalty=10,
)

# Product defaults: legacy topic-tag cohorts
LEGACY_WEIGHTS = MatchingWeights(
    capability=40,
    semantic=20,
    industry=15,
    seniority=10,
    timezone=5,
    language=5,
    capacity_penalty=10,
)

# Reason thresholds
STRONG_TOPIC = 0.7
PARTIAL_TOPIC = 0.3
WEAK_TOPIC = 0.2
DOMAIN_OVERLAP = 0.3
SENIORITY_OK = 0.7
SEMANTIC_EMBEDDING = 0.5  # embedding cosines run higher than keyword overlap
SEMANTIC_KEYWORD = 0.2


class MatchScorer:
    def __init__(
        self,
        capability_weights: MatchingWeights = CAPABILITY_WEIGHTS,
        legacy_weights: MatchingWeights = LEGACY_WEIGHTS,
    ) -> None:
        self.capability_weights = capability_weights
        self.legacy_weights = legacy_weights

    def weights_for(self, features: MatchingFeatures) -> MatchingWeights:
        if features.schema_version == "capability":
            return self.capability_weights
        return self.legacy_weights

    def total(self, features: MatchingFeatures) -> float:
        w = self.weights_for(features)
        raw = (
            w.capability * features.capability_match
            + w.semantic * features.semantic_similarity
            + w.domain * features.domain_match
            + w.seniority * features.role_seniority_fit
            + w.timezone * features.tz_overlap_bonus
            + w.industry * features.industry_overlap
            + w.language * features.language_bonus
            - w.capacity_penalty * features.capacity_penalty
        )
        return round(max(0.0, min(100.0, raw)), 2)

    def score(self, features: MatchingFeatures, is_embedding_based: bool = False) -> MatchScore:
        return MatchScore(
            total_score=self.total(features),
            features=features,
            reasons=self.reasons(features, is_embedding_based),
            risks=self.risks(features),
            is_embedding_based=is_embedding_based,
        )

    @staticmethod
    def reasons(features: MatchingFeatures, is_embedding_based: bool = False) -> list[str]:
        reasons: list[str] = []
        if features.capability_match >= STRONG_TOPIC:
            reasons.append("Strong topic overlap")
        elif features.capability_match >= PARTIAL_TOPIC:
            if features.schema_version == "capability":
                reasons.append("Related capability theme")
            else:
                reasons.append("Some shared development areas")
        if features.domain_match >= DOMAIN_OVERLAP:
            reasons.append("Overlapping focus areas")
        if features.role_seniority_fit > SENIORITY_OK:
            reasons.append("Appropriate seniority gap")
        if features.tz_overlap_bonus > 0:
            reasons.append("Compatible timezone")
        threshold = SEMANTIC_EMBEDDING if is_embedding_based else SEMANTIC_KEYWORD
        if features.semantic_similarity > threshold:
            reasons.append("Aligned goals and expertise")
        if features.language_bonus > 0:
            reasons.append("Shared primary language")
        return reasons

    @staticmethod
    def risks(features: MatchingFeatures) -> list[str]:
        risks: list[str] = []
        if features.capacity_penalty > 0:
            risks.append("Limited mentor capacity")
        if features.capability_match < WEAK_TOPIC:
            risks.append("Limited topic overlap")
        if features.role_seniority_fit < 0.5:
            risks.append("Mentor less senior than mentee")
        return risks


def ranking_key(score: MatchScore, capacity: int, mentor_id: str) -> tuple:
    """Sort key for one candidate, best first.

    Total score, then capability/topic overlap, then semantic similarity,
    then remaining mentor capacity (spreads load), then mentor id A-Z
    ignoring case.
    """
    return (
        -score.total_score,
        -score.features.capability_match,
        -score.features.semantic_similarity,
        -capacity,
        mentor_id.casefold(),
        mentor_id,
    )

