"""Per-pair feature computation.

Every feature is a scalar in [0, 1] (the capacity penalty in [0, 0.1]).
Capability pairs (both profiles carry a primary capability) use tiered
capability matching with cluster fallback; any other pair uses Jaccard
overlap of the topic sets.
"""

from typing import Sequence

from models.schemas.matching import MatchingFeatures
from services import timezones
from services.capability_clusters import DEFAULT_CLUSTER_INDEX, CapabilityClusterIndex
from services.embedding_utils import cosine_similarity, word_overlap
from services.matching.normalize import FeatureInput

# Capability tiers
EXACT_PRIMARY = 1.0
EXACT_SECONDARY = 0.7
CLUSTER_PRIMARY = 0.55
CLUSTER_SECONDARY = 0.4

# Seniority fit by how many bands the mentor sits below the mentee
_SENIORITY_BELOW = {1: 0.5, 2: 0.25}

TZ_BONUS_MAX_HOURS = 2
LAST_SLOT_PENALTY = 0.1


def _clamp(value: float, upper: float = 1.0) -> float:
    return max(0.0, min(upper, float(value)))


def jaccard(a: frozenset[str], b: frozenset[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


class FeatureScorer:
    def __init__(self, cluster_index: CapabilityClusterIndex = DEFAULT_CLUSTER_INDEX) -> None:
        self.cluster_index = cluster_index

    def score(
        self,
        mentee: FeatureInput,
        mentor: FeatureInput,
        semantic_similarity: float = 0.0,
    ) -> MatchingFeatures:
        """Compute all features for one pair.

        ``semantic_similarity`` is supplied by the caller (embedding cosine or
        the keyword fallback) and is only clamped here.
        """
        capability_pair = mentee.schema == "capability" and mentor.schema == "capability"

        if capability_pair:
            capability = self.capability_match(mentee, mentor)
            domain = word_overlap(mentee.detail_text, mentor.detail_text)
            industry = 0.0
            language = 0.0
        else:
            capability = jaccard(mentee.topics, mentor.topics)
            domain = 0.0
            industry = 1.0  # single-company programme: same industry
            language = self.language_bonus(mentee, mentor)

        return MatchingFeatures(
            capability_match=_clamp(capability),
            domain_match=_clamp(domain),
            role_seniority_fit=_clamp(self.seniority_fit(mentee, mentor)),
            semantic_similarity=_clamp(semantic_similarity),
            tz_overlap_bonus=_clamp(self.timezone_bonus(mentee, mentor)),
            capacity_penalty=_clamp(self.capacity_penalty(mentor), LAST_SLOT_PENALTY),
            industry_overlap=industry,
            language_bonus=language,
            schema_version="capability" if capability_pair else "legacy",
        )

    def capability_match(self, mentee: FeatureInput, mentor: FeatureInput) -> float:
        wanted_primary = mentee.primary_capability
        wanted_secondary = mentee.secondary_capabilities
        offered = (mentor.primary_capability, *mentor.secondary_capabilities)

        if wanted_primary in offered:
            return EXACT_PRIMARY
        if any(s in offered for s in wanted_secondary):
            return EXACT_SECONDARY

        same = self.cluster_index.same_cluster
        if same(wanted_primary, mentor.primary_capability):
            return CLUSTER_PRIMARY
        for wanted in (wanted_primary, *wanted_secondary):
            if any(same(wanted, o) for o in offered):
                return CLUSTER_SECONDARY
        return 0.0

    @staticmethod
    def seniority_fit(mentee: FeatureInput, mentor: FeatureInput) -> float:
        gap = mentee.seniority_band - mentor.seniority_band
        if gap <= 0:
            return 1.0
        return _SENIORITY_BELOW.get(gap, 0.0)

    @staticmethod
    def timezone_bonus(mentee: FeatureInput, mentor: FeatureInput) -> float:
        if not mentee.timezone or not mentor.timezone:
            return 0.0
        distance = timezones.distance_hours(mentee.timezone, mentor.timezone)
        return 1.0 if distance <= TZ_BONUS_MAX_HOURS else 0.0

    @staticmethod
    def capacity_penalty(mentor: FeatureInput) -> float:
        return LAST_SLOT_PENALTY if mentor.capacity == 1 else 0.0

    @staticmethod
    def language_bonus(mentee: FeatureInput, mentor: FeatureInput) -> float:
        if not mentee.languages or not mentor.languages:
            return 0.0
        primary = mentee.languages[0].strip().lower()
        return 1.0 if primary in {l.strip().lower() for l in mentor.languages} else 0.0

    @staticmethod
    def semantic_from_vectors(a: Sequence[float], b: Sequence[float]) -> float:
        """Embedding cosine clamped to [0, 1]; 0 on mismatched or zero vectors."""
        return _clamp(cosine_similarity(a, b))
