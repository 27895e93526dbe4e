"""Capability vocabulary grouped into theme clusters for fuzzy matching.

The survey capabilities are grouped into theme families. When no exact
capability match exists between a mentee and a mentor, a same-cluster match
still earns partial credit in the feature scorer.

Cluster definitions can change with the survey without touching the scorer:
build a new index with ``build_cluster_index`` and inject it.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

CAPABILITY_CLUSTERS: dict[str, tuple[str, ...]] = {
    "Communication": (
        "Effective Communication",
        "Strategic Communication",
        "Stakeholder Management",
        "Assertiveness",
        "Active Listening",
        "Presenting & Public Speaking",
    ),
    "Leadership": (
        "Leadership & People Management",
        "Coaching & Developing Others",
        "Delegation & Empowerment",
        "Leading Through Change",
        "Influence Without Authority",
        "Executive Presence",
    ),
    "Strategy & Execution": (
        "Strategic Thinking & Execution",
        "Decision-Making Under Uncertainty",
        "Problem Solving & Analytical Thinking",
        "Prioritisation & Focus",
        "Business Acumen",
    ),
    "Interpersonal & Emotional Intelligence": (
        "Empathy",
        "Emotional Intelligence",
        "Conflict Resolution",
        "Building Trust & Relationships",
        "Giving & Receiving Feedback",
    ),
    "Career & Growth": (
        "Career Navigation & Growth",
        "Personal Branding & Visibility",
        "Networking & Relationship Building",
        "Resilience & Adaptability",
    ),
    "Technical & Domain": (
        "Domain Expertise",
        "Technical / Product Knowledge",
        "Data-Driven Decision Making",
        "Innovation & Creativity",
    ),
    "Cross-Functional": (
        "Cross-Functional Collaboration",
        "Managing Up",
        "Work–Life Balance & Wellbeing",
    ),
}


@dataclass(frozen=True)
class CapabilityClusterIndex:
    """Immutable lowercased capability -> cluster name lookup."""
    mapping: Mapping[str, str]

    def cluster_of(self, capability: str | None) -> str | None:
        if not capability:
            return None
        return self.mapping.get(capability.strip().lower())

    def same_cluster(self, a: str | None, b: str | None) -> bool:
        cluster_a = self.cluster_of(a)
        cluster_b = self.cluster_of(b)
        return cluster_a is not None and cluster_a == cluster_b

    @property
    def vocabulary(self) -> frozenset[str]:
        return frozenset(self.mapping)


def build_cluster_index(
    clusters: Mapping[str, tuple[str, ...] | list[str]] = CAPABILITY_CLUSTERS,
) -> CapabilityClusterIndex:
    """Build the lookup once; a capability listed in two clusters is an error."""
    mapping: dict[str, str] = {}
    for cluster_name, capabilities in clusters.items():
        for capability in capabilities:
            key = capability.strip().lower()
            if key in mapping and mapping[key] != cluster_name:
                raise ValueError(
                    f"Capability {capability!r} is in both "
                    f"{mapping[key]!r} and {cluster_name!r}"
                )
            mapping[key] = cluster_name
    return CapabilityClusterIndex(mapping=MappingProxyType(mapping))


DEFAULT_CLUSTER_INDEX = build_cluster_index()
