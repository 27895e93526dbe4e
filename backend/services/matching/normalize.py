"""Profile normalization: one canonical scoring record per participant.

Legacy and capability-schema profiles are converted here, once, so that the
filter and the scorers never branch on raw profile fields.
"""

import re
from dataclasses import dataclass, field
from typing import Literal

from models.schemas.profiles import MenteeProfile, MentorProfile
from services.embedding_utils import (
    build_mentee_embedding_text,
    build_mentor_embedding_text,
)

ProfileSchema = Literal["legacy", "capability"]

# Defaults when experience is missing or unparseable
DEFAULT_MENTEE_BAND = 2
DEFAULT_MENTOR_BAND = 3

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


@dataclass(frozen=True)
class FeatureInput:
    id: str
    name: str
    role: str
    schema: ProfileSchema
    topics: frozenset[str]  # lowercased
    primary_capability: str | None  # lowercased
    secondary_capabilities: tuple[str, ...]  # lowercased
    detail_text: str
    seniority_band: int
    timezone: str | None
    languages: tuple[str, ...]
    capacity: int = 0
    practice_scenarios: frozenset[str] = field(default_factory=frozenset)
    excluded_scenarios: frozenset[str] = field(default_factory=frozenset)
    text: str = ""  # embedding / keyword-fallback text
    display_topics: tuple[str, ...] = ()  # original casing, for messages


def experience_band(value: str | float | int | None, default: int) -> int:
    """Map years of experience to ordinal bands 1-4 (0-2, 3-5, 6-10, 10+)."""
    if value is None:
        return default

    if isinstance(value, (int, float)):
        years = float(value)
        open_ended = False
    else:
        match = _NUMBER_RE.search(value)
        if match is None:
            return default
        years = float(match.group())  # lower bound of "3–5"
        open_ended = "+" in value

    if open_ended and years >= 10:
        return 4
    if years <= 2:
        return 1
    if years <= 5:
        return 2
    if years <= 10:
        return 3
    return 4


def _lower_set(items: list[str]) -> frozenset[str]:
    return frozenset(i.strip().lower() for i in items if i and i.strip())


def _clean(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _join_details(*parts: str | None) -> str:
    return " ".join(p.strip() for p in parts if p and p.strip())


def _dedupe(items: list[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        key = item.strip().lower()
        if key and key not in seen:
            seen.add(key)
            out.append(item.strip())
    return tuple(out)


def normalize_mentee(mentee: MenteeProfile) -> FeatureInput:
    primary = _clean(mentee.primary_capability)
    secondary = _clean(mentee.secondary_capability)

    if primary:
        schema: ProfileSchema = "capability"
        display_topics = _dedupe([c for c in (primary, secondary) if c])
    else:
        schema = "legacy"
        display_topics = _dedupe(mentee.topics_to_learn)

    return FeatureInput(
        id=mentee.id,
        name=mentee.display_name,
        role=mentee.role,
        schema=schema,
        topics=_lower_set(list(display_topics)),
        primary_capability=primary.lower() if primary else None,
        secondary_capabilities=(secondary.lower(),) if secondary else (),
        detail_text=_join_details(
            mentee.primary_capability_detail, mentee.secondary_capability_detail
        ),
        seniority_band=experience_band(mentee.experience_years, DEFAULT_MENTEE_BAND),
        timezone=_clean(mentee.location_timezone),
        languages=tuple(mentee.languages),
        practice_scenarios=_lower_set(mentee.practice_scenarios),
        text=build_mentee_embedding_text(mentee),
        display_topics=display_topics,
    )


def normalize_mentor(mentor: MentorProfile) -> FeatureInput:
    primary = _clean(mentor.primary_capability)
    secondaries = tuple(
        s for s in (_clean(c) for c in mentor.secondary_capabilities) if s
    )

    if primary:
        schema: ProfileSchema = "capability"
        display_topics = _dedupe([primary, *secondaries])
    else:
        schema = "legacy"
        display_topics = _dedupe(mentor.topics_to_mentor)

    return FeatureInput(
        id=mentor.id,
        name=mentor.display_name,
        role=mentor.role,
        schema=schema,
        topics=_lower_set(list(display_topics)),
        primary_capability=primary.lower() if primary else None,
        secondary_capabilities=tuple(s.lower() for s in secondaries),
        detail_text=_join_details(
            mentor.primary_capability_detail, mentor.secondary_capability_detail
        ),
        seniority_band=experience_band(mentor.experience_years, DEFAULT_MENTOR_BAND),
        timezone=_clean(mentor.location_timezone),
        languages=tuple(mentor.languages),
        capacity=mentor.capacity_remaining,
        practice_scenarios=_lower_set(mentor.practice_scenarios),
        excluded_scenarios=_lower_set(mentor.excluded_scenarios),
        text=build_mentor_embedding_text(mentor),
        display_topics=display_topics,
    )
