"""Mentor-centric pivot of matching results, score breakdowns and manual selection checks."""

from models.schemas.matching import MatchingOutput, MatchScore
from models.schemas.mentor_view import (
    MentorCentricMatch,
    PotentialMentee,
    ScoreComponent,
    SelectionValidation,
)
from models.schemas.profiles import MentorProfile
from services.matching.match_scorer import MatchScorer

# (component key, label, feature field, weight field)
_CAPABILITY_COMPONENTS = (
    ("capability", "Capability", "capability_match", "capability"),
    ("semantic", "Goals Alignment", "semantic_similarity", "semantic"),
    ("domain", "Focus Areas", "domain_match", "domain"),
    ("seniority", "Seniority Fit", "role_seniority_fit", "seniority"),
    ("timezone", "Timezone", "tz_overlap_bonus", "timezone"),
)

_LEGACY_COMPONENTS = (
    ("topics", "Topics", "capability_match", "capability"),
    ("semantic", "Goals Alignment", "semantic_similarity", "semantic"),
    ("industry", "Industry", "industry_overlap", "industry"),
    ("seniority", "Seniority Fit", "role_seniority_fit", "seniority"),
    ("timezone", "Timezone", "tz_overlap_bonus", "timezone"),
    ("language", "Language", "language_bonus", "language"),
)


def transform_to_mentor_centric(
    output: MatchingOutput,
    mentors: list[MentorProfile],
) -> list[MentorCentricMatch]:
    """Pivot mentee-centric results into per-mentor lists of potential mentees.

    Every known mentor appears, even with no potential mentees. Mentees are
    sorted by score (best first); mentors by number of potential mentees,
    then by name.
    """
    by_mentor: dict[str, MentorCentricMatch] = {
        m.id: MentorCentricMatch(
            mentor_id=m.id,
            mentor_name=m.display_name,
            mentor_role=m.role or None,
            location_timezone=m.location_timezone,
            capacity_remaining=m.capacity_remaining,
        )
        for m in mentors
    }

    for result in output.results:
        for rank, rec in enumerate(result.recommendations, start=1):
            entry = by_mentor.get(rec.mentor_id)
            if entry is None:
                entry = MentorCentricMatch(
                    mentor_id=rec.mentor_id,
                    mentor_name=rec.mentor_name or rec.mentor_id,
                    capacity_remaining=rec.score.logistics.capacity_remaining or 0,
                )
                by_mentor[rec.mentor_id] = entry
            elif rec.mentor_name:
                entry.mentor_name = rec.mentor_name

            entry.potential_mentees.append(PotentialMentee(
                mentee_id=result.mentee_id,
                mentee_name=result.mentee_name or result.mentee_id,
                score=rec.score,
                rank_for_this_mentee=rank,
            ))

    pivot = list(by_mentor.values())
    for entry in pivot:
        entry.potential_mentees.sort(key=lambda p: -p.score.total_score)
    pivot.sort(key=lambda e: (-len(e.potential_mentees), e.mentor_name.lower()))
    return pivot


def get_score_components(
    score: MatchScore,
    scorer: MatchScorer | None = None,
) -> list[ScoreComponent]:
    """Labeled weighted components of a score, for breakdown charts."""
    scorer = scorer or MatchScorer()
    weights = scorer.weights_for(score.features)
    layout = (
        _CAPABILITY_COMPONENTS
        if score.features.schema_version == "capability"
        else _LEGACY_COMPONENTS
    )

    components = []
    for key, label, feature_field, weight_field in layout:
        value = getattr(score.features, feature_field)
        weight = getattr(weights, weight_field)
        components.append(ScoreComponent(
            key=key,
            label=label,
            value=round(value * weight),
            max_value=round(weight),
            percentage=round(value * 100, 1),
        ))
    return components


def validate_selections(
    selections: dict[str, list[str]],
    capacities: dict[str, int],
) -> SelectionValidation:
    """Check manual picks (mentor id -> selected mentee ids).

    Errors: a mentee picked by more than one mentor, or a mentor picked
    beyond capacity. Mentors with no picks are reported as warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    mentors_by_mentee: dict[str, list[str]] = {}
    for mentor_id, mentee_ids in selections.items():
        for mentee_id in dict.fromkeys(mentee_ids):
            mentors_by_mentee.setdefault(mentee_id, []).append(mentor_id)

    conflicting = sorted(m for m, picked_by in mentors_by_mentee.items() if len(picked_by) > 1)
    for mentee_id in conflicting:
        errors.append(
            f"Mentee {mentee_id} selected for multiple mentors: "
            + ", ".join(mentors_by_mentee[mentee_id])
        )

    over_capacity = []
    for mentor_id, mentee_ids in selections.items():
        selected = len(set(mentee_ids))
        capacity = capacities.get(mentor_id, 0)
        if selected > capacity:
            over_capacity.append(mentor_id)
            errors.append(f"Mentor {mentor_id} over capacity ({selected}/{capacity})")
        elif selected == 0:
            warnings.append(f"Mentor {mentor_id} has no selected mentees")

    return SelectionValidation(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        conflicting_mentees=conflicting,
        over_capacity_mentors=sorted(over_capacity),
    )
