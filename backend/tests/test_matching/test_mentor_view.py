import pytest

from models.schemas.matching import (
    MatchingFeatures,
    MatchingOutput,
    MatchingResult,
    MatchScore,
    Recommendation,
)
from services.matching.mentor_view import (
    get_score_components,
    transform_to_mentor_centric,
    validate_selections,
)


def _rec(mentor_id, total, name=None):
    return Recommendation(mentor_id=mentor_id, mentor_name=name, score=MatchScore(total_score=total))


@pytest.fixture
def output():
    return MatchingOutput(
        mode="top3",
        timestamp="2025-01-15T09:30:00+00:00",
        results=[
            MatchingResult(mentee_id="e1", mentee_name="Eve", recommendations=[
                _rec("m1", 80, "Mia"), _rec("m2", 60, "Max"),
            ]),
            MatchingResult(mentee_id="e2", recommendations=[
                _rec("m2", 70, "Max"), _rec("m1", 65, "Mia"),
            ]),
            MatchingResult(mentee_id="e3", recommendations=[_rec("m2", 50, "Max")]),
        ],
    )


class TestTransformToMentorCentric:
    def test_pivot(self, output, make_mentor):
        mentors = [make_mentor("m1", name="Mia"), make_mentor("m2", name="Max"), make_mentor("m3", name="Zoe")]

        pivot = transform_to_mentor_centric(output, mentors)

        assert [m.mentor_id for m in pivot] == ["m2", "m1", "m3"]
        max_entry = pivot[0]
        assert [p.mentee_id for p in max_entry.potential_mentees] == ["e2", "e1", "e3"]
        assert [p.rank_for_this_mentee for p in max_entry.potential_mentees] == [1, 2, 1]
        assert pivot[2].potential_mentees == []

    def test_ties_sorted_by_name(self, make_mentor):
        output = MatchingOutput(mode="top3", timestamp="t", results=[
            MatchingResult(mentee_id="e1", recommendations=[_rec("b", 50, "Bea"), _rec("a", 40, "Ann")]),
        ])
        pivot = transform_to_mentor_centric(output, [])
        assert [m.mentor_name for m in pivot] == ["Ann", "Bea"]

    def test_mentee_name_falls_back_to_id(self, output, make_mentor):
        pivot = transform_to_mentor_centric(output, [make_mentor("m1"), make_mentor("m2")])
        names = {p.mentee_id: p.mentee_name for m in pivot for p in m.potential_mentees}
        assert names["e1"] == "Eve"
        assert names["e2"] == "e2"

    def test_mentor_metadata_copied(self, output, make_mentor):
        mentor = make_mentor("m1", role="Director", capacity_remaining=4, location_timezone="Australia (AEST)")
        entry = next(m for m in transform_to_mentor_centric(output, [mentor]) if m.mentor_id == "m1")
        assert entry.mentor_role == "Director"
        assert entry.capacity_remaining == 4
        assert entry.location_timezone == "Australia (AEST)"


class TestScoreComponents:
    def test_capability_components(self):
        score = MatchScore(features=MatchingFeatures(
            capability_match=1.0,
            semantic_similarity=0.5,
            role_seniority_fit=0.25,
            schema_version="capability",
        ))
        components = {c.key: c for c in get_score_components(score)}
        assert list(components) == ["capability", "semantic", "domain", "seniority", "timezone"]
        assert components["capability"].value == 45
        assert components["capability"].max_value == 45
        assert components["semantic"].value == 15
        assert components["seniority"].percentage == 25.0

    def test_legacy_components(self):
        score = MatchScore(features=MatchingFeatures(industry_overlap=1.0, language_bonus=1.0))
        components = {c.key: c for c in get_score_components(score)}
        assert list(components) == ["topics", "semantic", "industry", "seniority", "timezone", "language"]
        assert components["industry"].value == 15
        assert components["language"].value == 5


class TestValidateSelections:
    def test_valid(self):
        result = validate_selections({"m1": ["e1", "e2"], "m2": ["e3"]}, {"m1": 2, "m2": 1})
        assert result.is_valid
        assert result.errors == []

    def test_mentee_selected_twice(self):
        result = validate_selections({"m1": ["e1"], "m2": ["e1"]}, {"m1": 1, "m2": 1})
        assert not result.is_valid
        assert result.conflicting_mentees == ["e1"]
        assert len(result.errors) == 1

    def test_over_capacity(self):
        result = validate_selections({"m1": ["e1", "e2"]}, {"m1": 1})
        assert not result.is_valid
        assert result.over_capacity_mentors == ["m1"]

    def test_unknown_mentor_has_no_capacity(self):
        result = validate_selections({"ghost": ["e1"]}, {})
        assert result.over_capacity_mentors == ["ghost"]

    def test_empty_selection_is_a_warning(self):
        result = validate_selections({"m1": []}, {"m1": 2})
        assert result.is_valid
        assert len(result.warnings) == 1
