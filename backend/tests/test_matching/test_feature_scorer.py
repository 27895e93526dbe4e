import pytest

from services.capability_clusters import build_cluster_index
from services.matching.feature_scorer import FeatureScorer
from services.matching.normalize import normalize_mentee, normalize_mentor


@pytest.fixture
def scorer():
    return FeatureScorer()


@pytest.fixture
def pair(make_mentee, make_mentor):
    def _pair(mentee=None, mentor=None):
        return (
            normalize_mentee(make_mentee(**(mentee or {}))),
            normalize_mentor(make_mentor(**(mentor or {}))),
        )
    return _pair


class TestCapabilityMatch:
    def test_exact_primary(self, scorer, pair):
        mentee, mentor = pair({"primary_capability": "Empathy"}, {"primary_capability": "empathy"})
        assert scorer.score(mentee, mentor).capability_match == 1.0

    def test_primary_offered_as_mentor_secondary(self, scorer, pair):
        mentee, mentor = pair(
            {"primary_capability": "Empathy"},
            {"primary_capability": "Business Acumen", "secondary_capabilities": ["Empathy"]},
        )
        assert scorer.score(mentee, mentor).capability_match == 1.0

    def test_exact_secondary(self, scorer, pair):
        mentee, mentor = pair(
            {"primary_capability": "Empathy", "secondary_capability": "Business Acumen"},
            {"primary_capability": "Business Acumen"},
        )
        assert scorer.score(mentee, mentor).capability_match == 0.7

    def test_primary_cluster(self, scorer, pair):
        mentee, mentor = pair({"primary_capability": "Empathy"}, {"primary_capability": "Conflict Resolution"})
        assert scorer.score(mentee, mentor).capability_match == 0.55

    def test_secondary_cluster(self, scorer, pair):
        mentee, mentor = pair(
            {"primary_capability": "Empathy", "secondary_capability": "Managing Up"},
            {
                "primary_capability": "Business Acumen",
                "secondary_capabilities": ["Cross-Functional Collaboration"],
            },
        )
        assert scorer.score(mentee, mentor).capability_match == 0.4

    def test_no_match(self, scorer, pair):
        mentee, mentor = pair({"primary_capability": "Empathy"}, {"primary_capability": "Business Acumen"})
        assert scorer.score(mentee, mentor).capability_match == 0.0

    def test_injected_clusters(self, pair):
        scorer = FeatureScorer(build_cluster_index({"Soft": ("Empathy", "Business Acumen")}))
        mentee, mentor = pair({"primary_capability": "Empathy"}, {"primary_capability": "Business Acumen"})
        assert scorer.score(mentee, mentor).capability_match == 0.55

    def test_capability_pair_features(self, scorer, pair):
        mentee, mentor = pair(
            {"primary_capability": "Empathy", "primary_capability_detail": "Handling difficult conversations"},
            {"primary_capability": "Empathy", "primary_capability_detail": "Difficult conversations with peers"},
        )
        features = scorer.score(mentee, mentor)
        assert features.schema_version == "capability"
        assert features.domain_match > 0
        assert features.industry_overlap == 0.0
        assert features.language_bonus == 0.0


class TestLegacyFeatures:
    def test_topic_jaccard(self, scorer, pair):
        mentee, mentor = pair(
            {"topics_to_learn": ["Leadership", "Communication"]},
            {"topics_to_mentor": ["leadership"]},
        )
        features = scorer.score(mentee, mentor)
        assert features.schema_version == "legacy"
        assert features.capability_match == pytest.approx(0.5)
        assert features.industry_overlap == 1.0
        assert features.domain_match == 0.0

    def test_mixed_schemas_use_topic_overlap(self, scorer, pair):
        mentee, mentor = pair(
            {"primary_capability": "Empathy"},
            {"topics_to_mentor": ["Empathy", "Negotiation"]},
        )
        features = scorer.score(mentee, mentor)
        assert features.schema_version == "legacy"
        assert features.capability_match == pytest.approx(0.5)

    def test_language_bonus_uses_first_language(self, scorer, pair):
        mentee, mentor = pair({"languages": ["Czech", "English"]}, {"languages": ["english", "czech"]})
        assert scorer.score(mentee, mentor).language_bonus == 1.0

        mentee, mentor = pair({"languages": ["Czech", "English"]}, {"languages": ["English"]})
        assert scorer.score(mentee, mentor).language_bonus == 0.0


class TestSharedFeatures:
    @pytest.mark.parametrize("mentee_exp,mentor_exp,expected", [
        ("3-5", "6-10", 1.0),
        ("3-5", "3-5", 1.0),
        ("3-5", "0-2", 0.5),
        ("6-10", "0-2", 0.25),
        ("10+", "0-2", 0.0),
    ])
    def test_seniority_fit(self, scorer, pair, mentee_exp, mentor_exp, expected):
        mentee, mentor = pair({"experience_years": mentee_exp}, {"experience_years": mentor_exp})
        assert scorer.score(mentee, mentor).role_seniority_fit == expected

    def test_timezone_bonus(self, scorer, pair):
        mentee, mentor = pair({}, {"location_timezone": "UK / Ireland (GMT)"})
        assert scorer.score(mentee, mentor).tz_overlap_bonus == 1.0

        mentee, mentor = pair({}, {"location_timezone": "US – Eastern Time (EST)"})
        assert scorer.score(mentee, mentor).tz_overlap_bonus == 0.0

        mentee, mentor = pair({"location_timezone": None}, {})
        assert scorer.score(mentee, mentor).tz_overlap_bonus == 0.0

    def test_capacity_penalty_on_last_slot(self, scorer, pair):
        mentee, mentor = pair({}, {"capacity_remaining": 1})
        assert scorer.score(mentee, mentor).capacity_penalty == pytest.approx(0.1)

        mentee, mentor = pair({}, {"capacity_remaining": 2})
        assert scorer.score(mentee, mentor).capacity_penalty == 0.0

    def test_semantic_is_clamped(self, scorer, pair):
        mentee, mentor = pair()
        assert scorer.score(mentee, mentor, semantic_similarity=-0.3).semantic_similarity == 0.0
        assert scorer.score(mentee, mentor, semantic_similarity=1.5).semantic_similarity == 1.0

    def test_semantic_from_vectors(self):
        assert FeatureScorer.semantic_from_vectors([1.0, 0.0], [-1.0, 0.0]) == 0.0
        assert FeatureScorer.semantic_from_vectors([1.0, 2.0], [2.0, 4.0]) == pytest.approx(1.0)
        assert FeatureScorer.semantic_from_vectors([1.0], [1.0, 0.0]) == 0.0

    def test_all_features_in_unit_interval(self, scorer, pair):
        mentee, mentor = pair(
            {"primary_capability": "Empathy", "experience_years": "10+"},
            {"primary_capability": "Empathy", "capacity_remaining": 1},
        )
        features = scorer.score(mentee, mentor, semantic_similarity=0.8)
        for name in (
            "capability_match", "domain_match", "role_seniority_fit",
            "semantic_similarity", "tz_overlap_bonus", "capacity_penalty",
        ):
            assert 0.0 <= getattr(features, name) <= 1.0
