from models.schemas.matching import MatchingFilters
from services.matching.hard_filter import is_eligible
from services.matching.normalize import normalize_mentee, normalize_mentor


class TestHardFilter:
    def test_nearby_pair_is_eligible(self, make_mentee, make_mentor):
        assert is_eligible(normalize_mentee(make_mentee()), normalize_mentor(make_mentor()))

    def test_timezone_too_far(self, make_mentee, make_mentor):
        mentee = normalize_mentee(make_mentee(location_timezone="Central Europe (CET)"))
        mentor = normalize_mentor(make_mentor(location_timezone="US – Pacific Time (PST)"))
        assert not is_eligible(mentee, mentor)
        assert is_eligible(mentee, mentor, MatchingFilters(max_timezone_difference_hours=9))

    def test_missing_timezone_skips_check(self, make_mentee, make_mentor):
        mentee = normalize_mentee(make_mentee(location_timezone=None))
        mentor = normalize_mentor(make_mentor(location_timezone="Australia (AEST)"))
        assert is_eligible(mentee, mentor)

    def test_no_capacity(self, make_mentee, make_mentor):
        mentee = normalize_mentee(make_mentee())
        mentor = normalize_mentor(make_mentor(capacity_remaining=0))
        assert not is_eligible(mentee, mentor)
        assert is_eligible(mentee, mentor, MatchingFilters(require_available_capacity=False))

    def test_negative_capacity(self, make_mentee, make_mentor):
        mentor = normalize_mentor(make_mentor(capacity_remaining=-1))
        assert not is_eligible(normalize_mentee(make_mentee()), mentor)

    def test_excluded_scenario(self, make_mentee, make_mentor):
        mentee = normalize_mentee(make_mentee(practice_scenarios=["Salary negotiation", "Giving feedback"]))
        mentor = normalize_mentor(make_mentor(excluded_scenarios=["salary Negotiation"]))
        assert not is_eligible(mentee, mentor)

    def test_unrelated_exclusions_are_fine(self, make_mentee, make_mentor):
        mentee = normalize_mentee(make_mentee(practice_scenarios=["Giving feedback"]))
        mentor = normalize_mentor(make_mentor(excluded_scenarios=["Salary negotiation"]))
        assert is_eligible(mentee, mentor)
