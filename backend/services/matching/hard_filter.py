"""Eligibility gate applied to every (mentee, mentor) pair before scoring."""

from models.schemas.matching import MatchingFilters
from services import timezones
from services.matching.normalize import FeatureInput

DEFAULT_FILTERS = MatchingFilters()


def is_eligible(
    mentee: FeatureInput,
    mentor: FeatureInput,
    filters: MatchingFilters = DEFAULT_FILTERS,
) -> bool:
    """True when the pair passes every hard rule.

    1. Timezone distance within ``max_timezone_difference_hours`` (skipped
       when either side has no timezone label).
    2. Mentor has capacity left, if ``require_available_capacity``.
    3. None of the mentee's practice scenarios is excluded by the mentor.
    """
    if mentee.timezone and mentor.timezone:
        distance = timezones.distance_hours(mentee.timezone, mentor.timezone)
        if distance > filters.max_timezone_difference_hours:
            return False

    if filters.require_available_capacity and mentor.capacity <= 0:
        return False

    if mentee.practice_scenarios & mentor.excluded_scenarios:
        return False

    return True
