"""Pydantic contracts shared by the matching engine and the API."""

from models.schemas.profiles import MenteeProfile, MentorProfile
from models.schemas.matching import (
    MatchingFeatures,
    MatchingFilters,
    MatchingOutput,
    MatchingResult,
    MatchingStats,
    MatchingWeights,
    MatchScore,
)
from models.schemas.mentor_view import MentorCentricMatch, SelectionValidation

__all__ = [
    "MenteeProfile",
    "MentorProfile",
    "MatchingFeatures",
    "MatchingFilters",
    "MatchingOutput",
    "MatchingResult",
    "MatchingStats",
    "MatchingWeights",
    "MatchScore",
    "MentorCentricMatch",
    "SelectionValidation",
]
