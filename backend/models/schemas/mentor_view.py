"""Mentor-centric pivot of a matching output, used for manual review boards."""

from pydantic import BaseModel

from models.schemas.matching import MatchScore


class PotentialMentee(BaseModel):
    mentee_id: str
    mentee_name: str
    score: MatchScore
    rank_for_this_mentee: int  # 1 = this mentor is the mentee's top choice


class MentorCentricMatch(BaseModel):
    mentor_id: str
    mentor_name: str
    mentor_role: str | None = None
    location_timezone: str | None = None
    capacity_remaining: int = 0
    potential_mentees: list[PotentialMentee] = []


class ScoreComponent(BaseModel):
    """One weighted feature of a score, for breakdown charts."""
    key: str
    label: str
    value: int  # weighted points, rounded
    max_value: int
    percentage: float  # raw feature value * 100


class SelectionValidation(BaseModel):
    is_valid: bool = True
    errors: list[str] = []
    warnings: list[str] = []
    conflicting_mentees: list[str] = []  # selected for more than one mentor
    over_capacity_mentors: list[str] = []
