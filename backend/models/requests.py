from pydantic import BaseModel, Field

from models.schemas.matching import MatchingFilters, MatchingOutput, MatchingWeights, MatchMode
from models.schemas.profiles import MenteeProfile, MentorProfile


class MatchRequest(BaseModel):
    cohort_id: str = Field("default", min_length=1, description="Cohort the participants belong to")
    mentees: list[MenteeProfile] = []
    mentors: list[MentorProfile] = []
    mode: MatchMode = "batch"
    filters: MatchingFilters | None = None
    use_embeddings: bool = True
    explain: bool = False
    weights: MatchingWeights | None = Field(
        None, description="Overrides the capability-schema weight profile"
    )


class MentorViewRequest(BaseModel):
    output: MatchingOutput
    mentors: list[MentorProfile] = []


class SelectionValidationRequest(BaseModel):
    selections: dict[str, list[str]] = Field(..., description="Mentor id -> selected mentee ids")
    capacities: dict[str, int] = {}


class ExplainRequest(BaseModel):
    cohort_id: str = Field("default", min_length=1)
    mentee: MenteeProfile
    mentor: MentorProfile
