"""Participant profiles as imported into a cohort.

Two survey generations coexist in the same cohorts:

* legacy profiles only carry free-text ``topics_to_learn`` / ``topics_to_mentor``
* capability profiles carry ``primary_capability`` (plus secondaries) drawn
  from the fixed capability vocabulary in ``services.capability_clusters``
"""

from pydantic import BaseModel, Field


class MenteeProfile(BaseModel):
    """A mentee as stored by the cohort collaborator."""
    id: str = Field(..., min_length=1)
    name: str | None = None
    role: str = ""
    experience_years: str | float | None = None  # "3–5", "10+", 4, ...
    location_timezone: str | None = None
    languages: list[str] = []
    industry: str | None = None

    # Legacy schema
    topics_to_learn: list[str] = []

    # Capability schema
    primary_capability: str | None = None
    secondary_capability: str | None = None
    primary_capability_detail: str | None = None
    secondary_capability_detail: str | None = None

    # Free-text goals used for semantic similarity
    goals_text: str | None = None
    main_reason: str | None = None
    motivation: str | None = None
    expectations: str | None = None
    desired_qualities: str | None = None

    practice_scenarios: list[str] = []

    @property
    def display_name(self) -> str:
        return self.name or self.id


class MentorProfile(BaseModel):
    """A mentor as stored by the cohort collaborator."""
    id: str = Field(..., min_length=1)
    name: str | None = None
    role: str = ""
    experience_years: str | float | None = None
    location_timezone: str | None = None
    languages: list[str] = []
    industry: str | None = None

    # Legacy schema
    topics_to_mentor: list[str] = []

    # Capability schema
    primary_capability: str | None = None
    secondary_capabilities: list[str] = []
    primary_capability_detail: str | None = None
    secondary_capability_detail: str | None = None

    # Negative values are tolerated: dashboards show them as "over capacity"
    capacity_remaining: int = 0

    bio_text: str | None = None
    motivation: str | None = None
    expectations: str | None = None
    mentoring_style: str | None = None

    practice_scenarios: list[str] = []
    excluded_scenarios: list[str] = []  # scenarios the mentor will not coach on

    @property
    def display_name(self) -> str:
        return self.name or self.id
