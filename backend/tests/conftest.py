"""Shared test fixtures: profile factories, a fixed clock and a fake encoder."""

from datetime import datetime, timezone

import pytest

from models.schemas.profiles import MenteeProfile, MentorProfile

FIXED_NOW = datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_mentee():
    """Factory for mentee profiles with sensible defaults."""
    def _make(mentee_id: str = "mentee-1", **overrides) -> MenteeProfile:
        data = {
            "id": mentee_id,
            "name": f"Mentee {mentee_id}",
            "role": "Software Engineer",
            "experience_years": "3-5",
            "location_timezone": "Central Europe (CET)",
            "languages": ["English"],
        }
        data.update(overrides)
        return MenteeProfile(**data)
    return _make


@pytest.fixture
def make_mentor():
    """Factory for mentor profiles with sensible defaults."""
    def _make(mentor_id: str = "mentor-1", **overrides) -> MentorProfile:
        data = {
            "id": mentor_id,
            "name": f"Mentor {mentor_id}",
            "role": "Engineering Manager",
            "experience_years": "6-10",
            "location_timezone": "Central Europe (CET)",
            "languages": ["English"],
            "capacity_remaining": 2,
        }
        data.update(overrides)
        return MentorProfile(**data)
    return _make


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


class FakeEncoder:
    """Deterministic stand-in for a sentence-transformers model."""

    def __init__(self):
        self.calls: list[list[str]] = []

    def __call__(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [[1.0, float(len(t) % 7) + 1.0, float(t.count(" ") % 5)] for t in texts]


@pytest.fixture
def fake_encoder():
    return FakeEncoder()
