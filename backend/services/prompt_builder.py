"""Prompt templates for Gemini match explanations."""

from models.schemas.matching import MatchScore
from models.schemas.profiles import MenteeProfile, MentorProfile
from services.matching.mentor_view import get_score_components

EXPLANATION_SYSTEM_PROMPT = (
    "You are a mentoring program coordinator. Given a mentee's profile and a "
    "mentor's profile along with their compatibility scores, write 2-3 sentences "
    "explaining why this mentor-mentee pair is a good match. Focus on "
    "complementary goals and shared interests, and mention practical logistics "
    "where relevant. Be specific and encouraging but honest; if there are "
    "concerns, mention them diplomatically. Do not use bullet points or "
    "formatting, write in flowing prose."
)


def _mentee_topics(mentee: MenteeProfile) -> list[str]:
    if mentee.primary_capability:
        return [c for c in (mentee.primary_capability, mentee.secondary_capability) if c]
    return list(mentee.topics_to_learn)


def _mentor_topics(mentor: MentorProfile) -> list[str]:
    if mentor.primary_capability:
        return [mentor.primary_capability, *mentor.secondary_capabilities]
    return list(mentor.topics_to_mentor)


def build_explanation_prompt(
    mentee: MenteeProfile,
    mentor: MentorProfile,
    score: MatchScore,
) -> str:
    """Profile lines for both participants followed by the score breakdown."""
    lines = ["MENTEE:"]
    if mentee.role:
        lines.append(f"Role: {mentee.role}")
    if mentee.experience_years is not None:
        lines.append(f"Experience: {mentee.experience_years}")
    if mentee.goals_text:
        lines.append(f"Goals: {mentee.goals_text}")
    topics = _mentee_topics(mentee)
    if topics:
        lines.append(f"Topics they want to develop: {', '.join(topics)}")
    if mentee.motivation:
        lines.append(f"Motivation: {mentee.motivation}")
    if mentee.location_timezone:
        lines.append(f"Timezone: {mentee.location_timezone}")
    if mentee.languages:
        lines.append(f"Languages: {', '.join(mentee.languages)}")

    lines += ["", "MENTOR:"]
    if mentor.role:
        lines.append(f"Role: {mentor.role}")
    if mentor.experience_years is not None:
        lines.append(f"Experience: {mentor.experience_years}")
    if mentor.bio_text:
        lines.append(f"Bio: {mentor.bio_text}")
    topics = _mentor_topics(mentor)
    if topics:
        lines.append(f"Topics they mentor: {', '.join(topics)}")
    if mentor.mentoring_style:
        lines.append(f"Mentoring style: {mentor.mentoring_style}")
    if mentor.motivation:
        lines.append(f"Motivation: {mentor.motivation}")
    if mentor.location_timezone:
        lines.append(f"Timezone: {mentor.location_timezone}")
    if mentor.languages:
        lines.append(f"Languages: {', '.join(mentor.languages)}")

    lines += ["", "MATCH SCORES:", f"Total: {round(score.total_score)}/100"]
    for component in get_score_components(score):
        lines.append(f"{component.label}: {round(component.percentage)}%")
    if score.risks:
        lines.append(f"Concerns: {', '.join(score.risks)}")

    return "\n".join(lines)
