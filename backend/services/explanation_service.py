"""Natural-language match explanations with a per-cohort cache.

Explanations are generated once per (cohort, mentee, mentor) and reused.
Failures are never cached, so a later call can retry.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from config import settings
from models.schemas.matching import MatchScore
from models.schemas.profiles import MenteeProfile, MentorProfile
from services import gemini_client
from services.prompt_builder import EXPLANATION_SYSTEM_PROMPT, build_explanation_prompt

logger = logging.getLogger(__name__)

Generator = Callable[[str, str | None], Awaitable[str | None]]

MatchToExplain = tuple[MenteeProfile, MentorProfile, MatchScore]


class ExplanationService:
    def __init__(
        self,
        generate: Generator | None = None,
        concurrency: int | None = None,
    ) -> None:
        self._generate = generate or gemini_client.generate_text
        self.concurrency = concurrency or settings.explanation_concurrency
        self._cache: dict[tuple[str, str, str], str] = {}

    async def get_or_generate(
        self,
        cohort_id: str,
        mentee: MenteeProfile,
        mentor: MentorProfile,
        score: MatchScore,
    ) -> str | None:
        key = (cohort_id, mentee.id, mentor.id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        prompt = build_explanation_prompt(mentee, mentor, score)
        try:
            explanation = await self._generate(prompt, EXPLANATION_SYSTEM_PROMPT)
        except Exception as e:
            logger.warning("Explanation failed for %s / %s: %s", mentee.id, mentor.id, e)
            return None

        if not explanation:
            logger.warning("No explanation generated for %s / %s", mentee.id, mentor.id)
            return None

        self._cache[key] = explanation
        return explanation

    async def generate_all(
        self,
        cohort_id: str,
        matches: list[MatchToExplain],
    ) -> dict[tuple[str, str], str]:
        """Explain many pairs, at most ``concurrency`` requests in flight.

        Returns ``{(mentee_id, mentor_id): explanation}`` for the pairs that
        succeeded.
        """
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _one(mentee: MenteeProfile, mentor: MentorProfile, score: MatchScore):
            async with semaphore:
                text = await self.get_or_generate(cohort_id, mentee, mentor, score)
            return (mentee.id, mentor.id), text

        results = await asyncio.gather(*(_one(*m) for m in matches))
        explanations = {key: text for key, text in results if text}
        logger.info("Generated %d/%d match explanations", len(explanations), len(matches))
        return explanations

    def invalidate(self, cohort_id: str) -> int:
        """Forget every cached explanation of one cohort. Returns how many."""
        stale = [k for k in self._cache if k[0] == cohort_id]
        for key in stale:
            del self._cache[key]
        return len(stale)
