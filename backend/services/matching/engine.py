"""Matching engine: filter, score and rank mentors for every mentee.

Two output modes:

* ``batch``: mentees are processed in input order; each one is proposed its
  best mentor that still has in-run capacity, and that mentor's in-run
  counter is decremented. The caller's capacity values are never touched.
* ``top3``: every mentee independently gets its top-N eligible mentors for
  human review; nothing is assigned and no capacity is consumed.

The engine is synchronous and deterministic: identical inputs (including
the clock) give identical outputs.
"""

import logging
from collections import Counter
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from config import settings
from models.schemas.matching import (
    Logistics,
    MatchingFilters,
    MatchingOutput,
    MatchingResult,
    MatchingStats,
    MatchMode,
    MatchScore,
    ProposedAssignment,
    Recommendation,
)
from models.schemas.profiles import MenteeProfile, MentorProfile
from services import timezones
from services.embedding_service import EmbeddingCache
from services.matching.feature_scorer import TZ_BONUS_MAX_HOURS, FeatureScorer
from services.matching.hard_filter import is_eligible
from services.matching.match_scorer import MatchScorer, ranking_key
from services.matching.normalize import FeatureInput, normalize_mentee, normalize_mentor
from services.matching.semantic import SemanticSimilarity

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def default_filters() -> MatchingFilters:
    return MatchingFilters(
        max_timezone_difference_hours=settings.max_timezone_difference_hours,
        require_available_capacity=settings.require_available_capacity,
    )


class MatchingEngine:
    def __init__(
        self,
        filters: MatchingFilters | None = None,
        feature_scorer: FeatureScorer | None = None,
        match_scorer: MatchScorer | None = None,
        top_n: int | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.filters = filters or default_filters()
        self.feature_scorer = feature_scorer or FeatureScorer()
        self.match_scorer = match_scorer or MatchScorer()
        self.top_n = top_n if top_n is not None else settings.top_n
        if self.top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {self.top_n}")
        self.clock = clock

    # ------------------------------------------------------------------
    # Pair scoring
    # ------------------------------------------------------------------

    def score_pair(
        self,
        mentee: FeatureInput,
        mentor: FeatureInput,
        semantic: SemanticSimilarity,
    ) -> MatchScore:
        similarity, embedding_based = semantic(mentee, mentor)
        features = self.feature_scorer.score(mentee, mentor, similarity)
        score = self.match_scorer.score(features, is_embedding_based=embedding_based)

        risks = list(score.risks)
        if (
            mentee.timezone
            and mentor.timezone
            and timezones.distance_hours(mentee.timezone, mentor.timezone) > TZ_BONUS_MAX_HOURS
        ):
            risks.append("Timezone difference")

        mentor_languages = {l.strip().lower() for l in mentor.languages}
        shared_topics = [t for t in mentee.display_topics if t.lower() in mentor.topics]

        return score.model_copy(update={
            "risks": risks,
            "logistics": Logistics(
                timezone_mentee=mentee.timezone,
                timezone_mentor=mentor.timezone,
                languages_shared=[l for l in mentee.languages if l.strip().lower() in mentor_languages],
                capacity_remaining=mentor.capacity,
            ),
            "icebreaker": (
                f"Discuss shared interest in {shared_topics[0]}"
                if shared_topics
                else "Explore complementary experiences and goals"
            ),
        })

    def rank_mentors(
        self,
        mentee: FeatureInput,
        mentors: list[FeatureInput],
        semantic: SemanticSimilarity,
    ) -> list[tuple[FeatureInput, MatchScore]]:
        """Score every eligible mentor and sort best first with the tie-break rules."""
        scored = [
            (mentor, self.score_pair(mentee, mentor, semantic))
            for mentor in mentors
            if is_eligible(mentee, mentor, self.filters)
        ]
        scored.sort(key=lambda pair: ranking_key(pair[1], pair[0].capacity, pair[0].id))
        return scored

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def run(
        self,
        mentees: list[MenteeProfile],
        mentors: list[MentorProfile],
        mode: MatchMode = "batch",
        embeddings: EmbeddingCache | None = None,
    ) -> MatchingOutput:
        _require_unique_ids("Mentee", [m.id for m in mentees])
        _require_unique_ids("Mentor", [m.id for m in mentors])

        mentee_inputs = [normalize_mentee(m) for m in mentees]
        mentor_inputs = [normalize_mentor(m) for m in mentors]

        semantic = SemanticSimilarity(embeddings)
        semantic.fit(mentee_inputs, mentor_inputs)

        if mode == "batch":
            results, stats = self._run_batch(mentee_inputs, mentor_inputs, semantic)
        elif mode == "top3":
            results, stats = self._run_top_n(mentee_inputs, mentor_inputs, semantic)
        else:
            raise ValueError(f"Unknown matching mode: {mode}")

        logger.info(
            "Matching run (%s): %d mentees, %d mentors, %d eligible pairs, %d assigned",
            mode, stats.mentees_total, stats.mentors_total, stats.after_filters, stats.assigned,
        )
        return MatchingOutput(
            mode=mode,
            timestamp=self.clock().isoformat(),
            stats=stats,
            results=results,
        )

    def _run_batch(
        self,
        mentees: list[FeatureInput],
        mentors: list[FeatureInput],
        semantic: SemanticSimilarity,
    ) -> tuple[list[MatchingResult], MatchingStats]:
        stats = MatchingStats(mentees_total=len(mentees), mentors_total=len(mentors))
        live_capacity = {m.id: m.capacity for m in mentors}
        results: list[MatchingResult] = []
        assigned_scores: list[float] = []

        for mentee in mentees:
            available = [
                replace(m, capacity=live_capacity[m.id])
                for m in mentors
                if live_capacity[m.id] > 0
            ]
            stats.pairs_evaluated += len(available)

            ranked = self.rank_mentors(mentee, available, semantic)
            stats.after_filters += len(ranked)
            recommendations = self._recommendations(ranked)

            proposed = None
            if ranked:
                best_mentor, best_score = ranked[0]
                proposed = ProposedAssignment(mentor_id=best_mentor.id, mentor_name=best_mentor.name)
                live_capacity[best_mentor.id] -= 1
                assigned_scores.append(best_score.total_score)

            results.append(MatchingResult(
                mentee_id=mentee.id,
                mentee_name=mentee.name,
                recommendations=recommendations,
                proposed_assignment=proposed,
            ))

        stats.assigned = len(assigned_scores)
        stats.unassigned = len(mentees) - stats.assigned
        stats.average_score = _mean(assigned_scores)
        return results, stats

    def _run_top_n(
        self,
        mentees: list[FeatureInput],
        mentors: list[FeatureInput],
        semantic: SemanticSimilarity,
    ) -> tuple[list[MatchingResult], MatchingStats]:
        stats = MatchingStats(
            mentees_total=len(mentees),
            mentors_total=len(mentors),
            pairs_evaluated=len(mentees) * len(mentors),
        )
        results: list[MatchingResult] = []
        top_scores: list[float] = []

        for mentee in mentees:
            ranked = self.rank_mentors(mentee, mentors, semantic)
            stats.after_filters += len(ranked)
            if ranked:
                top_scores.append(ranked[0][1].total_score)
            else:
                stats.unassigned += 1

            results.append(MatchingResult(
                mentee_id=mentee.id,
                mentee_name=mentee.name,
                recommendations=self._recommendations(ranked),
            ))

        stats.average_score = _mean(top_scores)
        return results, stats

    def _recommendations(self, ranked: list[tuple[FeatureInput, MatchScore]]) -> list[Recommendation]:
        return [
            Recommendation(mentor_id=mentor.id, mentor_name=mentor.name, score=score)
            for mentor, score in ranked[:self.top_n]
        ]


def _require_unique_ids(kind: str, ids: list[str]) -> None:
    duplicates = sorted(i for i, n in Counter(ids).items() if n > 1)
    if duplicates:
        raise ValueError(f"{kind} ids must be unique within a matching run: {', '.join(duplicates)}")


def _mean(values: list[float]) -> float:
    return round(sum(values) / len(values), 2) if values else 0.0
