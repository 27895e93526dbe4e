"""Orchestrator: one matching run end to end.

Pipeline:
1. Profile embeddings (optional; keyword similarity when unavailable)
2. Hard filter + feature scoring + ranking in the requested mode
3. AI explanations for the chosen pairs (optional, never blocks the result)
"""

import logging

from models.requests import ExplainRequest, MatchRequest
from models.responses import ExplainResponse, MatchResponse
from models.schemas.matching import MatchingOutput
from models.schemas.profiles import MenteeProfile, MentorProfile
from services.embedding_service import EmbeddingCache, EmbeddingError, EmbeddingService
from services.explanation_service import ExplanationService
from services.matching.engine import MatchingEngine
from services.matching.match_scorer import MatchScorer
from services.matching.normalize import normalize_mentee, normalize_mentor
from services.matching.semantic import SemanticSimilarity

logger = logging.getLogger(__name__)

KEYWORD_FALLBACK_NOTICE = (
    "Embedding service unavailable: semantic similarity computed from keyword overlap."
)


async def _fetch_embeddings(
    embedding_service: EmbeddingService,
    cohort_id: str,
    mentees: list[MenteeProfile],
    mentors: list[MentorProfile],
) -> EmbeddingCache | None:
    try:
        return await embedding_service.get_or_compute_embeddings(cohort_id, mentees, mentors)
    except EmbeddingError as e:
        logger.warning("Embeddings unavailable for cohort %s, using keyword similarity: %s", cohort_id, e)
        return None


def _build_engine(request: MatchRequest) -> MatchingEngine:
    scorer = MatchScorer(capability_weights=request.weights) if request.weights else None
    return MatchingEngine(filters=request.filters, match_scorer=scorer)


async def run_matching(
    request: MatchRequest,
    embedding_service: EmbeddingService | None = None,
    explanation_service: ExplanationService | None = None,
) -> MatchResponse:
    """Run matching for one cohort and return the output plus degradation flags."""
    notices: list[str] = []
    degraded = False
    embeddings = None

    if request.use_embeddings and embedding_service is not None:
        embeddings = await _fetch_embeddings(
            embedding_service, request.cohort_id, request.mentees, request.mentors
        )
        if embeddings is None:
            degraded = True
            notices.append(KEYWORD_FALLBACK_NOTICE)

    engine = _build_engine(request)
    output = engine.run(request.mentees, request.mentors, request.mode, embeddings)

    if request.explain and explanation_service is not None:
        missing = await _attach_explanations(output, request, explanation_service)
        if missing:
            notices.append(f"{missing} match explanation(s) could not be generated.")

    return MatchResponse(
        output=output,
        degraded=degraded,
        scoring_method="embedding" if embeddings is not None else "keyword",
        notices=notices,
    )


async def _attach_explanations(
    output: MatchingOutput,
    request: MatchRequest,
    explanation_service: ExplanationService,
) -> int:
    """Explain the top recommendation of every mentee. Returns how many failed."""
    mentees = {m.id: m for m in request.mentees}
    mentors = {m.id: m for m in request.mentors}

    # The proposed assignment in batch mode is always the first recommendation
    matches = [
        (mentees[r.mentee_id], mentors[r.recommendations[0].mentor_id], r.recommendations[0].score)
        for r in output.results
        if r.recommendations
    ]
    if not matches:
        return 0

    explanations = await explanation_service.generate_all(request.cohort_id, matches)
    for mentee, mentor, score in matches:
        score.ai_explanation = explanations.get((mentee.id, mentor.id))
    return len(matches) - len(explanations)


async def explain_pair(
    request: ExplainRequest,
    embedding_service: EmbeddingService | None = None,
    explanation_service: ExplanationService | None = None,
) -> ExplainResponse:
    """Score a single pair (no hard filter) and explain it."""
    embeddings = None
    if embedding_service is not None:
        embeddings = await _fetch_embeddings(
            embedding_service, request.cohort_id, [request.mentee], [request.mentor]
        )

    mentee = normalize_mentee(request.mentee)
    mentor = normalize_mentor(request.mentor)
    semantic = SemanticSimilarity(embeddings)
    semantic.fit([mentee], [mentor])
    score = MatchingEngine().score_pair(mentee, mentor, semantic)

    explanation = None
    if explanation_service is not None:
        explanation = await explanation_service.get_or_generate(
            request.cohort_id, request.mentee, request.mentor, score
        )
        score.ai_explanation = explanation

    return ExplainResponse(score=score, explanation=explanation)
