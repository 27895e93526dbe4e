from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_embedding_service, get_explanation_service
from config import settings
from models.requests import ExplainRequest, MatchRequest, MentorViewRequest, SelectionValidationRequest
from models.responses import CacheClearResponse, ExplainResponse, HealthResponse, MatchResponse
from models.schemas.mentor_view import MentorCentricMatch, SelectionValidation
from services.embedding_service import EmbeddingService
from services.explanation_service import ExplanationService
from services.matching import mentor_view, orchestrator

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

MAX_PARTICIPANTS = 2000


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        gemini_configured=bool(settings.gemini_api_key),
        embedding_model=settings.embedding_model_name,
    )


@router.post("/match", response_model=MatchResponse)
@limiter.limit(settings.rate_limit)
async def match(
    request: Request,
    body: MatchRequest,
    embedding_service: EmbeddingService = Depends(get_embedding_service),
    explanation_service: ExplanationService = Depends(get_explanation_service),
):
    if len(body.mentees) > MAX_PARTICIPANTS or len(body.mentors) > MAX_PARTICIPANTS:
        raise HTTPException(
            status_code=400,
            detail=f"Too many participants (max {MAX_PARTICIPANTS} mentees and {MAX_PARTICIPANTS} mentors)",
        )

    try:
        return await orchestrator.run_matching(body, embedding_service, explanation_service)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/match/mentor-view", response_model=list[MentorCentricMatch])
async def mentor_centric_view(body: MentorViewRequest):
    return mentor_view.transform_to_mentor_centric(body.output, body.mentors)


@router.post("/match/validate-selections", response_model=SelectionValidation)
async def validate_selections(body: SelectionValidationRequest):
    return mentor_view.validate_selections(body.selections, body.capacities)


@router.post("/match/explain", response_model=ExplainResponse)
@limiter.limit(settings.rate_limit)
async def explain(
    request: Request,
    body: ExplainRequest,
    embedding_service: EmbeddingService = Depends(get_embedding_service),
    explanation_service: ExplanationService = Depends(get_explanation_service),
):
    return await orchestrator.explain_pair(body, embedding_service, explanation_service)


@router.delete("/cohorts/{cohort_id}/cache", response_model=CacheClearResponse)
async def clear_cohort_cache(
    cohort_id: str,
    embedding_service: EmbeddingService = Depends(get_embedding_service),
    explanation_service: ExplanationService = Depends(get_explanation_service),
):
    return CacheClearResponse(
        cohort_id=cohort_id,
        embeddings_cleared=embedding_service.invalidate(cohort_id),
        explanations_cleared=explanation_service.invalidate(cohort_id),
    )
