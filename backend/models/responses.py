from typing import Literal

from pydantic import BaseModel

from models.schemas.matching import MatchingOutput, MatchScore


class HealthResponse(BaseModel):
    status: str = "ok"
    gemini_configured: bool = False
    embedding_model: str = ""


class MatchResponse(BaseModel):
    output: MatchingOutput
    degraded: bool = False  # embeddings were requested but unavailable
    scoring_method: Literal["embedding", "keyword"] = "keyword"
    notices: list[str] = []


class ExplainResponse(BaseModel):
    score: MatchScore
    explanation: str | None = None


class CacheClearResponse(BaseModel):
    cohort_id: str
    embeddings_cleared: int = 0
    explanations_cleared: int = 0
