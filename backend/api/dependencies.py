"""Shared dependencies for API routes."""

from functools import lru_cache

from services.embedding_service import EmbeddingService
from services.explanation_service import ExplanationService


@lru_cache
def get_embedding_service() -> EmbeddingService:
    return EmbeddingService()


@lru_cache
def get_explanation_service() -> ExplanationService:
    return ExplanationService()
