"""Profile embeddings with a per-cohort cache.

Vectors are cached under (cohort, participant type, participant id) so repeat
matching runs over the same cohort never re-encode a profile. Only cache
misses are encoded, in batches of at most ``embedding_batch_size`` texts.

The sentence-transformers model is loaded lazily on first use (~90MB for the
default MiniLM model).
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from config import settings
from models.schemas.profiles import MenteeProfile, MentorProfile
from services.embedding_utils import (
    build_mentee_embedding_text,
    build_mentor_embedding_text,
)

logger = logging.getLogger(__name__)

Encoder = Callable[[list[str]], Sequence[Sequence[float]]]


class EmbeddingError(RuntimeError):
    """The embedding collaborator could not produce vectors."""


@dataclass
class EmbeddingCache:
    mentee_embeddings: dict[str, list[float]] = field(default_factory=dict)
    mentor_embeddings: dict[str, list[float]] = field(default_factory=dict)


class EmbeddingService:
    def __init__(
        self,
        model_name: str | None = None,
        batch_size: int | None = None,
        encoder: Encoder | None = None,
    ) -> None:
        self.model_name = model_name or settings.embedding_model_name
        self.batch_size = batch_size or settings.embedding_batch_size
        self._encoder = encoder
        self._model = None
        self._store: dict[tuple[str, str, str], list[float]] = {}

    def _get_model(self):
        """Load the sentence-transformers model lazily on first call."""
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer

                self._model = SentenceTransformer(self.model_name)
                logger.info("Embedding model %s loaded successfully", self.model_name)
            except Exception as e:
                logger.warning("Failed to load embedding model %s: %s", self.model_name, e)
                raise EmbeddingError(f"Embedding model unavailable: {e}") from e
        return self._model

    def encode(self, texts: list[str]) -> list[list[float]]:
        """Encode one batch of texts. Raises EmbeddingError on any failure."""
        try:
            if self._encoder is not None:
                raw = self._encoder(texts)
            else:
                raw = self._get_model().encode(
                    texts, convert_to_numpy=True, show_progress_bar=False
                )
            vectors = [[float(x) for x in vec] for vec in raw]
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Embedding generation failed: {e}") from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"Encoder returned {len(vectors)} vectors for {len(texts)} texts"
            )
        return vectors

    async def get_or_compute_embeddings(
        self,
        cohort_id: str,
        mentees: list[MenteeProfile],
        mentors: list[MentorProfile],
    ) -> EmbeddingCache:
        """Return vectors for every participant, encoding only cache misses."""
        cache = EmbeddingCache()
        missing: list[tuple[str, str, str]] = []  # (participant_type, id, text)

        for mentee in mentees:
            vector = self._store.get((cohort_id, "mentee", mentee.id))
            if vector is not None:
                cache.mentee_embeddings[mentee.id] = vector
            else:
                missing.append(("mentee", mentee.id, build_mentee_embedding_text(mentee)))

        for mentor in mentors:
            vector = self._store.get((cohort_id, "mentor", mentor.id))
            if vector is not None:
                cache.mentor_embeddings[mentor.id] = vector
            else:
                missing.append(("mentor", mentor.id, build_mentor_embedding_text(mentor)))

        logger.debug(
            "Embeddings for cohort %s: %d cached, %d to encode",
            cohort_id,
            len(cache.mentee_embeddings) + len(cache.mentor_embeddings),
            len(missing),
        )
        if not missing:
            return cache

        # Blank texts keep their slot so vectors stay index-aligned
        texts = [text.strip() or "N/A" for _, _, text in missing]
        vectors: list[list[float]] = []
        for start in range(0, len(texts), self.batch_size):
            batch = texts[start:start + self.batch_size]
            vectors.extend(await asyncio.to_thread(self.encode, batch))

        for (participant_type, participant_id, _), vector in zip(missing, vectors):
            self._store[(cohort_id, participant_type, participant_id)] = vector
            if participant_type == "mentee":
                cache.mentee_embeddings[participant_id] = vector
            else:
                cache.mentor_embeddings[participant_id] = vector

        return cache

    def invalidate(self, cohort_id: str) -> int:
        """Forget every cached vector of one cohort (e.g. after profile edits).

        Returns the number of vectors dropped.
        """
        stale = [k for k in self._store if k[0] == cohort_id]
        for key in stale:
            del self._store[key]
        return len(stale)
