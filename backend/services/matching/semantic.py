"""Semantic similarity source for one matching run.

Uses embedding cosines when both participants have a vector, and otherwise
falls back to TF-IDF keyword similarity over the profiles' goal/offer texts.
"""

from services.embedding_service import EmbeddingCache
from services.embedding_utils import keyword_similarity_matrix
from services.matching.feature_scorer import FeatureScorer
from services.matching.normalize import FeatureInput


class SemanticSimilarity:
    def __init__(self, embeddings: EmbeddingCache | None = None) -> None:
        self.embeddings = embeddings
        self._mentee_rows: dict[str, int] = {}
        self._mentor_cols: dict[str, int] = {}
        self._keyword = None

    def fit(self, mentees: list[FeatureInput], mentors: list[FeatureInput]) -> None:
        """Prepare the keyword fallback over the run's full population."""
        self._mentee_rows = {m.id: i for i, m in enumerate(mentees)}
        self._mentor_cols = {m.id: j for j, m in enumerate(mentors)}
        self._keyword = keyword_similarity_matrix(
            [m.text for m in mentees], [m.text for m in mentors]
        )

    def __call__(self, mentee: FeatureInput, mentor: FeatureInput) -> tuple[float, bool]:
        """Return (similarity, is_embedding_based) for one pair."""
        if self.embeddings is not None:
            a = self.embeddings.mentee_embeddings.get(mentee.id)
            b = self.embeddings.mentor_embeddings.get(mentor.id)
            if a is not None and b is not None:
                return FeatureScorer.semantic_from_vectors(a, b), True

        row = self._mentee_rows.get(mentee.id)
        col = self._mentor_cols.get(mentor.id)
        if self._keyword is None or row is None or col is None:
            # Pair outside the fitted population
            return float(keyword_similarity_matrix([mentee.text], [mentor.text])[0, 0]), False
        return float(self._keyword[row, col]), False
