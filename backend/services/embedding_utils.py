"""Vector and text helpers shared by the scorer and the embedding service."""

import re
from typing import Sequence

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from models.schemas.profiles import MenteeProfile, MentorProfile

_WORD_RE = re.compile(r"[a-z0-9][a-z0-9'&+-]*")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of two equal-length vectors.

    Returns 0.0 on length mismatch, empty vectors or a zero norm.
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def keyword_similarity_matrix(left_texts: list[str], right_texts: list[str]) -> np.ndarray:
    """TF-IDF cosine of every left text against every right text.

    The vectorizer is fitted once over both sides so scores within one
    matching run share the same vocabulary. Empty texts score 0.
    """
    shape = (len(left_texts), len(right_texts))
    corpus = left_texts + right_texts
    if not left_texts or not right_texts or not any(t.strip() for t in corpus):
        return np.zeros(shape)

    vectorizer = TfidfVectorizer(
        stop_words="english",
        sublinear_tf=True,
        ngram_range=(1, 2),
    )
    try:
        tfidf_matrix = vectorizer.fit_transform(corpus)
    except ValueError:
        # Only stop words in the corpus: empty vocabulary
        return np.zeros(shape)

    n = len(left_texts)
    return sklearn_cosine(tfidf_matrix[:n], tfidf_matrix[n:])


def significant_words(text: str | None) -> set[str]:
    """Lowercased words longer than three characters."""
    if not text:
        return set()
    return {w for w in _WORD_RE.findall(text.lower()) if len(w) > 3}


def word_overlap(text_a: str | None, text_b: str | None) -> float:
    """Jaccard overlap of the significant words of two texts."""
    words_a = significant_words(text_a)
    words_b = significant_words(text_b)
    if not words_a or not words_b:
        return 0.0
    return len(words_a & words_b) / len(words_a | words_b)


def build_mentee_embedding_text(mentee: MenteeProfile) -> str:
    """Concatenate the most semantically meaningful mentee fields."""
    topics = list(mentee.topics_to_learn)
    for capability in (mentee.primary_capability, mentee.secondary_capability):
        if capability and capability not in topics:
            topics.append(capability)

    parts = [
        mentee.goals_text or "",
        mentee.main_reason or "",
        mentee.motivation or "",
        mentee.expectations or "",
        f"Topics: {', '.join(topics)}" if topics else "",
        mentee.primary_capability_detail or "",
        mentee.secondary_capability_detail or "",
        mentee.desired_qualities or "",
    ]
    return ". ".join(p for p in parts if p)


def build_mentor_embedding_text(mentor: MentorProfile) -> str:
    """Concatenate the most semantically meaningful mentor fields."""
    topics = list(mentor.topics_to_mentor)
    for capability in [mentor.primary_capability, *mentor.secondary_capabilities]:
        if capability and capability not in topics:
            topics.append(capability)

    parts = [
        mentor.bio_text or "",
        mentor.motivation or "",
        mentor.expectations or "",
        f"Topics: {', '.join(topics)}" if topics else "",
        mentor.primary_capability_detail or "",
        mentor.secondary_capability_detail or "",
        f"Style: {mentor.mentoring_style}" if mentor.mentoring_style else "",
    ]
    return ". ".join(p for p in parts if p)
