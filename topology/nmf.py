"""Non-negative matrix factorization for topic modelling."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

_EPS = 1e-10

Matrix = list[list[float]]


@dataclass
class NmfResult:
    """Factorization V ≈ W × H of a document-term matrix.

    ``doc_topics`` is W (documents × k), ``topic_terms`` is H (k × terms).
    """

    doc_topics: Matrix
    topic_terms: Matrix
    vocabulary: list[str]
    k: int

    def top_terms(self, topic: int, n: int) -> list[tuple[str, float]]:
        """The ``n`` highest-weighted terms of a topic; empty if the topic is out of range."""
        if not 0 <= topic < self.k:
            return []
        ranked = sorted(
            zip(self.vocabulary, self.topic_terms[topic]),
            key=lambda tw: tw[1],
            reverse=True,
        )
        return ranked[:n]

    def dominant_topics(self) -> list[int]:
        """Index of the heaviest topic per document; ties go to the later topic."""
        result = []
        for row in self.doc_topics:
            best = 0
            for i, value in enumerate(row):
                if value >= row[best]:
                    best = i
            result.append(best)
        return result


def _transpose(a: Matrix) -> Matrix:
    return [list(col) for col in zip(*a)]


def _dot(x: Sequence[float], y: Sequence[float]) -> float:
    return sum(p * q for p, q in zip(x, y))


def _mul_at_b(a: Matrix, b: Matrix) -> Matrix:
    """Aᵀ × B."""
    at = _transpose(a)
    bt = _transpose(b)
    return [[_dot(col_a, col_b) for col_b in bt] for col_a in at]


def _mul(a: Matrix, b: Matrix) -> Matrix:
    """A × B."""
    bt = _transpose(b)
    return [[_dot(row, col) for col in bt] for row in a]


def _mul_a_bt(a: Matrix, b: Matrix) -> Matrix:
    """A × Bᵀ."""
    return [[_dot(row_a, row_b) for row_b in b] for row_a in a]


def nmf(
    tfidf_vectors: Sequence[Mapping[str, float]],
    k: int,
    max_iter: int = 200,
    vocab_limit: int = 5000,
) -> NmfResult:
    """Factorize sparse TF-IDF vectors into ``k`` topics with multiplicative updates.

    The vocabulary keeps the ``vocab_limit`` terms with the highest document frequency.
    """
    n_docs = len(tfidf_vectors)

    doc_freq: dict[str, int] = {}
    for vec in tfidf_vectors:
        for term in vec:
            doc_freq[term] = doc_freq.get(term, 0) + 1
    ranked = sorted(doc_freq.items(), key=lambda tc: tc[1], reverse=True)
    vocabulary = [term for term, _ in ranked[:vocab_limit]]
    n_terms = len(vocabulary)
    term_idx = {term: i for i, term in enumerate(vocabulary)}

    v = [[0.0] * n_terms for _ in range(n_docs)]
    for row, vec in zip(v, tfidf_vectors):
        for term, weight in vec.items():
            idx = term_idx.get(term)
            if idx is not None:
                row[idx] = weight

    if n_docs == 0 or n_terms == 0 or k == 0:
        return NmfResult(
            doc_topics=[[0.0] * k for _ in range(n_docs)],
            topic_terms=[[0.0] * n_terms for _ in range(k)],
            vocabulary=vocabulary,
            k=k,
        )

    w = [
        [0.1 + 0.01 * ((i * k + j) % 100) / 100.0 for j in range(k)]
        for i in range(n_docs)
    ]
    h = [
        [0.1 + 0.01 * ((i * n_terms + j) % 100) / 100.0 for j in range(n_terms)]
        for i in range(k)
    ]

    for _ in range(max_iter):
        wt_v = _mul_at_b(w, v)
        wtw_h = _mul(_mul_at_b(w, w), h)
        h = [
            [hv * num / (den + _EPS) for hv, num, den in zip(h_row, n_row, d_row)]
            for h_row, n_row, d_row in zip(h, wt_v, wtw_h)
        ]

        v_ht = _mul_a_bt(v, h)
        wh_ht = _mul_a_bt(_mul(w, h), h)
        w = [
            [wv * num / (den + _EPS) for wv, num, den in zip(w_row, n_row, d_row)]
            for w_row, n_row, d_row in zip(w, v_ht, wh_ht)
        ]

    return NmfResult(doc_topics=w, topic_terms=h, vocabulary=vocabulary, k=k)