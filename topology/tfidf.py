"""Document corpus with TF-IDF vectors and BM25 scoring."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from typing import Any


class Corpus:
    """A growing collection of tokenized documents for TF-IDF and BM25."""

    def __init__(self) -> None:
        self.doc_terms: list[dict[str, int]] = []
        self.doc_freq: dict[str, int] = {}
        self.avg_dl: float = 0.0

    @property
    def num_docs(self) -> int:
        """Number of documents added so far."""
        return len(self.doc_terms)

    def _doc(self, doc_idx: int) -> dict[str, int]:
        if not 0 <= doc_idx < len(self.doc_terms):
            raise IndexError(f"document index {doc_idx} out of range")
        return self.doc_terms[doc_idx]

    def add_document(self, tokens: Iterable[str]) -> None:
        """Add a pre-tokenized document."""
        counts = dict(Counter(tokens))
        for term in counts:
            self.doc_freq[term] = self.doc_freq.get(term, 0) + 1
        self.doc_terms.append(counts)
        total_len = sum(sum(doc.values()) for doc in self.doc_terms)
        self.avg_dl = total_len / len(self.doc_terms)

    def idf(self, term: str) -> float:
        """Smoothed IDF: ln((N - df + 0.5) / (df + 0.5) + 1)."""
        df = float(self.doc_freq.get(term, 0))
        n = float(self.num_docs)
        return math.log((n - df + 0.5) / (df + 0.5) + 1.0)

    def tfidf_vector(self, doc_idx: int) -> dict[str, float]:
        """TF-IDF weight of every term in a document."""
        doc = self._doc(doc_idx)
        dl = sum(doc.values())
        return {term: (count / dl) * self.idf(term) for term, count in doc.items()}

    def bm25_score(
        self,
        doc_idx: int,
        query_terms: Sequence[str],
        k1: float = 1.2,
        b: float = 0.75,
    ) -> float:
        """BM25 relevance of a document to the query terms."""
        doc = self._doc(doc_idx)
        dl = float(sum(doc.values()))
        score = 0.0
        for term in query_terms:
            tf = float(doc.get(term, 0))
            if tf == 0.0:
                continue
            numerator = tf * (k1 + 1.0)
            denominator = tf + k1 * (1.0 - b + b * dl / self.avg_dl)
            score += self.idf(term) * numerator / denominator
        return score

    def top_terms(self, doc_idx: int, n: int) -> list[tuple[str, float]]:
        """The ``n`` highest-weighted TF-IDF terms of a document, highest first."""
        ranked = sorted(self.tfidf_vector(doc_idx).items(), key=lambda kv: kv[1], reverse=True)
        return ranked[:n]

    def token_weights(self, tokens: Sequence[str]) -> dict[str, float]:
        """TF-IDF weights of a token list scored against this corpus."""
        dl = float(len(tokens))
        return {
            term: (count / dl) * self.idf(term)
            for term, count in Counter(tokens).items()
        }

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation."""
        return {
            "doc_terms": [dict(doc) for doc in self.doc_terms],
            "doc_freq": dict(self.doc_freq),
            "num_docs": self.num_docs,
            "avg_dl": self.avg_dl,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Corpus":
        """Rebuild a corpus from :meth:`to_dict` output."""
        try:
            doc_terms = [{str(t): int(c) for t, c in doc.items()} for doc in data["doc_terms"]]
            doc_freq = {str(t): int(c) for t, c in data["doc_freq"].items()}
            num_docs = int(data["num_docs"])
            avg_dl = float(data["avg_dl"])
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"invalid corpus data: {exc}") from exc
        if num_docs != len(doc_terms):
            raise ValueError(
                f"invalid corpus data: num_docs {num_docs} != {len(doc_terms)} documents"
            )
        corpus = cls()
        corpus.doc_terms = doc_terms
        corpus.doc_freq = doc_freq
        corpus.avg_dl = avg_dl
        return corpus