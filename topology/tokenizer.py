"""Word tokenization, character shingles and word n-grams."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import regex

_WORD_BOUNDARY = regex.compile(r"\b", flags=regex.WORD | regex.V1)

STOPWORDS = frozenset(
    {
        "a", "an", "the", "is", "it", "of", "to", "in", "for", "on", "with",
        "at", "by", "from", "as", "or", "and", "but", "not", "be", "are",
        "was", "were", "been", "being", "have", "has", "had", "do", "does",
        "did", "will", "would", "could", "should", "may", "might", "shall",
        "can", "this", "that", "these", "those", "there", "here", "where",
        "when", "what", "which", "who", "whom", "how", "all", "each", "every",
        "both", "few", "more", "most", "other", "some", "such", "no", "nor",
        "only", "own", "same", "so", "than", "too", "very", "just", "because",
        "about", "into", "through", "during", "before", "after", "above", "below",
        "between", "under", "again", "further", "then", "once", "any", "its",
        "your", "our", "their", "his", "her", "my", "if", "up", "out", "also",
    }
)


def _unicode_words(text: str) -> Iterator[str]:
    """Yield the word segments of ``text`` that contain an alphanumeric character."""
    for segment in _WORD_BOUNDARY.split(text):
        if any(ch.isalnum() for ch in segment):
            yield segment


def is_stopword(word: str) -> bool:
    """Return True if ``word`` is a common English stopword."""
    return word in STOPWORDS


def tokenize(text: str) -> list[str]:
    """Split text into lowercase words, dropping stopwords and one-byte tokens."""
    tokens = []
    for word in _unicode_words(text):
        lowered = word.lower()
        if len(lowered.encode("utf-8")) >= 2 and not is_stopword(lowered):
            tokens.append(lowered)
    return tokens


def shingles(text: str, n: int) -> list[str]:
    """Return the lowercase character n-grams of ``text``."""
    if n <= 0:
        raise ValueError("shingle size must be positive")
    lower = text.lower()
    if len(lower) < n:
        return [lower]
    return [lower[i : i + n] for i in range(len(lower) - n + 1)]


def word_ngrams(tokens: Sequence[str], n: int) -> list[str]:
    """Return space-joined word n-grams from a token list."""
    if n <= 0:
        raise ValueError("n-gram size must be positive")
    if len(tokens) < n:
        return [" ".join(tokens)]
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]