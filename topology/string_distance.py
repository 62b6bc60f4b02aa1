"""String similarity metrics: Levenshtein, Jaro-Winkler and bigram cosine."""

from __future__ import annotations

import enum
import math
from collections import Counter


class Metric(enum.Enum):
    """Supported similarity metrics."""

    LEVENSHTEIN = "levenshtein"
    JARO_WINKLER = "jaro-winkler"
    COSINE = "cosine"

    @classmethod
    def parse(cls, s: str) -> "Metric":
        """Parse a metric name or alias case-insensitively; raise ValueError if unknown."""
        try:
            return _ALIASES[s.lower()]
        except KeyError:
            raise ValueError(f"unknown similarity metric: {s!r}") from None

    @classmethod
    def all_names(cls) -> list[str]:
        """Canonical names of all metrics."""
        return [m.value for m in cls]


_ALIASES = {
    "levenshtein": Metric.LEVENSHTEIN,
    "lev": Metric.LEVENSHTEIN,
    "jaro-winkler": Metric.JARO_WINKLER,
    "jaro_winkler": Metric.JARO_WINKLER,
    "jw": Metric.JARO_WINKLER,
    "cosine": Metric.COSINE,
    "cos": Metric.COSINE,
}


def _levenshtein(a: str, b: str) -> int:
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def normalized_levenshtein(a: str, b: str) -> float:
    """1 - edit distance / length of the longer string; 1.0 for two empty strings."""
    if not a and not b:
        return 1.0
    return 1.0 - _levenshtein(a, b) / max(len(a), len(b))


def _jaro(a: str, b: str) -> float:
    a_len, b_len = len(a), len(b)
    if a_len == 0 and b_len == 0:
        return 1.0
    if a_len == 0 or b_len == 0:
        return 0.0

    search_range = max(max(a_len, b_len) // 2 - 1, 0)
    a_flags = [False] * a_len
    b_flags = [False] * b_len
    matches = 0
    for i, ca in enumerate(a):
        low = max(i - search_range, 0)
        high = min(b_len, i + search_range + 1)
        for j in range(low, high):
            if not b_flags[j] and b[j] == ca:
                a_flags[i] = b_flags[j] = True
                matches += 1
                break
    if matches == 0:
        return 0.0

    a_matched = [ch for ch, flag in zip(a, a_flags) if flag]
    b_matched = [ch for ch, flag in zip(b, b_flags) if flag]
    transpositions = sum(1 for x, y in zip(a_matched, b_matched) if x != y) // 2

    return (
        matches / a_len + matches / b_len + (matches - transpositions) / matches
    ) / 3.0


def jaro_winkler(a: str, b: str) -> float:
    """Jaro similarity with a bonus for a common prefix of up to four characters."""
    sim = _jaro(a, b)
    if sim <= 0.7:
        return sim
    prefix = 0
    for x, y in zip(a[:4], b):
        if x != y:
            break
        prefix += 1
    return sim + 0.1 * prefix * (1.0 - sim)


def _char_bigrams(s: str) -> Counter[str]:
    lower = s.lower()
    return Counter(lower[i : i + 2] for i in range(len(lower) - 1))


def _cosine_similarity(a: str, b: str) -> float:
    bigrams_a = _char_bigrams(a)
    bigrams_b = _char_bigrams(b)
    if not bigrams_a or not bigrams_b:
        return 1.0 if a == b else 0.0
    dot = float(sum(count * bigrams_b[key] for key, count in bigrams_a.items()))
    norm_a = sum(c * c for c in bigrams_a.values())
    norm_b = sum(c * c for c in bigrams_b.values())
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))


def similarity(a: str, b: str, metric: Metric | str) -> float:
    """Similarity in [0, 1], 1.0 meaning identical, under the given metric."""
    if isinstance(metric, str):
        metric = Metric.parse(metric)
    if metric is Metric.LEVENSHTEIN:
        return normalized_levenshtein(a, b)
    if metric is Metric.JARO_WINKLER:
        return jaro_winkler(a, b)
    return _cosine_similarity(a, b)