"""Deterministic seeded sampling strategies over row indices."""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping, Sequence

_MASK = (1 << 64) - 1
_U64_MAX_F = float(_MASK)


class Strategy(enum.Enum):
    """Sampling strategy."""

    RANDOM = "random"
    STRATIFIED = "stratified"
    SYSTEMATIC = "systematic"
    RESERVOIR = "reservoir"

    @classmethod
    def parse(cls, s: str) -> "Strategy":
        """Parse a strategy name case-insensitively; raise ValueError if unknown."""
        try:
            return cls(s.lower())
        except ValueError:
            raise ValueError(f"unknown sampling strategy: {s!r}") from None


class _Lcg:
    """64-bit linear congruential generator."""

    def __init__(self, seed: int) -> None:
        self.state = (seed + 1) & _MASK

    def next(self) -> int:
        self.state = (self.state * 6364136223846793005 + 1442695040888963407) & _MASK
        return self.state


def _round_half_away(x: float) -> int:
    r = math.floor(x)
    return r + 1 if x - r >= 0.5 else r


def random_sample(total: int, size: int, seed: int) -> list[int]:
    """Sorted random sample of ``size`` indices from ``range(total)``."""
    if size >= total:
        return list(range(total))
    indices = list(range(total))
    rng = _Lcg(seed)
    for i in range(size):
        j = i + rng.next() % (total - i)
        indices[i], indices[j] = indices[j], indices[i]
    return sorted(indices[:size])


def systematic_sample(total: int, size: int, seed: int) -> list[int]:
    """Every k-th index from a seeded random offset, k = total / size."""
    if size >= total:
        return list(range(total))
    if size == 0:
        return []
    k = total / size
    rng = _Lcg(seed)
    start = (rng.next() / _U64_MAX_F) * k
    return [idx for idx in (int(start + i * k) for i in range(size)) if idx < total]


def stratified_sample(
    strata: Mapping[str, Sequence[int]], size: int, seed: int
) -> list[int]:
    """Sample proportionally from each stratum; the last stratum takes the remainder."""
    total = sum(len(v) for v in strata.values())
    if size >= total:
        return sorted(i for v in strata.values() for i in v)

    result: list[int] = []
    remaining = size
    rng_seed = seed & _MASK
    ordered = sorted(strata.items())
    last = len(ordered) - 1

    for pos, (_, indices) in enumerate(ordered):
        if pos == last:
            stratum_size = remaining
        else:
            proportion = len(indices) / total
            stratum_size = min(
                _round_half_away(proportion * size), remaining, len(indices)
            )
        result.extend(
            indices[i] for i in random_sample(len(indices), stratum_size, rng_seed)
        )
        remaining = max(remaining - stratum_size, 0)
        rng_seed = (rng_seed + 1) & _MASK

    return sorted(result)


def reservoir_sample(total: int, size: int, seed: int) -> list[int]:
    """Single-pass reservoir sample (Algorithm R) of ``size`` indices."""
    if size >= total:
        return list(range(total))
    reservoir = list(range(size))
    rng = _Lcg(seed)
    for i in range(size, total):
        j = rng.next() % (i + 1)
        if j < size:
            reservoir[j] = i
    return sorted(reservoir)