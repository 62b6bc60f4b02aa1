"""MinHash signatures for Jaccard similarity estimation."""

from __future__ import annotations

from collections.abc import Sequence

from topology.simhash import siphash13

DEFAULT_NUM_PERM = 128
_MASK = (1 << 64) - 1
U64_MAX = _MASK


class MinHasher:
    """Computes MinHash signatures using a family of keyed SipHash functions."""

    def __init__(self, num_perm: int = DEFAULT_NUM_PERM) -> None:
        self.num_perm = num_perm
        self.seeds: list[tuple[int, int]] = [
            (
                (i * 6364136223846793005 + 1) & _MASK,
                (i * 1442695040888963407 + 7) & _MASK,
            )
            for i in range(num_perm)
        ]

    @classmethod
    def with_default_perm(cls) -> "MinHasher":
        """A hasher with the default 128 permutations."""
        return cls(DEFAULT_NUM_PERM)

    def signature(self, tokens: Sequence[str]) -> list[int]:
        """Minimum hash value per permutation over the given tokens."""
        sig = [U64_MAX] * self.num_perm
        for token in tokens:
            data = token.encode("utf-8") + b"\xff"
            for i, (key0, key1) in enumerate(self.seeds):
                h = siphash13(data, key0, key1)
                if h < sig[i]:
                    sig[i] = h
        return sig

    def jaccard(self, sig_a: Sequence[int], sig_b: Sequence[int]) -> float:
        """Estimate Jaccard similarity as the fraction of matching positions."""
        if len(sig_a) != len(sig_b):
            raise ValueError(
                f"signature lengths differ: {len(sig_a)} != {len(sig_b)}"
            )
        if not sig_a:
            return float("nan")
        matches = sum(1 for a, b in zip(sig_a, sig_b) if a == b)
        return matches / len(sig_a)