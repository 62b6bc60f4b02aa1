"""Locality-sensitive hashing indexes for MinHash signatures and SimHash fingerprints."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from itertools import combinations

from topology.simhash import hash_u64s

_BAND_KEY1 = 0xCAFEBABE
_MASK = (1 << 64) - 1


def _hash_band(band_idx: int, values: Sequence[int]) -> int:
    return hash_u64s(values, band_idx, _BAND_KEY1)


def _extract_band(fingerprint: int, band_idx: int, bits_per_band: int) -> int:
    shift = band_idx * bits_per_band
    mask = (1 << bits_per_band) - 1
    return ((fingerprint & _MASK) >> shift) & mask


def _pairs_from_buckets(buckets: list[dict[int, list[int]]]) -> list[tuple[int, int]]:
    pairs: set[tuple[int, int]] = set()
    for bucket_map in buckets:
        for items in bucket_map.values():
            if len(items) < 2:
                continue
            for a, b in combinations(items, 2):
                pairs.add((min(a, b), max(a, b)))
    return sorted(pairs)


class LshIndex:
    """Banded LSH index over MinHash signatures.

    Signatures are split into ``bands`` bands of ``rows`` values; items that
    share any band hash are candidate near-neighbours.
    """

    def __init__(self, bands: int, rows: int) -> None:
        self.bands = bands
        self.rows = rows
        self._buckets: list[dict[int, list[int]]] = [
            defaultdict(list) for _ in range(bands)
        ]

    @classmethod
    def default_128(cls) -> "LshIndex":
        """Index for 128-permutation MinHash: 16 bands of 8 rows."""
        return cls(16, 8)

    def _band_hashes(self, signature: Sequence[int]):
        needed = self.bands * self.rows
        if len(signature) < needed:
            raise ValueError(
                f"Signature length {len(signature)} < bands*rows {needed}"
            )
        for band_idx in range(self.bands):
            start = band_idx * self.rows
            yield band_idx, _hash_band(band_idx, signature[start : start + self.rows])

    def insert(self, item_id: int, signature: Sequence[int]) -> None:
        """Add an item's signature to the index."""
        for band_idx, band_hash in self._band_hashes(signature):
            self._buckets[band_idx][band_hash].append(item_id)

    def query(self, signature: Sequence[int]) -> set[int]:
        """Item ids sharing at least one band with ``signature``."""
        candidates: set[int] = set()
        for band_idx, band_hash in self._band_hashes(signature):
            candidates.update(self._buckets[band_idx].get(band_hash, ()))
        return candidates

    def candidate_pairs(self) -> list[tuple[int, int]]:
        """Sorted, deduplicated pairs ``(i, j)`` with ``i < j`` sharing a band."""
        return _pairs_from_buckets(self._buckets)


class SimHashLshIndex:
    """LSH index splitting 64-bit SimHash fingerprints into bit bands."""

    def __init__(self, bands: int, bits_per_band: int) -> None:
        self.bands = bands
        self.bits_per_band = bits_per_band
        self._buckets: list[dict[int, list[int]]] = [
            defaultdict(list) for _ in range(bands)
        ]

    @classmethod
    def default_64(cls) -> "SimHashLshIndex":
        """16 bands of 4 bits, covering all 64 bits."""
        return cls(16, 4)

    def insert(self, item_id: int, fingerprint: int) -> None:
        """Add a fingerprint to the index."""
        for band_idx in range(self.bands):
            band_val = _extract_band(fingerprint, band_idx, self.bits_per_band)
            self._buckets[band_idx][band_val].append(item_id)

    def query(self, fingerprint: int) -> set[int]:
        """Item ids matching ``fingerprint`` on at least one band."""
        candidates: set[int] = set()
        for band_idx in range(self.bands):
            band_val = _extract_band(fingerprint, band_idx, self.bits_per_band)
            candidates.update(self._buckets[band_idx].get(band_val, ()))
        return candidates

    def candidate_pairs(self) -> list[tuple[int, int]]:
        """Sorted, deduplicated pairs ``(i, j)`` with ``i < j`` sharing a band."""
        return _pairs_from_buckets(self._buckets)