"""Hierarchical agglomerative clustering over condensed distance matrices."""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


class Linkage(enum.Enum):
    """Linkage method for merging clusters."""

    SINGLE = "single"
    COMPLETE = "complete"
    AVERAGE = "average"
    WARD = "ward"

    @classmethod
    def parse(cls, s: str) -> "Linkage":
        """Parse a linkage name case-insensitively; raise ValueError if unknown."""
        try:
            return cls(s.lower())
        except ValueError:
            raise ValueError(f"unknown linkage method: {s!r}") from None


@dataclass(frozen=True)
class Merge:
    """One merge step: two cluster ids joined at a distance into a cluster of ``size``."""

    cluster_a: int
    cluster_b: int
    distance: float
    size: int


@dataclass
class Dendrogram:
    """Merge steps produced by clustering ``n`` items."""

    merges: list[Merge] = field(default_factory=list)
    n: int = 0

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation."""
        return {
            "merges": [
                {
                    "cluster_a": m.cluster_a,
                    "cluster_b": m.cluster_b,
                    "distance": m.distance,
                    "size": m.size,
                }
                for m in self.merges
            ],
            "n": self.n,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dendrogram":
        """Rebuild a dendrogram from :meth:`to_dict` output."""
        try:
            merges = [
                Merge(
                    cluster_a=int(m["cluster_a"]),
                    cluster_b=int(m["cluster_b"]),
                    distance=float(m["distance"]),
                    size=int(m["size"]),
                )
                for m in data["merges"]
            ]
            n = int(data["n"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid dendrogram data: {exc}") from exc
        return cls(merges=merges, n=n)


def _condensed_index(i: int, j: int, n: int) -> int:
    return i * n - i * (i + 1) // 2 + j - i - 1


def hac(distances: Sequence[float], n: int, linkage: Linkage) -> Dendrogram:
    """Cluster ``n`` items given a condensed upper-triangular distance matrix.

    Merged clusters receive ids ``n, n+1, ...`` in merge order.
    """
    if n < 1:
        raise ValueError("hac needs at least one item")
    expected = n * (n - 1) // 2
    if len(distances) < expected:
        raise ValueError(
            f"condensed matrix has {len(distances)} entries, expected {expected}"
        )

    dist = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            d = distances[_condensed_index(i, j, n)]
            dist[i][j] = d
            dist[j][i] = d

    active = [True] * n
    sizes = [1] * n
    cluster_id = list(range(n))
    next_id = n
    merges: list[Merge] = []

    for _ in range(n - 1):
        best_i = best_j = 0
        best_dist = math.inf
        for i in range(n):
            if not active[i]:
                continue
            row = dist[i]
            for j in range(i + 1, n):
                if active[j] and row[j] < best_dist:
                    best_dist = row[j]
                    best_i, best_j = i, j

        new_size = sizes[best_i] + sizes[best_j]
        merges.append(Merge(cluster_id[best_i], cluster_id[best_j], best_dist, new_size))

        ni = float(sizes[best_i])
        nj = float(sizes[best_j])
        for k in range(n):
            if not active[k] or k in (best_i, best_j):
                continue
            d_ik = dist[best_i][k]
            d_jk = dist[best_j][k]
            if linkage is Linkage.SINGLE:
                new_dist = min(d_ik, d_jk)
            elif linkage is Linkage.COMPLETE:
                new_dist = max(d_ik, d_jk)
            elif linkage is Linkage.AVERAGE:
                new_dist = (ni * d_ik + nj * d_jk) / (ni + nj)
            else:
                nk = float(sizes[k])
                total = ni + nj + nk
                new_dist = ((ni + nk) * d_ik + (nj + nk) * d_jk - nk * best_dist) / total
            dist[best_i][k] = new_dist
            dist[k][best_i] = new_dist

        active[best_j] = False
        sizes[best_i] = new_size
        cluster_id[best_i] = next_id
        next_id += 1

    return Dendrogram(merges=merges, n=n)


def cut_tree(dendrogram: Dendrogram, k: int) -> list[int]:
    """Apply the first ``n - k`` merges and label each item with a cluster 0, 1, ..."""
    n = dendrogram.n
    if k >= n:
        return list(range(n))

    parent: dict[int, int] = {}
    for merge in dendrogram.merges[: n - k]:
        new_id = len(parent) + n
        parent[merge.cluster_a] = new_id
        parent[merge.cluster_b] = new_id

    def find_root(node: int) -> int:
        while node in parent:
            node = parent[node]
        return node

    label_map: dict[int, int] = {}
    labels = []
    for item in range(n):
        root = find_root(item)
        labels.append(label_map.setdefault(root, len(label_map)))
    return labels


def cosine_distance_matrix(vectors: Sequence[Mapping[str, float]]) -> list[float]:
    """Condensed matrix of ``1 - cosine similarity`` between sparse vectors."""
    n = len(vectors)
    norms = [math.sqrt(sum(x * x for x in v.values())) for v in vectors]
    distances: list[float] = []
    for i in range(n):
        vi = vectors[i]
        for j in range(i + 1, n):
            vj = vectors[j]
            dot = sum(wi * vj[term] for term, wi in vi.items() if term in vj)
            if norms[i] > 0.0 and norms[j] > 0.0:
                sim = dot / (norms[i] * norms[j])
            else:
                sim = 0.0
            distances.append(1.0 - sim)
    return distances