"""Cache artifact kinds, metadata, and content/argument hashing."""

from __future__ import annotations

import dataclasses
import enum
import json
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from topology import simhash, tokenizer

VERSION = "0.1.0"


class ArtifactKind(enum.Enum):
    """Kinds of artifact stored in the cache."""

    CORPUS = "corpus"
    DENDROGRAM = "dendrogram"
    TAXONOMY = "taxonomy"
    FINGERPRINTS = "fingerprints"

    @classmethod
    def parse(cls, s: str) -> "ArtifactKind":
        """Parse an exact artifact kind name; raise ValueError if unknown."""
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"unknown artifact kind: {s!r}") from None


@dataclass
class CacheMeta:
    """Metadata stored alongside a cached artifact."""

    content_hash: int
    row_count: int
    args_hash: int
    version: str
    created_at: int

    @classmethod
    def create(cls, content_hash: int, row_count: int, args_hash: int) -> "CacheMeta":
        """Metadata stamped with the current version and Unix time."""
        return cls(
            content_hash=content_hash,
            row_count=row_count,
            args_hash=args_hash,
            version=VERSION,
            created_at=max(int(time.time()), 0),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CacheMeta":
        """Rebuild metadata from :meth:`to_dict` output."""
        try:
            return cls(
                content_hash=int(data["content_hash"]),
                row_count=int(data["row_count"]),
                args_hash=int(data["args_hash"]),
                version=str(data["version"]),
                created_at=int(data["created_at"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid cache metadata: {exc}") from exc


def content_hash(texts: Sequence[str]) -> int:
    """SimHash of all tokens of all texts; 0 for no texts."""
    if not texts:
        return 0
    all_tokens = [token for text in texts for token in tokenizer.tokenize(text)]
    return simhash.simhash_uniform(all_tokens)


def args_hash(args: Any) -> int:
    """SipHash of the compact JSON form of command arguments.

    Dataclass instances are serialized by their fields. Arguments that cannot
    be serialized hash as an empty string.
    """
    if dataclasses.is_dataclass(args) and not isinstance(args, type):
        args = dataclasses.asdict(args)
    try:
        text = json.dumps(args, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        text = ""
    return simhash.hash_str(text)


def is_valid(meta: CacheMeta, content_hash: int, args_hash: int) -> bool:
    """True if content hash, argument hash and version all match."""
    return (
        meta.content_hash == content_hash
        and meta.args_hash == args_hash
        and meta.version == VERSION
    )