"""SQLite-backed persistent cache for topology artifacts."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path

from topology.cache import ArtifactKind, CacheMeta

_U64 = 1 << 64
_I64_MAX = (1 << 63) - 1

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_artifacts (
    kind          TEXT NOT NULL,
    content_hash  INTEGER NOT NULL,
    args_hash     INTEGER NOT NULL,
    row_count     INTEGER NOT NULL,
    version       TEXT NOT NULL,
    created_at    INTEGER NOT NULL,
    payload       BLOB NOT NULL,
    UNIQUE(kind, content_hash, args_hash)
);
CREATE INDEX IF NOT EXISTS idx_cache_lookup
    ON cache_artifacts(kind, content_hash, args_hash);
"""


class StorageError(RuntimeError):
    """Raised when the cache database cannot be opened, read or written."""


def _to_signed(value: int) -> int:
    value %= _U64
    return value - _U64 if value > _I64_MAX else value


def _to_unsigned(value: int) -> int:
    return value % _U64


def _kind_name(kind: ArtifactKind | str) -> str:
    if isinstance(kind, ArtifactKind):
        return kind.value
    return ArtifactKind.parse(kind).value


@dataclass(frozen=True)
class ArtifactInfo:
    """Summary of one cached artifact."""

    kind: str
    content_hash: int
    args_hash: int
    row_count: int
    version: str
    created_at: int
    payload_bytes: int


class CacheDb:
    """Artifact cache keyed by ``(kind, content_hash, args_hash)``."""

    def __init__(self, path: str | Path) -> None:
        try:
            self._conn = sqlite3.connect(str(path))
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to open cache DB at '{path}': {exc}") from exc
        try:
            self._conn.execute("PRAGMA journal_mode = WAL")
            self._conn.execute("PRAGMA synchronous = NORMAL")
        except sqlite3.Error as exc:
            self._conn.close()
            raise StorageError(f"Failed to set PRAGMA: {exc}") from exc
        try:
            self._conn.executescript(_SCHEMA)
            self._conn.commit()
        except sqlite3.Error as exc:
            self._conn.close()
            raise StorageError(f"Failed to create cache schema: {exc}") from exc

    def get(
        self, kind: ArtifactKind | str, content_hash: int, args_hash: int
    ) -> tuple[CacheMeta, bytes] | None:
        """Return the cached metadata and payload, or None on a miss."""
        try:
            row = self._conn.execute(
                "SELECT row_count, version, created_at, payload "
                "FROM cache_artifacts "
                "WHERE kind = ? AND content_hash = ? AND args_hash = ?",
                (_kind_name(kind), _to_signed(content_hash), _to_signed(args_hash)),
            ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to query cache: {exc}") from exc
        if row is None:
            return None
        row_count, version, created_at, payload = row
        meta = CacheMeta(
            content_hash=_to_unsigned(content_hash),
            row_count=int(row_count),
            args_hash=_to_unsigned(args_hash),
            version=version,
            created_at=_to_unsigned(created_at),
        )
        return meta, bytes(payload)

    def put(self, kind: ArtifactKind | str, meta: CacheMeta, payload: bytes) -> None:
        """Insert or replace an artifact."""
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT INTO cache_artifacts "
                    "(kind, content_hash, args_hash, row_count, version, created_at, payload) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?) "
                    "ON CONFLICT(kind, content_hash, args_hash) "
                    "DO UPDATE SET row_count = excluded.row_count, "
                    "version = excluded.version, "
                    "created_at = excluded.created_at, "
                    "payload = excluded.payload",
                    (
                        _kind_name(kind),
                        _to_signed(meta.content_hash),
                        _to_signed(meta.args_hash),
                        _to_signed(meta.row_count),
                        meta.version,
                        _to_signed(meta.created_at),
                        sqlite3.Binary(bytes(payload)),
                    ),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to upsert cache artifact: {exc}") from exc

    def invalidate(self, kind: ArtifactKind | str | None = None) -> int:
        """Delete artifacts of one kind, or all when ``kind`` is None; return the count."""
        try:
            with self._conn:
                if kind is None:
                    cursor = self._conn.execute("DELETE FROM cache_artifacts")
                else:
                    cursor = self._conn.execute(
                        "DELETE FROM cache_artifacts WHERE kind = ?", (_kind_name(kind),)
                    )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to invalidate: {exc}") from exc
        return cursor.rowcount

    def info(self) -> list[ArtifactInfo]:
        """Summaries of all cached artifacts, newest first."""
        try:
            rows = self._conn.execute(
                "SELECT kind, content_hash, args_hash, row_count, version, created_at, "
                "length(payload) FROM cache_artifacts ORDER BY created_at DESC"
            ).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to query info: {exc}") from exc
        return [
            ArtifactInfo(
                kind=kind,
                content_hash=_to_unsigned(content_hash),
                args_hash=_to_unsigned(args_hash),
                row_count=int(row_count),
                version=version,
                created_at=_to_unsigned(created_at),
                payload_bytes=int(payload_bytes),
            )
            for kind, content_hash, args_hash, row_count, version, created_at, payload_bytes in rows
        ]

    def db_size_bytes(self) -> int:
        """Approximate database size: page count times page size."""
        try:
            (page_count,) = self._conn.execute("PRAGMA page_count").fetchone()
            (page_size,) = self._conn.execute("PRAGMA page_size").fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to get database size: {exc}") from exc
        return int(page_count) * int(page_size)

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "CacheDb":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()