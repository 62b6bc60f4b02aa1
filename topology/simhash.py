"""SipHash-1-3 hashing and 64-bit SimHash fingerprints."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import regex

BITS = 64
_MASK = (1 << 64) - 1
_HEX_RE = regex.compile(r"\+?[0-9a-fA-F]+")


def _rotl(x: int, b: int) -> int:
    return ((x << b) | (x >> (64 - b))) & _MASK


def _siphash(data: bytes, key0: int, key1: int, c_rounds: int, d_rounds: int) -> int:
    k0 = key0 & _MASK
    k1 = key1 & _MASK
    v0 = k0 ^ 0x736F6D6570736575
    v1 = k1 ^ 0x646F72616E646F6D
    v2 = k0 ^ 0x6C7967656E657261
    v3 = k1 ^ 0x7465646279746573

    def sip_round() -> None:
        nonlocal v0, v1, v2, v3
        v0 = (v0 + v1) & _MASK
        v1 = _rotl(v1, 13) ^ v0
        v0 = _rotl(v0, 32)
        v2 = (v2 + v3) & _MASK
        v3 = _rotl(v3, 16) ^ v2
        v0 = (v0 + v3) & _MASK
        v3 = _rotl(v3, 21) ^ v0
        v2 = (v2 + v1) & _MASK
        v1 = _rotl(v1, 17) ^ v2
        v2 = _rotl(v2, 32)

    length = len(data)
    full = length - length % 8
    for start in range(0, full, 8):
        m = int.from_bytes(data[start : start + 8], "little")
        v3 ^= m
        for _ in range(c_rounds):
            sip_round()
        v0 ^= m

    last = ((length & 0xFF) << 56) | int.from_bytes(data[full:], "little")
    v3 ^= last
    for _ in range(c_rounds):
        sip_round()
    v0 ^= last
    v2 ^= 0xFF
    for _ in range(d_rounds):
        sip_round()
    return v0 ^ v1 ^ v2 ^ v3


def siphash13(data: bytes, key0: int = 0, key1: int = 0) -> int:
    """SipHash-1-3 of ``data`` under the 128-bit key ``(key0, key1)``."""
    return _siphash(bytes(data), key0, key1, 1, 3)


def hash_str(value: str, key0: int = 0, key1: int = 0) -> int:
    """Hash a string as its UTF-8 bytes followed by a 0xFF terminator."""
    return siphash13(value.encode("utf-8") + b"\xff", key0, key1)


def hash_u64s(values: Iterable[int], key0: int = 0, key1: int = 0) -> int:
    """Hash a sequence of unsigned 64-bit integers written little-endian."""
    data = b"".join((v & _MASK).to_bytes(8, "little") for v in values)
    return siphash13(data, key0, key1)


def simhash(tokens: Sequence[str], weights: Mapping[str, float]) -> int:
    """Compute a 64-bit SimHash from tokens; tokens missing from ``weights`` weigh 1.0."""
    acc = [0.0] * BITS
    for token in tokens:
        weight = weights.get(token, 1.0)
        h = hash_str(token)
        for i in range(BITS):
            if (h >> i) & 1:
                acc[i] += weight
            else:
                acc[i] -= weight
    fingerprint = 0
    for i, value in enumerate(acc):
        if value > 0.0:
            fingerprint |= 1 << i
    return fingerprint


def simhash_uniform(tokens: Sequence[str]) -> int:
    """SimHash with every token weighted 1.0."""
    return simhash(tokens, {})


def hamming_distance(a: int, b: int) -> int:
    """Number of differing bits between two 64-bit fingerprints."""
    return ((a ^ b) & _MASK).bit_count()


def is_near_duplicate(a: int, b: int, threshold: int) -> bool:
    """True if the fingerprints differ in at most ``threshold`` bits."""
    return hamming_distance(a, b) <= threshold


def fingerprint_to_hex(fp: int) -> str:
    """Format a fingerprint as 16 lowercase hex digits."""
    return f"{fp & _MASK:016x}"


def hex_to_fingerprint(hex_str: str) -> int | None:
    """Parse a hex fingerprint; return None if it is not a valid 64-bit hex number."""
    if not _HEX_RE.fullmatch(hex_str):
        return None
    value = int(hex_str, 16)
    if value > _MASK:
        return None
    return value