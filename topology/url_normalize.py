"""URL normalization for deduplication, canonical keys and slugs."""

from __future__ import annotations

from urllib.parse import parse_qsl, unquote

import regex

_SCHEME_RE = regex.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})
_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_STRIPPED_PORTS = frozenset({80, 443})
_FORBIDDEN_HOST_CHARS = frozenset(" #%/:<>?@[\\]^|")

_PATH_ENCODE = frozenset(' "#<>?`{}')
_QUERY_ENCODE = frozenset(" \"#<>'")
_USERINFO_ENCODE = frozenset(' "#<>?`{}/:;=@[\\]^|')

_TRACKING_PARAMS = frozenset(
    {
        "fbclid", "gclid", "dclid", "msclkid", "mc_cid", "mc_eid",
        "ref", "_ga", "_gl", "yclid", "twclid", "igshid",
        "s", "source", "si",
    }
)


def is_tracking_param(key: str) -> bool:
    """True if a query parameter name is a known tracking parameter."""
    lower = key.lower()
    return lower.startswith("utm_") or lower in _TRACKING_PARAMS


def _percent_encode(text: str, encode_set: frozenset[str]) -> str:
    out = []
    for ch in text:
        code = ord(ch)
        if code < 0x20 or code > 0x7E or ch in encode_set:
            out.append("".join(f"%{b:02X}" for b in ch.encode("utf-8")))
        else:
            out.append(ch)
    return "".join(out)


def _normalize_path(path: str) -> str:
    if not path:
        return "/"
    segments = path[1:].split("/") if path.startswith("/") else path.split("/")
    output: list[str] = []
    last = len(segments) - 1
    for pos, seg in enumerate(segments):
        lowered = seg.lower()
        if lowered in (".", "%2e"):
            if pos == last:
                output.append("")
            continue
        if lowered in ("..", ".%2e", "%2e.", "%2e%2e"):
            if output:
                output.pop()
            if pos == last:
                output.append("")
            continue
        output.append(seg)
    return "/" + "/".join(_percent_encode(seg, _PATH_ENCODE) for seg in output)


def _parse_host(raw_host: str, scheme: str) -> str | None:
    if raw_host.startswith("["):
        if not raw_host.endswith("]") or len(raw_host) < 3:
            return None
        return raw_host.lower()
    host = unquote(raw_host)
    if not host:
        return "" if scheme == "file" or scheme not in _SPECIAL_SCHEMES else None
    if any(ch in _FORBIDDEN_HOST_CHARS or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in host):
        return None
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError:
            return None
    return host.lower()


def _parse_port(raw_port: str) -> int | None | bool:
    """Return the port, None when absent, or False when invalid."""
    if raw_port == "":
        return None
    if not raw_port.isdigit() or not raw_port.isascii():
        return False
    port = int(raw_port)
    if port > 65535:
        return False
    return port


def normalize(raw: str) -> str | None:
    """Normalize a URL for deduplication; return None if it cannot be parsed.

    Lowercases scheme and host, drops default ports, the fragment, tracking
    parameters and trailing slashes, sorts query parameters and strips a
    leading ``www.`` from the host. A missing scheme defaults to https.
    """
    trimmed = raw.strip()
    if not trimmed:
        return None

    with_scheme = trimmed if "://" in trimmed else f"https://{trimmed}"
    with_scheme = with_scheme.replace("\t", "").replace("\n", "").replace("\r", "")

    scheme_part, _, rest = with_scheme.partition("://")
    if not _SCHEME_RE.fullmatch(scheme_part):
        return None
    scheme = scheme_part.lower()
    special = scheme in _SPECIAL_SCHEMES

    rest, _, _fragment = rest.partition("#")
    if special:
        rest = rest.replace("\\", "/").lstrip("/")

    end = len(rest)
    for sep in "/?":
        idx = rest.find(sep)
        if idx != -1:
            end = min(end, idx)
    authority, remainder = rest[:end], rest[end:]
    path, has_query, query = remainder.partition("?")

    userinfo, at, hostport = authority.rpartition("@")
    if hostport.startswith("["):
        close = hostport.find("]")
        if close == -1:
            return None
        raw_host = hostport[: close + 1]
        after = hostport[close + 1 :]
        if after and not after.startswith(":"):
            return None
        raw_port = after[1:]
    else:
        raw_host, _, raw_port = hostport.partition(":")

    host = _parse_host(raw_host, scheme)
    if host is None:
        return None
    port = _parse_port(raw_port)
    if port is False:
        return None
    if port is not None and (port == _DEFAULT_PORTS.get(scheme) or port in _STRIPPED_PORTS):
        port = None

    path = _normalize_path(path) if special or path else ""

    pairs = [
        (k, v)
        for k, v in parse_qsl(query, keep_blank_values=True)
        if not is_tracking_param(k)
    ] if has_query else []
    pairs.sort(key=lambda kv: kv[0])
    qs = "&".join(k if not v else f"{k}={v}" for k, v in pairs)

    parts = [scheme, "://"]
    if at:
        parts.append(_percent_encode(userinfo, _USERINFO_ENCODE.difference(":")))
        parts.append("@")
    parts.append(host)
    if port is not None:
        parts.append(f":{port}")
    parts.append(path)
    if pairs:
        parts.append("?")
        parts.append(_percent_encode(qs, _QUERY_ENCODE))
    result = "".join(parts)

    if result.endswith("/"):
        result = result.rstrip("/")

    return result.replace("://www.", "://", 1)


def _trim_prefix_repeated(text: str, prefix: str) -> str:
    while text.startswith(prefix):
        text = text[len(prefix) :]
    return text


def canonical_key(raw: str) -> str | None:
    """Scheme-less host+path+query key for grouping duplicate URLs."""
    normalized = normalize(raw)
    if normalized is None:
        return None
    stripped = _trim_prefix_repeated(normalized, "https://")
    return _trim_prefix_repeated(stripped, "http://")


def slugify(s: str) -> str:
    """Lowercase slug of alphanumeric runs joined by single hyphens."""
    replaced = "".join(c if c.isalnum() else "-" for c in s.lower())
    return "-".join(part for part in replaced.split("-") if part)