"""URI, date and JSON helpers shared by the client and transport."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from email.utils import formatdate
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from .exceptions import MochowClientError


def normalize(value: str) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set."""
    return quote(value, safe="-._~")


def normalize_path(path: str) -> str:
    return quote(path, safe="-._~/")


def canonical_query_string(parameters: Dict[str, Optional[str]], for_signature: bool = False) -> str:
    if not parameters:
        return ""
    pairs: List[str] = []
    for key, value in parameters.items():
        if key is None:
            raise ValueError("parameter key should not be None")
        if for_signature and key.lower() == "authorization":
            continue
        if value is None:
            pairs.append(normalize(key) + "=" if for_signature else normalize(key))
        else:
            pairs.append(normalize(key) + "=" + normalize(value))
    pairs.sort()
    return "&".join(pairs)


def append_uri(base: str, *components: str) -> str:
    uri = base
    for component in components:
        if not component:
            continue
        path = normalize_path(component)
        if path.startswith("/"):
            uri = uri.rstrip("/")
        elif not uri.endswith("/"):
            uri += "/"
        uri += path
    return uri


def _utc(dt: Optional[datetime]) -> datetime:
    if dt is None:
        return datetime.now(timezone.utc)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_alternate_iso8601_date(dt: Optional[datetime] = None) -> str:
    return _utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_rfc822_date(dt: Optional[datetime] = None) -> str:
    return formatdate(_utc(dt).timestamp(), usegmt=True)


def to_json_bytes(payload: Any) -> bytes:
    try:
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise MochowClientError("Fail to convert request to json") from exc


def from_json_bytes(data: bytes) -> Any:
    try:
        return json.loads(data)
    except (UnicodeDecodeError, ValueError) as exc:
        raise MochowClientError("Unable to parse Json String.") from exc


__all__ = [
    "append_uri",
    "canonical_query_string",
    "format_alternate_iso8601_date",
    "format_rfc822_date",
    "from_json_bytes",
    "normalize",
    "normalize_path",
    "to_json_bytes",
]
