"""Entity-tag helpers for asset responses.

Asset validators are plain hex digests. Conditional headers are accepted only
in the single quoted-token form ``"<token>"``; lists, weak validators and the
``*`` wildcard are treated as if the header were absent.
"""

from __future__ import annotations

import hashlib
import re
from typing import Optional

_QUOTED_TOKEN_RE = re.compile(r'"(\w+)"', re.ASCII)


def compute_etag(content: bytes) -> str:
    """Return the SHA-256 hex digest used as an asset's ETag."""
    return hashlib.sha256(content).hexdigest()


def parse_etag_header(value: Optional[str]) -> Optional[str]:
    """Return the token inside a single quoted ETag header value, or None."""
    if value is None:
        return None
    match = _QUOTED_TOKEN_RE.fullmatch(value)
    return match.group(1) if match else None


def quote_etag(token: str) -> str:
    return f'"{token}"'


__all__ = ["compute_etag", "parse_etag_header", "quote_etag"]
