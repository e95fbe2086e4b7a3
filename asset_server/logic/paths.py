"""Request path normalisation, fingerprint extraction and traversal checks.

A fingerprinted path looks like ``app-0aa2105d29558f3eb790d411d7d8fb66.js``.
The ``-<hex>`` token is not part of the logical asset path and is removed
before lookup; the extension is kept.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional
from urllib.parse import unquote

# Bounded length keeps names like "jquery-1.12.js" from reading as a hash
FINGERPRINT_RE = re.compile(r"-([0-9a-f]{7,128})\.[^.]+\Z")
_WINDOWS_DRIVE_RE = re.compile(r"\A[A-Za-z]:")


class ResolvedPath(NamedTuple):
    logical_path: str
    fingerprint: Optional[str]


def path_fingerprint(path: str) -> Optional[str]:
    """Return the fingerprint token of `path`, or None.

        >>> path_fingerprint("foo-0aa2105d29558f3eb790d411d7d8fb66.js")
        '0aa2105d29558f3eb790d411d7d8fb66'
    """
    match = FINGERPRINT_RE.search(path)
    return match.group(1) if match else None


def resolve_path(raw_path: str) -> ResolvedPath:
    """Strip one leading slash, percent-decode, and remove the fingerprint."""
    path = unquote(raw_path[1:] if raw_path.startswith("/") else raw_path)
    match = FINGERPRINT_RE.search(path)
    if not match:
        return ResolvedPath(path, None)
    # Drop exactly "-<hash>" at the matched position
    start, end = match.span(1)
    return ResolvedPath(path[: start - 1] + path[end:], match.group(1))


def is_absolute_path(path: str) -> bool:
    return path.startswith(("/", "\\")) or bool(_WINDOWS_DRIVE_RE.match(path))


def is_forbidden(path: str) -> bool:
    """True for traversal attempts and absolute filesystem paths.

        http://example.org/assets/../../../etc/passwd
    """
    return ".." in path or is_absolute_path(path)


def extension(path: str) -> str:
    """Return the final extension of `path` including the dot, or ''."""
    name = path.rsplit("/", 1)[-1]
    if name.startswith("."):
        name = name[1:]
    dot = name.rfind(".")
    return name[dot:] if dot != -1 else ""


__all__ = [
    "FINGERPRINT_RE",
    "ResolvedPath",
    "path_fingerprint",
    "resolve_path",
    "is_absolute_path",
    "is_forbidden",
    "extension",
]
