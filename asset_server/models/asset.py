"""Asset and request models shared by the asset handler.

`Asset` is produced by a resolver and consumed read-only by the handler.
Its body is single-pass: `each()` may be iterated exactly once, and the
OK response is the only consumer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, Optional

from pydantic import BaseModel, Field


@dataclass
class Asset:
    """Resolved asset. Every field is fixed once built; only the consumption
    flag flips, on the first call to `each()`."""

    uri: str
    etag: str
    length: int
    content_type: Optional[str] = None
    charset: Optional[str] = None
    source: Callable[[], Iterable[bytes]] = field(default=lambda: (), repr=False)
    _consumed: bool = field(default=False, init=False, repr=False)

    def each(self) -> Iterator[bytes]:
        """Yield body chunks in order. Raises RuntimeError on a second pass."""
        if self._consumed:
            raise RuntimeError(f"asset body already consumed: {self.uri}")
        self._consumed = True
        for chunk in self.source():
            yield chunk


class AssetRequest(BaseModel):
    """Inbound request as seen by the handler (mount prefix already removed)."""

    method: str
    path: str
    query_string: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)

    def header(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


@dataclass
class AssetResponse:
    status: int
    headers: Dict[str, str]
    body: Iterable[bytes] = ()

    @property
    def streaming(self) -> bool:
        return not isinstance(self.body, (list, tuple))


__all__ = ["Asset", "AssetRequest", "AssetResponse"]
