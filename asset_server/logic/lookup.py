"""Asset lookup adapter.

Wraps the resolver call and returns the outcome as a value. Build errors are
captured in the result instead of propagating, so the handler can decide per
extension whether to render a diagnostic or re-raise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from asset_server.logic.resolver import PIPELINE_SELF, AssetResolver, asset_uri_pipeline
from asset_server.models.asset import Asset

_BODY_ONLY_RE = re.compile(r"body=(1|t)")


@dataclass(frozen=True)
class LookupResult:
    asset: Optional[Asset] = None
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def body_only(self) -> bool:
        """True when the asset was resolved as raw, unbundled content."""
        return self.asset is not None and asset_uri_pipeline(self.asset.uri) == PIPELINE_SELF


def is_body_only(query_string: str) -> bool:
    """Test whether ``?body=1`` or ``body=true`` is present in the raw query."""
    return bool(_BODY_ONLY_RE.search(query_string or ""))


def lookup(resolver: AssetResolver, logical_path: str, body_only: bool = False) -> LookupResult:
    pipeline = PIPELINE_SELF if body_only else None
    try:
        asset = resolver.find(logical_path, pipeline=pipeline)
    except Exception as exc:
        return LookupResult(error=exc)
    return LookupResult(asset=asset)


__all__ = ["LookupResult", "is_body_only", "lookup"]
