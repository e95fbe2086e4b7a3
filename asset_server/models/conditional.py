"""Response status and conditional-request context models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AssetStatus(Enum):
    OK = (200, "OK")
    NOT_MODIFIED = (304, "Not Modified")
    FORBIDDEN = (403, "Forbidden")
    NOT_FOUND = (404, "Not Found")
    METHOD_NOT_ALLOWED = (405, "Method Not Allowed")
    PRECONDITION_FAILED = (412, "Precondition Failed")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def reason(self) -> str:
        return self.value[1]

    def status_line(self) -> str:
        return f"{self.code} {self.reason}"


class ConditionalContext(BaseModel):
    """Per-request inputs to status derivation.

    `asset_etag` is None when no asset was found. `if_match` is the effective
    value: the path fingerprint when present, else the parsed header.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    forbidden: bool = False
    asset_etag: Optional[str] = None
    fingerprint: Optional[str] = None
    if_match: Optional[str] = None
    if_none_match: Optional[str] = None


__all__ = ["AssetStatus", "ConditionalContext"]
