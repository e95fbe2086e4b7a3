"""Log message formats emitted by the asset handler.

Kept in one place so tests and log consumers can match on them.
"""

from __future__ import annotations

SERVED = "Served asset %s - %s (%dms)"
BUILD_FAILED = "Error compiling asset %s:"
BUILD_FAILED_DETAIL = "%s"
BUILD_FAILED_STATUS = "500 Internal Server Error"

__all__ = ["SERVED", "BUILD_FAILED", "BUILD_FAILED_DETAIL", "BUILD_FAILED_STATUS"]
