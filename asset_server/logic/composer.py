"""Status-specific header sets and bodies for asset responses.

Cache headers are centralised in `cache_headers`; route code never sets
Cache-Control, ETag or Vary directly.
"""

from __future__ import annotations

from typing import Dict, Optional

from asset_server.logic.diagnostics import (
    CSS_CONTENT_TYPE,
    JAVASCRIPT_CONTENT_TYPE,
    css_exception_body,
    javascript_exception_body,
)
from asset_server.logic.etag import quote_etag
from asset_server.logic.paths import path_fingerprint
from asset_server.models.asset import Asset, AssetResponse
from asset_server.models.conditional import AssetStatus

ONE_YEAR = 31536000

FORBIDDEN_BODY = "Forbidden"
NOT_FOUND_BODY = "Not found"
METHOD_NOT_ALLOWED_BODY = "Method Not Allowed"
PRECONDITION_FAILED_BODY = "Precondition Failed"


def cache_headers(request_path: str, etag: str) -> Dict[str, str]:
    """Return ETag and caching headers for an OK or Not Modified response.

    A fingerprint in the original request path means the URL names immutable
    content, so it may be cached for a year. Otherwise clients must revalidate.
    """
    headers = {"ETag": quote_etag(etag)}
    if path_fingerprint(request_path):
        headers["Cache-Control"] = f"public, max-age={ONE_YEAR}"
    else:
        headers["Cache-Control"] = "public, must-revalidate"
        headers["Vary"] = "Accept-Encoding"
    return headers


def content_type_header(asset: Asset) -> Optional[str]:
    content_type = asset.content_type
    if not content_type:
        return None
    if content_type.startswith("text/") and asset.charset:
        content_type = f"{content_type}; charset={asset.charset}"
    return content_type


def ok_response(asset: Asset, request_path: str) -> AssetResponse:
    headers = {"Content-Length": str(asset.length)}
    content_type = content_type_header(asset)
    if content_type:
        headers["Content-Type"] = content_type
    headers.update(cache_headers(request_path, asset.etag))
    return AssetResponse(status=AssetStatus.OK.code, headers=headers, body=asset.each())


def not_modified_response(request_path: str, etag: str) -> AssetResponse:
    return AssetResponse(status=AssetStatus.NOT_MODIFIED.code, headers=cache_headers(request_path, etag))


def _fixed_body_response(status: AssetStatus, text: str, cascade: bool = False) -> AssetResponse:
    body = text.encode("utf-8")
    headers = {"Content-Type": "text/plain", "Content-Length": str(len(body))}
    if cascade:
        headers["X-Cascade"] = "pass"
    return AssetResponse(status=status.code, headers=headers, body=[body])


def forbidden_response() -> AssetResponse:
    return _fixed_body_response(AssetStatus.FORBIDDEN, FORBIDDEN_BODY)


def not_found_response() -> AssetResponse:
    return _fixed_body_response(AssetStatus.NOT_FOUND, NOT_FOUND_BODY, cascade=True)


def method_not_allowed_response() -> AssetResponse:
    return _fixed_body_response(AssetStatus.METHOD_NOT_ALLOWED, METHOD_NOT_ALLOWED_BODY)


def precondition_failed_response() -> AssetResponse:
    return _fixed_body_response(AssetStatus.PRECONDITION_FAILED, PRECONDITION_FAILED_BODY, cascade=True)


def _diagnostic_response(body: bytes, content_type: str) -> AssetResponse:
    headers = {"Content-Type": content_type, "Content-Length": str(len(body))}
    return AssetResponse(status=AssetStatus.OK.code, headers=headers, body=[body])


def javascript_exception_response(exc: BaseException) -> AssetResponse:
    return _diagnostic_response(javascript_exception_body(exc), JAVASCRIPT_CONTENT_TYPE)


def css_exception_response(exc: BaseException) -> AssetResponse:
    return _diagnostic_response(css_exception_body(exc), CSS_CONTENT_TYPE)


def compose(
    status: AssetStatus,
    *,
    request_path: str,
    asset: Optional[Asset] = None,
    if_none_match: Optional[str] = None,
) -> AssetResponse:
    """Build the response for a derived status."""
    if status is AssetStatus.OK:
        if asset is None:
            raise ValueError("OK response requires an asset")
        return ok_response(asset, request_path)
    if status is AssetStatus.NOT_MODIFIED:
        if if_none_match is None:
            raise ValueError("Not Modified response requires the If-None-Match token")
        return not_modified_response(request_path, if_none_match)
    if status is AssetStatus.FORBIDDEN:
        return forbidden_response()
    if status is AssetStatus.NOT_FOUND:
        return not_found_response()
    if status is AssetStatus.METHOD_NOT_ALLOWED:
        return method_not_allowed_response()
    return precondition_failed_response()


# Diagnostic renderers keyed by the extension of the requested logical path
EXCEPTION_RESPONSES = {
    ".js": javascript_exception_response,
    ".css": css_exception_response,
}


__all__ = [
    "ONE_YEAR",
    "EXCEPTION_RESPONSES",
    "cache_headers",
    "content_type_header",
    "compose",
    "ok_response",
    "not_modified_response",
    "forbidden_response",
    "not_found_response",
    "method_not_allowed_response",
    "precondition_failed_response",
    "javascript_exception_response",
    "css_exception_response",
]
