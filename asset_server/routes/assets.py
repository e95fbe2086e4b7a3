"""Asset-serving route.

Accepts every HTTP method so the handler can answer non-GET requests with
405 itself. Headers produced by the handler are passed through verbatim;
Starlette adds no charset or length of its own.
"""

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Request
from starlette.responses import Response, StreamingResponse

from asset_server.logic.handler import AssetServer
from asset_server.models.asset import AssetRequest, AssetResponse

router = APIRouter()

ASSET_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def mount_relative_raw_path(request: Request, path: str) -> str:
    """Return the still percent-encoded request path below the mount prefix.

    The handler decodes the path itself, so it must see the raw form. When the
    server supplies no usable `raw_path`, the decoded route parameter is
    re-encoded instead.
    """
    raw = request.scope.get("raw_path")
    mount_prefix = request.app.state.config.assets.mount_prefix
    prefix = "" if mount_prefix == "/" else mount_prefix
    if raw:
        raw_text = raw.split(b"?", 1)[0].decode("latin-1")
        if raw_text.startswith(prefix + "/"):
            return raw_text[len(prefix):]
    return "/" + quote(path, safe="/")


def to_asset_request(request: Request, path: str) -> AssetRequest:
    return AssetRequest(
        method=request.method,
        path=mount_relative_raw_path(request, path),
        query_string=request.url.query,
        headers=dict(request.headers),
    )


def to_starlette_response(result: AssetResponse) -> Response:
    if result.streaming:
        # Headers are committed before the first chunk; errors after that surface as a broken transfer
        return StreamingResponse(result.body, status_code=result.status, headers=result.headers)
    return Response(content=b"".join(result.body), status_code=result.status, headers=result.headers)


@router.api_route("/{path:path}", methods=ASSET_METHODS, include_in_schema=False)
def serve_asset(request: Request, path: str) -> Response:
    server: AssetServer = request.app.state.asset_server
    return to_starlette_response(server.handle(to_asset_request(request, path)))


__all__ = ["router", "mount_relative_raw_path", "to_asset_request", "to_starlette_response"]
