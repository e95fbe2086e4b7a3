"""Asset request handler.

`AssetServer.handle` takes a mount-relative request and returns a response
value. The flow is: path checks, resolver lookup, conditional evaluation,
then response composition. A build error captured during lookup is turned
into an in-band diagnostic for scripts and stylesheets and re-raised for
everything else.

Mounting at ``/assets`` serves every asset reachable by the resolver, so a
request for ``/assets/foo/bar.js`` looks up ``foo/bar.js``.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from asset_server.logic import events
from asset_server.logic.composer import EXCEPTION_RESPONSES, compose
from asset_server.logic.conditional import build_context, evaluate_status
from asset_server.logic.diagnostics import error_summary
from asset_server.logic.lookup import is_body_only, lookup
from asset_server.logic.paths import extension, is_forbidden, resolve_path
from asset_server.logic.resolver import AssetResolver
from asset_server.models.asset import AssetRequest, AssetResponse
from asset_server.models.conditional import AssetStatus

logger = logging.getLogger(__name__)


class AssetServer:
    """Stateless handler closing over a resolver and a logger.

    Safe to share between concurrent requests as long as the resolver is.
    """

    def __init__(self, resolver: AssetResolver, log: Optional[logging.Logger] = None) -> None:
        self.resolver = resolver
        self.logger = log or logger

    def handle(self, request: AssetRequest) -> AssetResponse:
        start = time.perf_counter()

        def elapsed_ms() -> int:
            return int((time.perf_counter() - start) * 1000)

        if request.method != "GET":
            status = evaluate_status(build_context(request.method))
            return self._finish(request, status, elapsed_ms)

        resolved = resolve_path(request.path)
        if is_forbidden(resolved.logical_path):
            status = evaluate_status(build_context(request.method, forbidden=True))
            return self._finish(request, status, elapsed_ms)

        result = lookup(self.resolver, resolved.logical_path, body_only=is_body_only(request.query_string))
        if result.failed:
            return self._build_failure(request, resolved.logical_path, result.error, elapsed_ms)

        # Body-only fetches never validated the fingerprint against their content
        fingerprint = None if result.body_only else resolved.fingerprint
        ctx = build_context(
            request.method,
            asset_etag=result.asset.etag if result.asset is not None else None,
            fingerprint=fingerprint,
            if_match_header=request.header("If-Match"),
            if_none_match_header=request.header("If-None-Match"),
        )
        status = evaluate_status(ctx)
        return self._finish(request, status, elapsed_ms, asset=result.asset, if_none_match=ctx.if_none_match)

    def _finish(self, request: AssetRequest, status: AssetStatus, elapsed_ms: Callable[[], int], **kwargs) -> AssetResponse:
        self.logger.info(events.SERVED, request.path, status.status_line(), elapsed_ms())
        return compose(status, request_path=request.path, **kwargs)

    def _build_failure(
        self,
        request: AssetRequest,
        logical_path: str,
        exc: Exception,
        elapsed_ms: Callable[[], int],
    ) -> AssetResponse:
        self.logger.error(events.BUILD_FAILED, logical_path)
        self.logger.error(events.BUILD_FAILED_DETAIL, error_summary(exc))
        self.logger.info(events.SERVED, request.path, events.BUILD_FAILED_STATUS, elapsed_ms())

        render = EXCEPTION_RESPONSES.get(extension(logical_path))
        if render is None:
            raise exc
        return render(exc)


__all__ = ["AssetServer"]
