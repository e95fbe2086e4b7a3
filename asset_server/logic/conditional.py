"""Conditional-request evaluation for asset GETs.

Status is a pure function of the request method, the path checks, the asset
etag and the three validator sources (path fingerprint, If-Match,
If-None-Match). Precedence matters: a fingerprint mismatch is an identity
failure and reports 404 before any If-Match precondition is considered.
"""

from __future__ import annotations

from typing import Optional

from asset_server.logic.etag import parse_etag_header
from asset_server.models.conditional import AssetStatus, ConditionalContext


def build_context(
    method: str,
    *,
    forbidden: bool = False,
    asset_etag: Optional[str] = None,
    fingerprint: Optional[str] = None,
    if_match_header: Optional[str] = None,
    if_none_match_header: Optional[str] = None,
) -> ConditionalContext:
    """Parse conditional headers and fold the fingerprint into If-Match."""
    if_match = fingerprint if fingerprint else parse_etag_header(if_match_header)
    return ConditionalContext(
        method=method,
        forbidden=forbidden,
        asset_etag=asset_etag,
        fingerprint=fingerprint,
        if_match=if_match,
        if_none_match=parse_etag_header(if_none_match_header),
    )


def evaluate_status(ctx: ConditionalContext) -> AssetStatus:
    if ctx.method != "GET":
        return AssetStatus.METHOD_NOT_ALLOWED
    if ctx.forbidden:
        return AssetStatus.FORBIDDEN
    if ctx.asset_etag is None:
        return AssetStatus.NOT_FOUND
    if ctx.fingerprint and ctx.fingerprint != ctx.asset_etag:
        return AssetStatus.NOT_FOUND
    if ctx.if_match and ctx.if_match != ctx.asset_etag:
        return AssetStatus.PRECONDITION_FAILED
    if ctx.if_none_match and ctx.if_none_match == ctx.asset_etag:
        return AssetStatus.NOT_MODIFIED
    return AssetStatus.OK


__all__ = ["build_context", "evaluate_status"]
