"""Asset resolver interface and a filesystem-backed implementation.

The handler only depends on `AssetResolver.find`. `FileSystemResolver` serves
prebuilt files from a directory so the service runs without a build pipeline.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import parse_qs, urlencode, urlsplit

from asset_server.logic.etag import compute_etag
from asset_server.models.asset import Asset

logger = logging.getLogger(__name__)

PIPELINE_SELF = "self"
CHUNK_SIZE = 64 * 1024

mimetypes.add_type("text/css", ".css")
mimetypes.add_type("application/javascript", ".js")
mimetypes.add_type("image/svg+xml", ".svg")
mimetypes.add_type("application/wasm", ".wasm")
mimetypes.add_type("application/json", ".map")


class AssetBuildError(Exception):
    """Raised by a resolver when an asset exists but cannot be built."""

    def __init__(self, logical_path: str, message: str) -> None:
        super().__init__(message)
        self.logical_path = logical_path


class AssetResolver(Protocol):
    def find(self, logical_path: str, pipeline: Optional[str] = None) -> Optional[Asset]:
        ...


def asset_uri_pipeline(uri: str) -> Optional[str]:
    """Return the ``pipeline`` query parameter of an asset URI, if any."""
    values = parse_qs(urlsplit(uri).query).get("pipeline")
    return values[0] if values else None


def build_asset_uri(filename: Path, content_type: Optional[str], pipeline: Optional[str]) -> str:
    params = {}
    if content_type:
        params["type"] = content_type
    if pipeline:
        params["pipeline"] = pipeline
    uri = filename.as_uri()
    return f"{uri}?{urlencode(params)}" if params else uri


class FileSystemResolver:
    """Resolve logical paths to files beneath `root`."""

    def __init__(self, root: Path | str, default_charset: str = "utf-8") -> None:
        self.root = Path(root).resolve()
        self.default_charset = default_charset

    def find(self, logical_path: str, pipeline: Optional[str] = None) -> Optional[Asset]:
        target = (self.root / logical_path).resolve()
        try:
            target.relative_to(self.root)
        except ValueError:
            logger.warning("asset.resolve.outside_root path=%s", logical_path)
            return None
        if not target.is_file():
            return None

        content = target.read_bytes()
        content_type, _encoding = mimetypes.guess_type(target.name)
        charset = self.default_charset if content_type and content_type.startswith("text/") else None

        def chunks():
            for offset in range(0, len(content), CHUNK_SIZE):
                yield content[offset : offset + CHUNK_SIZE]

        return Asset(
            uri=build_asset_uri(target, content_type, pipeline),
            etag=compute_etag(content),
            length=len(content),
            content_type=content_type,
            charset=charset,
            source=chunks,
        )


__all__ = [
    "PIPELINE_SELF",
    "AssetBuildError",
    "AssetResolver",
    "FileSystemResolver",
    "asset_uri_pipeline",
    "build_asset_uri",
]
