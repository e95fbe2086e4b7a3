from __future__ import annotations

"""Functional test bootstrap for the asset server.

Provides an in-memory resolver so tests exercise the handler and the HTTP
surface without touching the filesystem. Each `find` builds a fresh `Asset`,
so the single-pass body can be consumed once per lookup.
"""

import hashlib
from typing import Dict, Iterable, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from asset_server.config import AppConfig
from asset_server.logic.handler import AssetServer
from asset_server.main import create_app
from asset_server.models.asset import Asset, AssetRequest

APP_JS = b"var app = 1;\n"
APP_JS_ETAG = "0aa2105d29558f3eb790d411d7d8fb66"
APP_CSS = b"body { color: red; }\n"


class MemoryResolver:
    """Dict-backed resolver recording every call it receives."""

    def __init__(self) -> None:
        self.entries: Dict[str, dict] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[Tuple[str, Optional[str]]] = []

    def add(
        self,
        logical_path: str,
        content: bytes,
        *,
        etag: Optional[str] = None,
        content_type: Optional[str] = None,
        charset: Optional[str] = None,
        chunks: Optional[Iterable[bytes]] = None,
    ) -> None:
        self.entries[logical_path] = {
            "content": content,
            "etag": etag or hashlib.sha256(content).hexdigest(),
            "content_type": content_type,
            "charset": charset,
            "chunks": list(chunks) if chunks is not None else [content],
        }

    def fail(self, logical_path: str, exc: Exception) -> None:
        self.errors[logical_path] = exc

    def find(self, logical_path: str, pipeline: Optional[str] = None) -> Optional[Asset]:
        self.calls.append((logical_path, pipeline))
        if logical_path in self.errors:
            raise self.errors[logical_path]
        entry = self.entries.get(logical_path)
        if entry is None:
            return None
        uri = f"memory:///{logical_path}" + ("?pipeline=self" if pipeline else "")
        chunks = entry["chunks"]
        return Asset(
            uri=uri,
            etag=entry["etag"],
            length=len(entry["content"]),
            content_type=entry["content_type"],
            charset=entry["charset"],
            source=lambda: iter(chunks),
        )


@pytest.fixture
def resolver() -> MemoryResolver:
    r = MemoryResolver()
    r.add("app.js", APP_JS, etag=APP_JS_ETAG, content_type="application/javascript")
    r.add("app.css", APP_CSS, content_type="text/css", charset="utf-8")
    return r


@pytest.fixture
def server(resolver: MemoryResolver) -> AssetServer:
    return AssetServer(resolver)


@pytest.fixture
def get():
    """Build a GET `AssetRequest` for a mount-relative path."""

    def _get(path: str, headers: Optional[Dict[str, str]] = None, query: str = "") -> AssetRequest:
        return AssetRequest(method="GET", path=path, query_string=query, headers=headers or {})

    return _get


@pytest.fixture
def client(resolver: MemoryResolver) -> TestClient:
    return TestClient(create_app(resolver=resolver, config=AppConfig()), raise_server_exceptions=False)
