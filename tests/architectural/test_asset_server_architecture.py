"""Architectural tests for the asset server.

Static, file/AST-based checks. They read sources under the project root and
never import application code, so they stay stable while modules change.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterable, List, Set

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_DIR = PROJECT_ROOT / "asset_server"
LOGIC_DIR = PACKAGE_DIR / "logic"
MODELS_DIR = PACKAGE_DIR / "models"
ROUTES_DIR = PACKAGE_DIR / "routes"

HTTP_FRAMEWORKS = {"fastapi", "starlette", "uvicorn"}
CACHE_HEADER_LITERALS = {"Cache-Control", "ETag", "Vary", "X-Cascade"}


def _parse(path: Path) -> ast.Module:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except SyntaxError as exc:
        pytest.fail(f"Failed to parse {path}: {exc}")


def _sources(*dirs: Path) -> List[Path]:
    files: List[Path] = []
    for d in dirs:
        files.extend(sorted(d.glob("*.py")))
    return files


def _imported_roots(tree: ast.Module) -> Set[str]:
    roots: Set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            roots.update(alias.name.split(".")[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            roots.add(node.module.split(".")[0])
    return roots


def _string_constants(tree: ast.Module) -> Iterable[str]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Constant) and isinstance(node.value, str):
            yield node.value


def test_core_is_framework_independent() -> None:
    """The handler, its helpers and models must not import the HTTP stack."""
    offenders = []
    for path in _sources(LOGIC_DIR, MODELS_DIR):
        leaked = _imported_roots(_parse(path)) & HTTP_FRAMEWORKS
        if leaked:
            offenders.append(f"{path.relative_to(PROJECT_ROOT)}: {sorted(leaked)}")
    assert not offenders, "Core modules import HTTP frameworks:\n" + "\n".join(offenders)


def test_cache_headers_are_set_only_by_composer() -> None:
    """Routes and the handler pass headers through; only the composer names them."""
    offenders = []
    for path in _sources(ROUTES_DIR, LOGIC_DIR):
        if path.name == "composer.py":
            continue
        hits = CACHE_HEADER_LITERALS & set(_string_constants(_parse(path)))
        if hits:
            offenders.append(f"{path.relative_to(PROJECT_ROOT)}: {sorted(hits)}")
    assert not offenders, "Cache headers set outside composer:\n" + "\n".join(offenders)


def test_no_bare_except_in_package() -> None:
    offenders = []
    for path in sorted(PACKAGE_DIR.rglob("*.py")):
        for node in ast.walk(_parse(path)):
            if isinstance(node, ast.ExceptHandler) and node.type is None:
                offenders.append(f"{path.relative_to(PROJECT_ROOT)}:{node.lineno}")
    assert not offenders, "Bare except clauses found:\n" + "\n".join(offenders)


def test_logic_modules_declare_public_api() -> None:
    missing = []
    for path in _sources(LOGIC_DIR):
        tree = _parse(path)
        has_all = any(
            isinstance(node, ast.Assign)
            and any(isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets)
            for node in tree.body
        )
        if not has_all:
            missing.append(str(path.relative_to(PROJECT_ROOT)))
    assert not missing, "Logic modules without __all__:\n" + "\n".join(missing)


def test_pipeline_stages_do_not_catch_exceptions() -> None:
    """Build failures are captured once, in the lookup adapter."""
    catching = set()
    for path in _sources(LOGIC_DIR):
        for node in ast.walk(_parse(path)):
            if isinstance(node, ast.ExceptHandler):
                catching.add(path.name)
    assert "lookup.py" in catching
    assert not catching & {"handler.py", "composer.py", "conditional.py", "paths.py", "diagnostics.py"}
