"""Architectural tests for the collection service.

These tests enforce layering by static inspection of the source tree
(``ast``) plus one runtime check of the registered routes:
- logic modules stay framework-free;
- route modules never reach into the store's private state;
- the application is only built through the factory;
- every public route of the HTTP contract is registered.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterable, List, Set

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[2] / "collection_service"
FRAMEWORK_MODULES = {"fastapi", "starlette", "pydantic", "uvicorn"}
STORE_PRIVATE_ATTRS = {"_order", "_search", "_selected", "_lock"}


def _python_files(sub: str) -> List[Path]:
    root = PACKAGE_ROOT / sub
    assert root.is_dir(), f"Expected package directory: {root}"
    return sorted(root.glob("*.py"))


def _parse(path: Path) -> ast.Module:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def _imported_roots(tree: ast.AST) -> Set[str]:
    roots: Set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            roots.update(alias.name.split(".")[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            roots.add(node.module.split(".")[0])
    return roots


def _attribute_names(tree: ast.AST) -> Iterable[str]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Attribute):
            yield node.attr


@pytest.mark.parametrize("path", _python_files("logic"), ids=lambda p: p.name)
def test_logic_modules_are_framework_free(path: Path) -> None:
    leaked = _imported_roots(_parse(path)) & FRAMEWORK_MODULES
    assert not leaked, f"{path.name} imports web/validation frameworks: {sorted(leaked)}"


@pytest.mark.parametrize("path", _python_files("routes"), ids=lambda p: p.name)
def test_routes_use_public_store_api(path: Path) -> None:
    touched = set(_attribute_names(_parse(path))) & STORE_PRIVATE_ATTRS
    assert not touched, f"{path.name} touches OrderStore internals: {sorted(touched)}"


def test_main_does_not_instantiate_app_at_import() -> None:
    tree = _parse(PACKAGE_ROOT / "main.py")
    for node in tree.body:
        if isinstance(node, (ast.Assign, ast.AnnAssign, ast.Expr)):
            for call in ast.walk(node):
                if isinstance(call, ast.Call) and getattr(call.func, "id", None) in {"create_app", "FastAPI"}:
                    pytest.fail("main.py must not build the application at import time")


def test_public_routes_are_registered() -> None:
    from collection_service.config import AppConfig, CollectionConfig
    from collection_service.main import create_app

    app = create_app(AppConfig(collection=CollectionConfig(total_items=10, seed=10)))
    # The OpenAPI document lists included routers regardless of how the
    # router tree is flattened internally
    registered = {
        (method.upper(), path)
        for path, operations in app.openapi()["paths"].items()
        for method in operations
    }

    for expected in [
        ("GET", "/items"),
        ("PATCH", "/state"),
        ("POST", "/selected"),
        ("POST", "/reset"),
        ("GET", "/health"),
    ]:
        assert expected in registered, f"missing route {expected}"
