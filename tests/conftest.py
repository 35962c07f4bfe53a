"""Shared fixtures: build package trees on disk."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return the (resolved) directory used as the root project."""
    root = tmp_path.resolve() / "project" / "root"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def write_files() -> Callable[[Path, dict[str, Any]], None]:
    """Return a helper writing ``{relative path: JSON data or raw text}`` under a base dir."""

    def _write(base: Path, files: dict[str, Any]) -> None:
        for relative, content in files.items():
            path = base / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                path.write_text(content, encoding="utf-8")
            else:
                path.write_text(json.dumps(content), encoding="utf-8")

    return _write


def pkg(name: str, version: str, **sections: Any) -> dict[str, Any]:
    return {"name": name, "version": version, **sections}


@pytest.fixture
def circular_project(project: Path, write_files) -> Path:
    """root -> a, b; a -> b; b -> c; c -> a."""
    write_files(
        project,
        {
            "package.json": pkg("root", "1.0.0", dependencies={"a": "^1.0.0", "b": "^2.0.0"}),
            "node_modules/a/package.json": pkg("a", "1.1.1", dependencies={"b": "^2.0.0"}),
            "node_modules/b/package.json": pkg("b", "2.2.2", dependencies={"c": "3.2.1"}),
            "node_modules/c/package.json": pkg("c", "3.2.1", dependencies={"a": "^1.0.0"}),
        },
    )
    return project
