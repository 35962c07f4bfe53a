"""Read package.json files into ``Manifest`` objects."""

from __future__ import annotations

import json
from pathlib import Path

from ..models import Manifest
from ..validators.manifest import validate_manifest


class ManifestError(RuntimeError):
    """Base error for a package.json that cannot be used."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class ManifestNotFoundError(ManifestError):
    """Raised when the package.json does not exist or cannot be read."""


class ManifestParseError(ManifestError):
    """Raised when the package.json is not valid JSON or misses required fields."""


def read_manifest(path: Path) -> Manifest:
    """Return the parsed manifest at ``path``.

    Raises:
        ManifestNotFoundError: the file is missing or unreadable.
        ManifestParseError: the content is not a usable package.json.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestNotFoundError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ManifestParseError(path, f"not UTF-8 text ({exc.reason})") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(path, f"invalid JSON: {exc}") from exc

    try:
        validate_manifest(data)
    except ValueError as exc:
        raise ManifestParseError(path, f"invalid manifest:{exc}") from exc

    return Manifest.from_dict(data)
