"""Install directory discovery following Node's nested module lookup."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path


INSTALL_DIR = "node_modules"


def candidates(package_dir: Path | str, install_dir: str = INSTALL_DIR) -> Iterator[Path]:
    """Yield every install directory Node would search from ``package_dir``.

    Nearest first. For ``/p/a/node_modules/b`` this yields::

        /p/a/node_modules/b/node_modules
        /p/a/node_modules
        /p/node_modules
        /node_modules
        /node_modules

    The filesystem root is yielded twice: once for the root segment and once
    when the path collapses to nothing. Callers stop at the first hit, so the
    repeat only costs one extra lookup.
    """
    path = Path(package_dir)
    parts = path.parts
    for i in range(len(parts), -1, -1):
        # Never build .../node_modules/node_modules
        if i > 0 and parts[i - 1] == install_dir:
            continue
        base = Path(*parts[:i]) if i else Path(path.anchor)
        yield base / install_dir
