"""Command line entrypoint printing the effective dependency tree.

Usage:
  effective-tree [--root path/to/package.json ...] [--output tree|list|json]

Each ``--root`` is resolved independently; a root whose package.json cannot
be read is reported on stderr without affecting the others.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .core import Diagnostics, effective_trees
from .report import RENDERERS
from .settings import ConfigError, load_settings


LOG_LEVEL_ENV_VAR = "EFFECTIVE_TREE_LOG_LEVEL"

EXIT_OK = 0
EXIT_ROOT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="effective-tree",
        description="Print the effective (logical) dependency tree of an npm project.",
        epilog=(
            "examples:\n"
            "  effective-tree                  tree for ./package.json\n"
            "  effective-tree --root ./src     tree for the project inside ./src"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-r",
        "--root",
        dest="roots",
        type=Path,
        action="append",
        help="Path of a root package.json or its directory; repeatable. Defaults to ./package.json",
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=sorted(RENDERERS),
        default="tree",
        help="Output to generate (default: tree)",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON settings file")
    parser.add_argument(
        "--log-level",
        default=os.getenv(LOG_LEVEL_ENV_VAR, "WARNING"),
        help=f"Logging level, e.g. DEBUG to trace every lookup (env: {LOG_LEVEL_ENV_VAR})",
    )
    args = parser.parse_args(argv)
    if not args.roots:
        args.roots = [Path.cwd() / "package.json"]
    return args


def _setup_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s %(message)s", stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _setup_logging(args.log_level)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    results = effective_trees(args.roots, settings=settings, diagnostics=Diagnostics())
    for result in results:
        if not result.ok:
            print(f"ERROR: {result.error}", file=sys.stderr)

    trees = [result.tree for result in results if result.tree is not None]
    if trees:
        print(RENDERERS[args.output](trees))

    return EXIT_OK if all(result.ok for result in results) else EXIT_ROOT_FAILED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
