"""Core resolution entrypoints.

This module MUST NOT print or exit so it can be used by both the CLI and as a
library. Unresolved dependencies are reported through a ``Diagnostics``
collector handed in by the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, MutableMapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .discovery import candidates
from .models import CIRCULAR, Branch, EffectiveTree, Manifest, Node, RootResult
from .parsers.package_json import ManifestError, read_manifest
from .settings import Settings


logger = logging.getLogger(__name__)

Reader = Callable[[Path], Manifest]
CacheKey = tuple[Path, tuple[str, ...]]
Cache = MutableMapping[CacheKey, EffectiveTree]


@dataclass
class Diagnostics:
    """Collect warnings about dependencies that could not be resolved."""

    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


def find_dependency(
    name: str,
    manifest_dir: Path,
    settings: Settings,
    reader: Reader = read_manifest,
) -> tuple[Manifest, Path] | None:
    """Return the manifest and directory of the nearest installed ``name``.

    Candidates that are missing or hold an unusable manifest are skipped.
    """
    for candidate in candidates(manifest_dir, settings.install_dir):
        package_dir = candidate / name
        manifest_path = package_dir / settings.manifest_name
        logger.debug("  Trying %s", manifest_path)
        try:
            manifest = reader(manifest_path)
        except ManifestError as exc:
            logger.debug("  Not found (%s)", exc)
            continue
        logger.debug("  Found %s", manifest.identity)
        return manifest, package_dir
    return None


def resolve(
    manifest: Manifest,
    manifest_dir: Path,
    ancestors: Sequence[str],
    cache: Cache,
    *,
    dependency_keys: Iterable[str] | None = None,
    settings: Settings | None = None,
    diagnostics: Diagnostics | None = None,
    reader: Reader = read_manifest,
) -> tuple[EffectiveTree, bool]:
    """Resolve ``manifest`` and everything below it.

    Params:
        manifest: package being resolved, found in ``manifest_dir``
        ancestors: identities on the current path from the root, outermost first
        cache: resolved trees keyed by package directory and the dependency
            sections read there; only trees without a circular node anywhere
            below them are stored
        dependency_keys: sections to read from ``manifest``; nested packages
            always use ``settings.dependency_keys``

    Returns: the single-entry tree for ``manifest`` and whether it may be cached.
    """
    settings = settings or Settings()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    keys = tuple(settings.dependency_keys if dependency_keys is None else dependency_keys)
    identity = manifest.identity

    if identity in ancestors:
        logger.debug("Package %s at %s is a circular dependency", identity, manifest_dir)
        return EffectiveTree(identity, CIRCULAR), False

    cache_key = (manifest_dir, keys)
    cached = cache.get(cache_key)
    if cached is not None:
        logger.debug("Package %s at %s already resolved, using cache", identity, manifest_dir)
        return cached, True

    logger.debug("Finding dependencies for %s at %s", identity, manifest_dir)
    chain = (*ancestors, identity)
    children: dict[str, Node] = {}
    cacheable = True
    for name in manifest.dependency_names(keys):
        found = find_dependency(name, manifest_dir, settings, reader)
        if found is None:
            _report_missing(manifest, name, manifest_dir, keys, diagnostics)
            continue
        dependency, dependency_dir = found
        subtree, subtree_cacheable = resolve(
            dependency,
            dependency_dir,
            chain,
            cache,
            settings=settings,
            diagnostics=diagnostics,
            reader=reader,
        )
        children[subtree.identity] = subtree.node
        # One circular descendant makes every ancestor uncacheable
        cacheable = cacheable and subtree_cacheable

    tree = EffectiveTree(identity, Branch(MappingProxyType(children)))
    if cacheable:
        cache[cache_key] = tree
    return tree, cacheable


def _report_missing(
    manifest: Manifest,
    name: str,
    manifest_dir: Path,
    keys: Sequence[str],
    diagnostics: Diagnostics,
) -> None:
    message = f"Can't find a candidate for {name} in {manifest_dir}"
    declared = [key for key in manifest.declared_in(name) if key in keys]
    if declared == ["optionalDependencies"]:
        logger.debug("%s (optional, skipped)", message)
        return
    diagnostics.warn(message)


def _root_manifest_path(path: Path | str, settings: Settings) -> Path:
    root = Path(path).resolve()
    if root.is_dir():
        root = root / settings.manifest_name
    return root


def effective_tree(
    path: Path | str,
    *,
    settings: Settings | None = None,
    diagnostics: Diagnostics | None = None,
    cache: Cache | None = None,
    reader: Reader = read_manifest,
) -> EffectiveTree:
    """Compute the effective dependency tree of one root package.

    ``path`` is a package.json or the directory holding it.

    Raises:
        ManifestError: the root manifest is missing or unparseable.
    """
    settings = settings or Settings()
    manifest_path = _root_manifest_path(path, settings)
    manifest = reader(manifest_path)
    tree, _ = resolve(
        manifest,
        manifest_path.parent,
        (),
        cache if cache is not None else {},
        dependency_keys=settings.root_dependency_keys,
        settings=settings,
        diagnostics=diagnostics,
        reader=reader,
    )
    return tree


def effective_trees(
    paths: Iterable[Path | str],
    *,
    settings: Settings | None = None,
    diagnostics: Diagnostics | None = None,
    reader: Reader = read_manifest,
) -> list[RootResult]:
    """Resolve several roots independently, in the order given.

    A root whose manifest cannot be read yields a result carrying the error;
    the remaining roots are still resolved. The cache is shared between roots
    since entries are keyed by absolute directory plus dependency sections and
    never change, so a root nested in another root keeps its devDependencies.
    """
    settings = settings or Settings()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    cache: dict[CacheKey, EffectiveTree] = {}
    results: list[RootResult] = []
    for path in paths:
        try:
            tree = effective_tree(
                path, settings=settings, diagnostics=diagnostics, cache=cache, reader=reader
            )
        except ManifestError as exc:
            logger.debug("Root %s failed: %s", path, exc)
            results.append(RootResult(path=Path(path), error=exc))
            continue
        results.append(RootResult(path=Path(path), tree=tree))
    return results
