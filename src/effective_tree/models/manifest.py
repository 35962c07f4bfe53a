"""Parsed package.json model."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


DEPENDENCY_KEYS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


@dataclass(frozen=True)
class Manifest:
    """The parts of a package.json the resolver cares about."""

    name: str
    version: str = ""
    sections: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    optional_peers: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must be non-empty")

    @property
    def identity(self) -> str:
        """Return ``name@version``, the key used for cycle detection.

        A manifest without a version (private apps, workspaces) gives ``name@``.
        """
        return f"{self.name}@{self.version}"

    def declared_in(self, name: str) -> tuple[str, ...]:
        return tuple(key for key in DEPENDENCY_KEYS if name in self.sections.get(key, {}))

    def dependency_names(self, keys: Iterable[str]) -> list[str]:
        """Collect dependency names from ``keys``, de-duplicated, first seen first.

        A name that only comes from ``peerDependencies`` and is flagged
        ``optional`` in ``peerDependenciesMeta`` is left out.
        """
        keys = tuple(keys)
        names: dict[str, None] = {}
        for key in keys:
            for name in self.sections.get(key, {}):
                names.setdefault(name, None)

        def optional_only(name: str) -> bool:
            if name not in self.optional_peers:
                return False
            return [k for k in keys if name in self.sections.get(k, {})] == ["peerDependencies"]

        return [name for name in names if not optional_only(name)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Manifest:
        sections = {
            key: MappingProxyType({str(k): str(v) for k, v in data[key].items()})
            for key in DEPENDENCY_KEYS
            if isinstance(data.get(key), Mapping)
        }
        meta = data.get("peerDependenciesMeta") or {}
        optional_peers = frozenset(
            name
            for name, flags in meta.items()
            if isinstance(flags, Mapping) and flags.get("optional") is True
        )
        return cls(
            name=str(data["name"]),
            version=str(data.get("version", "")),
            sections=MappingProxyType(sections),
            optional_peers=optional_peers,
        )
