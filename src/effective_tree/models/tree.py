"""Effective tree representation.

A node is either a ``Branch`` holding its children keyed by package identity,
or the ``CIRCULAR`` marker for an edge back to a package already on the
current resolution path.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, TypeAlias, Union


CIRCULAR_LABEL = "[Circular]"


@dataclass(frozen=True)
class Circular:
    """Terminal node: expanding it again would repeat an ancestor."""

    def __repr__(self) -> str:
        return "CIRCULAR"


CIRCULAR = Circular()


@dataclass(frozen=True)
class Branch:
    """Node with (possibly zero) resolved children."""

    children: Mapping[str, Node]

    def __post_init__(self) -> None:
        if not isinstance(self.children, MappingProxyType):
            object.__setattr__(self, "children", MappingProxyType(dict(self.children)))


Node: TypeAlias = Union[Branch, Circular]


def node_to_plain(node: Node) -> Any:
    if isinstance(node, Circular):
        return CIRCULAR_LABEL
    return {name: node_to_plain(child) for name, child in node.children.items()}


@dataclass(frozen=True)
class EffectiveTree:
    """Single-entry tree: a package identity and its node."""

    identity: str
    node: Node

    @property
    def is_circular(self) -> bool:
        return isinstance(self.node, Circular)

    def to_dict(self) -> dict[str, Any]:
        return {self.identity: node_to_plain(self.node)}


@dataclass(frozen=True)
class RootResult:
    """Outcome of resolving one root manifest: a tree, or the error that stopped it."""

    path: Path
    tree: EffectiveTree | None = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if (self.tree is None) == (self.error is None):
            raise ValueError("RootResult needs exactly one of tree or error")

    @property
    def ok(self) -> bool:
        return self.tree is not None
