"""Data models for manifests and effective dependency trees."""

from __future__ import annotations

from .manifest import DEPENDENCY_KEYS, Manifest
from .tree import CIRCULAR, CIRCULAR_LABEL, Branch, Circular, EffectiveTree, Node, RootResult

__all__ = [
    "CIRCULAR",
    "CIRCULAR_LABEL",
    "DEPENDENCY_KEYS",
    "Branch",
    "Circular",
    "EffectiveTree",
    "Manifest",
    "Node",
    "RootResult",
]
