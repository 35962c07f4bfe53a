"""Renderers for effective trees: indented text, flat list and JSON."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator

from .models import CIRCULAR_LABEL, Branch, Circular, EffectiveTree, Node


def _sorted_children(branch: Branch) -> list[tuple[str, Node]]:
    """Children in alphabetical order; insertion order carries no meaning."""
    return sorted(branch.children.items(), key=lambda kv: (kv[0].casefold(), kv[0]))


def _tree_lines(identity: str, node: Node, prefix: str, last: bool) -> Iterator[str]:
    connector = "└─ " if last else "├─ "
    if isinstance(node, Circular):
        yield f"{prefix}{connector}{identity}: {CIRCULAR_LABEL}"
        return
    yield f"{prefix}{connector}{identity}"
    children = _sorted_children(node)
    child_prefix = prefix + ("   " if last else "│  ")
    for index, (name, child) in enumerate(children):
        yield from _tree_lines(name, child, child_prefix, index == len(children) - 1)


def render_tree(trees: Iterable[EffectiveTree]) -> str:
    """Render each tree with box-drawing connectors, one block per root.

    Example::

        └─ root@1.0.0
           ├─ a@1.1.1
           └─ b@2.2.2
              └─ c@3.2.1
    """
    blocks = ["\n".join(_tree_lines(tree.identity, tree.node, "", True)) for tree in trees]
    return "\n".join(blocks)


def _list_lines(identity: str, node: Node, chain: tuple[str, ...]) -> Iterator[tuple[str, ...]]:
    chain = (*chain, identity)
    if isinstance(node, Circular):
        yield (*chain, CIRCULAR_LABEL)
        return
    yield chain
    for name, child in _sorted_children(node):
        yield from _list_lines(name, child, chain)


def render_list(trees: Iterable[EffectiveTree]) -> str:
    """Render every path from the root as a space separated line, depth first."""
    lines: list[str] = []
    for tree in trees:
        lines.extend(" ".join(chain) for chain in _list_lines(tree.identity, tree.node, ()))
    return "\n".join(lines)


def render_json(trees: Iterable[EffectiveTree]) -> str:
    """Render the trees as a JSON array of nested objects."""
    return json.dumps([tree.to_dict() for tree in trees], indent=2, ensure_ascii=False)


RENDERERS = {
    "tree": render_tree,
    "list": render_list,
    "json": render_json,
}
