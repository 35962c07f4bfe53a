"""effective-tree core package.

This package computes the effective (logical) dependency tree of an npm
project from its root package.json, following Node's nested ``node_modules``
lookup, and renders it as a tree, a flat list or JSON.
"""

__all__ = [
    "core",
]
