# src/tracy/core/locker/visitation.py
"""Edge visitation record.

Leaf module: no intra-package imports beyond contracts.
"""

from __future__ import annotations

from collections.abc import Iterator

from tracy.contracts.types import NodeID, VisitKey


class VisitationRecord:
    """Write-once set of (root, from_node, to_node) edges already expanded.

    Keys are scoped per root, so a shared module can be expanded in full
    under every root that reaches it. There is no removal: a visit is
    permanent for the lifetime of one run.
    """

    __slots__ = ("_visited",)

    def __init__(self) -> None:
        self._visited: set[VisitKey] = set()

    def has_visited(self, root: NodeID, from_node: NodeID, to_node: NodeID) -> bool:
        """Check whether this edge was already expanded under root."""
        return (root, from_node, to_node) in self._visited

    def mark_visited(self, root: NodeID, from_node: NodeID, to_node: NodeID) -> None:
        """Record the edge as expanded under root. Idempotent."""
        self._visited.add((root, from_node, to_node))

    def __contains__(self, key: object) -> bool:
        return key in self._visited

    def __len__(self) -> int:
        return len(self._visited)

    def __iter__(self) -> Iterator[VisitKey]:
        return iter(self._visited)
