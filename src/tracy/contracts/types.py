"""Semantic type aliases for compile-time type safety.

NewType creates distinct types that mypy treats as incompatible,
preventing accidental misuse of semantically different string values.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, NewType

if TYPE_CHECKING:
    from tracy.contracts.diagnostics import CircularDependency

NodeID = NewType("NodeID", str)
"""Opaque module identifier (e.g. an absolute file path or resolved module key)."""

type VisitKey = tuple[NodeID, NodeID, NodeID]
"""Edge visitation key: (root, from_node, to_node)."""

type CaseTree = dict[NodeID, CaseTree]
"""Nested dependency tree. Leaves and cut-off cycle points map to {}."""

type CaseFile = dict[NodeID, CaseTree]
"""Final output: one nested tree per root node."""

type CircularDependencyHandler = Callable[[CircularDependency], None]
"""Side-channel callback invoked for every self-referencing edge."""
