# src/tracy/core/locker/builder.py
"""Case building: expands the flat adjacency map into nested trees.

Traversal is depth-first over an explicit frame stack instead of native
recursion, so deep dependency chains are bounded by memory rather than
by the interpreter recursion limit. The output matches a recursive
walk exactly: leads are visited in list order, and an edge is marked
visited before the walk descends through it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from tracy.contracts.diagnostics import CircularDependency
from tracy.contracts.enums import SelfCyclePolicy
from tracy.contracts.types import CaseFile, CaseTree, CircularDependencyHandler, NodeID
from tracy.core.locker.accumulator import AdjacencyAccumulator
from tracy.core.locker.visitation import VisitationRecord

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class _Frame:
    """One module being expanded: its leads, the next lead index, and its subtree."""

    node: NodeID
    leads: list[NodeID]
    tree: CaseTree = field(default_factory=dict)
    position: int = 0


class CaseBuilder:
    """Builds nested dependency trees from an AdjacencyAccumulator.

    Every (root, from, to) edge is expanded at most once, so building
    always terminates: an edge that was already walked for this root is
    left out of the output entirely, which is what cuts longer cycles.
    A module listing itself as a lead is reported through on_circular and
    then handled according to self_cycle_policy.
    """

    def __init__(
        self,
        accumulator: AdjacencyAccumulator,
        visitation: VisitationRecord,
        *,
        on_circular: CircularDependencyHandler | None = None,
        self_cycle_policy: SelfCyclePolicy = SelfCyclePolicy.SKIP_EDGE,
    ) -> None:
        self._accumulator = accumulator
        self._visitation = visitation
        self._on_circular = on_circular
        self._self_cycle_policy = self_cycle_policy

    def build_tree(self, node: NodeID, root: NodeID) -> CaseTree:
        """Expand node into a nested tree, tracking visits under root.

        Args:
            node: Module to expand. Call with node == root for a full case.
            root: Entry module that scopes edge visitation.

        Returns:
            Mapping of each expanded lead to its own subtree.
        """
        top = _Frame(node, self._accumulator.dependencies_of(node))
        stack = [top]

        while stack:
            frame = stack[-1]
            if frame.position >= len(frame.leads):
                stack.pop()
                continue

            lead = frame.leads[frame.position]
            frame.position += 1

            if self._visitation.has_visited(root, frame.node, lead):
                continue
            self._visitation.mark_visited(root, frame.node, lead)

            if lead == frame.node:
                self._report_circular(root, frame.node, lead)
                if self._self_cycle_policy is SelfCyclePolicy.TRUNCATE:
                    stack.pop()
                continue

            child = _Frame(lead, self._accumulator.dependencies_of(lead))
            frame.tree[lead] = child.tree
            stack.append(child)

        return top.tree

    def build_case_file(self, roots: Iterable[NodeID]) -> CaseFile:
        """Build one tree per root, in root order."""
        case_file: CaseFile = {}
        for root in roots:
            case_file[root] = self.build_tree(root, root)
        return case_file

    def _report_circular(self, root: NodeID, suspect: NodeID, lead: NodeID) -> None:
        if self._on_circular is None:
            logger.warning("Skipping circular dependency", suspect=suspect, lead=lead, root=root)
            return
        self._on_circular(CircularDependency(root=root, suspect=suspect, lead=lead))
