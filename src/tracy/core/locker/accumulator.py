# src/tracy/core/locker/accumulator.py
"""Flat adjacency accumulation from partial dependency records.

Wraps a NetworkX DiGraph. Successor order in a DiGraph is edge insertion
order and re-adding an edge is a no-op, which gives exactly the
first-seen, duplicate-free lead lists the case builder walks.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import networkx as nx
import structlog

from tracy.contracts.records import DependencyRecord, coerce_record
from tracy.contracts.types import NodeID

logger = structlog.get_logger(__name__)


class AdjacencyAccumulator:
    """Merges dependency records into one flat map and tracks root modules.

    A lead referenced before its own record arrives is registered with no
    dependencies. Roots are kept in arrival order, each at most once.
    """

    def __init__(self) -> None:
        self._graph: nx.DiGraph[NodeID] = nx.DiGraph()
        self._roots: list[NodeID] = []
        self._root_set: set[NodeID] = set()
        self._records_seen = 0

    def ingest(self, record: DependencyRecord | Mapping[str, Any]) -> None:
        """File one record into the flat map.

        Args:
            record: Validated record, or a raw mapping to validate.

        Raises:
            InvalidRecordError: If a raw mapping is malformed. The map is
                left untouched.
        """
        record = coerce_record(record)
        suspect = record.suspect_id

        self._graph.add_node(suspect)
        for lead in record.lead_ids:
            self._graph.add_edge(suspect, lead)

        if record.is_root and suspect not in self._root_set:
            self._root_set.add(suspect)
            self._roots.append(suspect)

        self._records_seen += 1
        logger.debug("Filed dependency record", suspect=suspect, leads=len(record.leads), root=record.is_root)

    def dependencies_of(self, node: NodeID) -> list[NodeID]:
        """Direct dependencies of node in first-seen order.

        Unknown nodes have no dependencies rather than raising, so leads the
        scanner never described degrade to leaves.
        """
        if node not in self._graph:
            return []
        return list(self._graph.successors(node))

    def has_node(self, node: NodeID) -> bool:
        return node in self._graph

    @property
    def roots(self) -> list[NodeID]:
        """Root modules in arrival order (copy)."""
        return list(self._roots)

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    @property
    def records_seen(self) -> int:
        return self._records_seen

    def flat_map(self) -> dict[NodeID, list[NodeID]]:
        """Snapshot of the flat adjacency map as plain lists."""
        return {node: list(self._graph.successors(node)) for node in self._graph.nodes}
