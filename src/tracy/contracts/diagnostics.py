"""Diagnostic payloads reported through side channels, never raised."""

from __future__ import annotations

from dataclasses import dataclass

from tracy.contracts.types import NodeID


@dataclass(frozen=True, slots=True)
class CircularDependency:
    """A module that lists itself among its own leads.

    Attributes:
        root: Entry module whose tree was being built.
        suspect: Module being expanded.
        lead: The colliding lead (equal to suspect for a direct self-reference).
    """

    root: NodeID
    suspect: NodeID
    lead: NodeID
