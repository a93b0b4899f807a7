# src/tracy/core/locker/__init__.py
"""Evidence locker internals: flat accumulation, edge visitation, case building."""

from tracy.core.locker.accumulator import AdjacencyAccumulator
from tracy.core.locker.builder import CaseBuilder
from tracy.core.locker.visitation import VisitationRecord

__all__ = [
    "AdjacencyAccumulator",
    "CaseBuilder",
    "VisitationRecord",
]
