"""Shared contracts: types, records, diagnostics and errors.

Leaf package. Nothing here imports from tracy.core or tracy.engine.
"""

from tracy.contracts.diagnostics import CircularDependency
from tracy.contracts.enums import LockerState, SelfCyclePolicy
from tracy.contracts.errors import InvalidRecordError, LockerClosedError, TracyError
from tracy.contracts.records import DependencyRecord, coerce_record
from tracy.contracts.types import (
    CaseFile,
    CaseTree,
    CircularDependencyHandler,
    NodeID,
    VisitKey,
)

__all__ = [
    "CaseFile",
    "CaseTree",
    "CircularDependency",
    "CircularDependencyHandler",
    "DependencyRecord",
    "InvalidRecordError",
    "LockerClosedError",
    "LockerState",
    "NodeID",
    "SelfCyclePolicy",
    "TracyError",
    "VisitKey",
    "coerce_record",
]
