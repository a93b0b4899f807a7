"""Modes and kinds used across subsystem boundaries."""

from enum import StrEnum


class SelfCyclePolicy(StrEnum):
    """What the case builder does after a module lists itself as a lead.

    SKIP_EDGE drops only the self-referencing edge and keeps expanding the
    remaining leads. TRUNCATE stops expanding the offending module at that
    point and keeps whatever siblings were filed before it, which is how
    older case files were produced.
    """

    SKIP_EDGE = "skip_edge"
    TRUNCATE = "truncate"


class LockerState(StrEnum):
    """Lifecycle of an evidence locker run."""

    OPEN = "open"
    FINALIZED = "finalized"
    DESTROYED = "destroyed"
