# src/tracy/engine/__init__.py
"""Run-level orchestration of the evidence locker."""

from tracy.engine.locker import (
    CaseFileSink,
    CloseListener,
    EvidenceLocker,
    build_case_file,
)

__all__ = [
    "CaseFileSink",
    "CloseListener",
    "EvidenceLocker",
    "build_case_file",
]
