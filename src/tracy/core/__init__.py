# src/tracy/core/__init__.py
"""Core infrastructure: configuration, logging, diagnostics and the locker internals."""

from tracy.core.config import (
    LockerSettings,
    LoggingSettings,
    TracySettings,
    load_settings,
)
from tracy.core.diagnostics import CircularDependencyReporter, shorten_paths
from tracy.core.locker import AdjacencyAccumulator, CaseBuilder, VisitationRecord
from tracy.core.export import iter_case_json, render_case_json
from tracy.core.logging import (
    configure_from_settings,
    configure_logging,
    get_logger,
)

__all__ = [
    "AdjacencyAccumulator",
    "CaseBuilder",
    "CircularDependencyReporter",
    "LockerSettings",
    "LoggingSettings",
    "TracySettings",
    "VisitationRecord",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "iter_case_json",
    "load_settings",
    "render_case_json",
    "shorten_paths",
]
