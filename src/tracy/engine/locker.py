# src/tracy/engine/locker.py
"""EvidenceLocker: the two-phase front end of a case-building run.

Records are filed one at a time with ingest(). finalize() then builds one
nested tree per root, hands the finished case file to the sink exactly
once, and releases all run state. destroy() aborts a run without emitting
anything.

Lifecycle:
    OPEN ──ingest()*──► finalize() ──► FINALIZED
      │
      └── destroy(error) / invalid record ──► DESTROYED

Close listeners fire once on either terminal transition. They receive the
error that aborted the run, or None.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Self

import structlog

from tracy.contracts.enums import LockerState
from tracy.contracts.errors import InvalidRecordError, LockerClosedError
from tracy.contracts.records import DependencyRecord
from tracy.contracts.types import CaseFile, CircularDependencyHandler
from tracy.core.config import LockerSettings
from tracy.core.diagnostics import CircularDependencyReporter
from tracy.core.locker import AdjacencyAccumulator, CaseBuilder, VisitationRecord

logger = structlog.get_logger(__name__)

CaseFileSink = Callable[[CaseFile], None]
CloseListener = Callable[[BaseException | None], None]


@dataclass(slots=True)
class _RunState:
    """Per-run state, released as one unit when the locker closes."""

    accumulator: AdjacencyAccumulator = field(default_factory=AdjacencyAccumulator)
    visitation: VisitationRecord = field(default_factory=VisitationRecord)


class EvidenceLocker:
    """Files dependency records and produces one case file per run.

    Each locker owns its accumulator and visitation record. Nothing is
    shared between lockers, so independent runs need independent lockers.

    Example:
        locker = EvidenceLocker(sink=print)
        for record in scanner.records():
            locker.ingest(record)
        case_file = locker.finalize()
    """

    def __init__(
        self,
        settings: LockerSettings | None = None,
        *,
        sink: CaseFileSink | None = None,
        on_circular: CircularDependencyHandler | None = None,
        run_id: str | None = None,
    ) -> None:
        self._settings = settings or LockerSettings()
        self._sink = sink
        self._reporter = CircularDependencyReporter(on_circular, path_depth=self._settings.diagnostic_path_depth)
        self.run_id = run_id or uuid.uuid4().hex
        self._log = logger.bind(run_id=self.run_id)

        self._run: _RunState | None = _RunState()
        self._state = LockerState.OPEN
        self._close_listeners: list[CloseListener] = []

    @property
    def state(self) -> LockerState:
        return self._state

    @property
    def closed(self) -> bool:
        """True once the locker has been finalized or destroyed."""
        return self._state is not LockerState.OPEN

    @property
    def settings(self) -> LockerSettings:
        return self._settings

    @property
    def accumulator(self) -> AdjacencyAccumulator:
        """The live accumulator for this run.

        Raises:
            LockerClosedError: After finalize() or destroy() released it.
        """
        return self._require_open("access accumulator").accumulator

    def on_close(self, listener: CloseListener) -> None:
        """Register a callback for when the run finalizes or is destroyed."""
        self._close_listeners.append(listener)

    def ingest(self, record: DependencyRecord | Mapping[str, Any]) -> None:
        """File one record.

        Args:
            record: Validated record, or a raw mapping with the record shape.

        Raises:
            LockerClosedError: If the locker was already finalized or destroyed.
            InvalidRecordError: If the record is malformed. The run is
                destroyed before the error propagates.
        """
        run = self._require_open("ingest")
        try:
            run.accumulator.ingest(record)
        except InvalidRecordError as e:
            self._log.error("Rejected invalid dependency record", error=str(e))
            self.destroy(e)
            raise

    def ingest_many(self, records: Iterable[DependencyRecord | Mapping[str, Any]]) -> None:
        """File records in iteration order."""
        for record in records:
            self.ingest(record)

    def finalize(self) -> CaseFile:
        """Build the case file, emit it once, and release run state.

        Returns:
            Mapping of each root to its nested dependency tree, in root
            arrival order. Empty when no roots were filed.

        Raises:
            LockerClosedError: If the locker was already finalized or destroyed.
        """
        run = self._require_open("finalize")
        accumulator = run.accumulator
        visitation = run.visitation

        builder = CaseBuilder(
            accumulator,
            visitation,
            on_circular=self._reporter,
            self_cycle_policy=self._settings.self_cycle_policy,
        )
        case_file = builder.build_case_file(accumulator.roots)

        self._log.info(
            "Case file built",
            roots=len(case_file),
            nodes=accumulator.node_count,
            edges=accumulator.edge_count,
            records=accumulator.records_seen,
            visited_edges=len(visitation),
            circular=len(self._reporter.reported),
        )

        self._release(LockerState.FINALIZED)
        if self._sink is not None:
            self._sink(case_file)
        self._notify_close(None)
        return case_file

    def destroy(self, error: BaseException | None = None) -> None:
        """Abort the run, discarding all state without emitting a case file.

        Idempotent: destroying a closed locker does nothing.

        Args:
            error: Reason for the abort, passed on to close listeners.
        """
        if self.closed:
            return
        self._log.info("Evidence locker destroyed", error=str(error) if error is not None else None)
        self._release(LockerState.DESTROYED)
        self._notify_close(error)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # Leaving the block without finalize() abandons the run.
        self.destroy(exc)

    def _require_open(self, operation: str) -> _RunState:
        if self._run is None:
            raise LockerClosedError(f"Cannot {operation}: evidence locker {self.run_id} is {self._state}")
        return self._run

    def _release(self, state: LockerState) -> None:
        self._run = None
        self._state = state

    def _notify_close(self, error: BaseException | None) -> None:
        listeners, self._close_listeners = self._close_listeners, []
        for listener in listeners:
            listener(error)


def build_case_file(
    records: Iterable[DependencyRecord | Mapping[str, Any]],
    settings: LockerSettings | None = None,
    *,
    on_circular: CircularDependencyHandler | None = None,
) -> CaseFile:
    """Run a complete locker over records and return the case file.

    Raises:
        InvalidRecordError: If any record is malformed. No case file is built.
    """
    locker = EvidenceLocker(settings, on_circular=on_circular)
    locker.ingest_many(records)
    return locker.finalize()
