"""Tests for the edge visitation record."""

from tracy.contracts import NodeID
from tracy.core.locker import VisitationRecord

A, B, C = NodeID("A"), NodeID("B"), NodeID("C")


class TestVisitationRecord:
    def test_unvisited_edge(self) -> None:
        assert not VisitationRecord().has_visited(A, A, B)

    def test_mark_then_has_visited(self) -> None:
        record = VisitationRecord()
        record.mark_visited(A, A, B)

        assert record.has_visited(A, A, B)
        assert (A, A, B) in record

    def test_mark_is_idempotent(self) -> None:
        record = VisitationRecord()
        record.mark_visited(A, A, B)
        record.mark_visited(A, A, B)

        assert len(record) == 1

    def test_direction_matters(self) -> None:
        record = VisitationRecord()
        record.mark_visited(A, A, B)

        assert not record.has_visited(A, B, A)

    def test_keys_scoped_per_root(self) -> None:
        """The same edge is tracked independently under different roots."""
        record = VisitationRecord()
        record.mark_visited(A, B, C)

        assert record.has_visited(A, B, C)
        assert not record.has_visited(B, B, C)

    def test_iterates_stored_keys(self) -> None:
        record = VisitationRecord()
        record.mark_visited(A, A, B)
        record.mark_visited(A, B, C)

        assert set(record) == {(A, A, B), (A, B, C)}
