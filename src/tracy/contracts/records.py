"""Input record contract.

A DependencyRecord is what the upstream scanner emits for every module it
investigates:

    {
        "suspect": "/path/to/src/Investigator.js",
        "leads": ["/path/to/src/deferred.js"],
        "source": None,  # or "/path/to/parent/file"
    }

suspect is the module being described, leads are its direct dependencies,
and source is the parent module that caused it to be loaded. A record
without a source describes an entry module (a root).
"""

from collections.abc import Mapping
from typing import Annotated, Any, Self

from pydantic import BaseModel, Field, StrictStr, ValidationError, field_validator

from tracy.contracts.errors import InvalidRecordError
from tracy.contracts.types import NodeID

NodeIdField = Annotated[StrictStr, Field(min_length=1)]


class DependencyRecord(BaseModel):
    """One module and its direct dependencies, as reported by the scanner.

    Frozen after construction. Extra keys are ignored so scanners can attach
    their own metadata without breaking ingestion.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    suspect: NodeIdField
    leads: tuple[NodeIdField, ...]
    source: StrictStr | None = None

    @field_validator("source")
    @classmethod
    def _empty_source_is_absent(cls, v: str | None) -> str | None:
        # Scanners emit "" for entry modules as often as None.
        return v or None

    @property
    def is_root(self) -> bool:
        """True when no parent module caused this one to be loaded."""
        return self.source is None

    @property
    def suspect_id(self) -> NodeID:
        return NodeID(self.suspect)

    @property
    def lead_ids(self) -> tuple[NodeID, ...]:
        return tuple(NodeID(lead) for lead in self.leads)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Create a record from a raw mapping with a clear error on failure.

        Args:
            data: Mapping with suspect, leads and optional source keys.

        Returns:
            Validated, frozen record.

        Raises:
            InvalidRecordError: If suspect or leads is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise InvalidRecordError(
                f"Invalid dependency record: expected a mapping, got {type(data).__name__}.",
                record=data,
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise InvalidRecordError(f"Invalid dependency record: {e}", record=data) from e


def coerce_record(record: DependencyRecord | Mapping[str, Any]) -> DependencyRecord:
    """Return record unchanged if already validated, otherwise validate it."""
    if isinstance(record, DependencyRecord):
        return record
    return DependencyRecord.from_dict(record)
