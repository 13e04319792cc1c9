"""Record and page value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union


RecordId = Union[int, str]


@dataclass(frozen=True)
class Record:
    """A single row from the remote source.

    Attributes:
        id: Identity of the record as reported by the source
        fields: Display fields, opaque to the selection logic
    """
    id: RecordId
    fields: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Optional[Any] = None) -> Any:
        return self.fields.get(name, default)


@dataclass(frozen=True)
class PageResult:
    """Outcome of a successful page fetch."""

    page_index: int
    records: Tuple[Record, ...]
    total_count: int

    def index_of(self, record_id: RecordId) -> Optional[int]:
        """Return the in-page index of ``record_id`` or None when absent."""
        for idx, record in enumerate(self.records):
            if record.id == record_id:
                return idx
        return None
