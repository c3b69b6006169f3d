"""The cached unit: normalized headers + records plus fetch metadata."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class Dataset:
    source_id: str
    headers: tuple[str, ...]
    records: tuple[Mapping[str, str], ...]
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def build(cls, source_id: str, headers: list[str], records: list[dict[str, str]]) -> "Dataset":
        """Freeze parsed output so cached copies can be handed out safely."""
        return cls(
            source_id=source_id,
            headers=tuple(headers),
            records=tuple(MappingProxyType(dict(r)) for r in records),
        )

    @property
    def total_records(self) -> int:
        return len(self.records)

    def records_as_dicts(self) -> list[dict[str, str]]:
        """Fresh mutable copies for serialization."""
        return [dict(r) for r in self.records]
