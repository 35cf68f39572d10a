"""In-memory facility catalog with address matching."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pycarpark.models.facility import FacilityRecord

_logger = logging.getLogger(__name__)


class CatalogIndex:
    """Read-only list of facilities searchable by address text.

    Matching is a case-insensitive substring test against
    :attr:`FacilityRecord.address`; results keep catalog order.
    """

    def __init__(self, records: Iterable[FacilityRecord]) -> None:
        self._records: tuple[FacilityRecord, ...] = tuple(records)
        self._folded: tuple[str, ...] = tuple(record.address.casefold() for record in self._records)

    @classmethod
    def from_records(cls, rows: Iterable[Mapping[str, Any]]) -> CatalogIndex:
        """Build from raw catalog rows (``car_park_no``/``address``/``lat``/``lng``)."""
        records = [FacilityRecord.model_validate(row) for row in rows]
        missing = sum(1 for record in records if not record.has_coordinates)
        _logger.debug("Loaded %d facilities (%d without coordinates)", len(records), missing)
        return cls(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FacilityRecord]:
        return iter(self._records)

    def _matches(self, text: str) -> Iterator[FacilityRecord]:
        needle = text.casefold()
        if not needle:
            return
        for record, folded in zip(self._records, self._folded):
            if needle in folded:
                yield record

    def search(self, text: str) -> list[FacilityRecord]:
        """All facilities whose address contains *text*; empty text matches nothing."""
        return list(self._matches(text))

    def find_first(self, text: str) -> FacilityRecord | None:
        """First facility in catalog order whose address contains *text*."""
        return next(self._matches(text), None)
