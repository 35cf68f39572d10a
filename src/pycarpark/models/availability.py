"""Live availability feed models."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Final, Literal

from pydantic import Field, field_validator, model_validator

from pycarpark.models._base import CarparkBaseModel, OptionalInt, safe_str

UNKNOWN: Final = "unknown"
"""Slot-count sentinel for facilities the snapshot has no number for."""

LotsAvailable = int | Literal["unknown"]


class CarparkInfo(CarparkBaseModel):
    """One lot-type block of a facility's availability entry."""

    total_lots: OptionalInt = None
    lot_type: str | None = None
    lots_available: OptionalInt = None


class CarparkEntry(CarparkBaseModel):
    """Availability entry for a single facility."""

    carpark_number: str
    update_datetime: str | None = None
    carpark_info: tuple[CarparkInfo, ...] = ()

    @field_validator("carpark_number", mode="before")
    @classmethod
    def _normalize_number(cls, value: Any) -> Any:
        return safe_str(value) or value

    @field_validator("carpark_info", mode="before")
    @classmethod
    def _null_info(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def lots_available(self) -> int | None:
        """Open slots from the first info block, ``None`` if there is none."""
        if not self.carpark_info:
            return None
        return self.carpark_info[0].lots_available


class AvailabilitySnapshot(CarparkBaseModel):
    """One point-in-time fetch of availability across all facilities.

    Built from the feed body with :meth:`from_payload`; lookups never
    raise for unknown identifiers.
    """

    timestamp: datetime | None = None
    entries: dict[str, CarparkEntry] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_items(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        if "items" not in values:
            if not values or "entries" in values:
                return values
            raise ValueError("availability payload has no 'items'")
        items = values["items"]
        if not isinstance(items, list):
            raise ValueError("'items' must be a list")
        if not items:
            return {"entries": {}}
        first = items[0]
        if not isinstance(first, dict):
            raise ValueError("'items[0]' must be an object")
        data = first.get("carpark_data", [])
        if not isinstance(data, list):
            raise ValueError("'carpark_data' must be a list")
        entries: dict[str, Any] = {}
        for raw in data:
            if not isinstance(raw, dict) or safe_str(raw.get("carpark_number")) is None:
                continue
            entry = CarparkEntry.model_validate(raw)
            # keep the first occurrence, the feed occasionally repeats a number
            entries.setdefault(entry.carpark_number, entry)
        return {"timestamp": first.get("timestamp"), "entries": entries}

    @classmethod
    def from_payload(cls, payload: Any) -> AvailabilitySnapshot:
        return cls.model_validate(payload)

    def entry(self, facility_id: str) -> CarparkEntry | None:
        return self.entries.get(facility_id)

    def lots_available(self, facility_id: str) -> LotsAvailable:
        """Open slots for *facility_id*, or :data:`UNKNOWN`."""
        entry = self.entries.get(facility_id)
        if entry is None or entry.lots_available is None:
            return UNKNOWN
        return entry.lots_available

    def lookup(self, facility_ids: Iterable[str]) -> dict[str, LotsAvailable]:
        """Slot counts keyed by exactly the requested identifiers."""
        return {facility_id: self.lots_available(facility_id) for facility_id in facility_ids}
