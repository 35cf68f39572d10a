"""Data models for catalog entries and service responses."""

from pycarpark.models._base import CarparkBaseModel, safe_float, safe_int, safe_str
from pycarpark.models.availability import (
    UNKNOWN,
    AvailabilitySnapshot,
    CarparkEntry,
    CarparkInfo,
    LotsAvailable,
)
from pycarpark.models.facility import FacilityRecord
from pycarpark.models.geo import LatLng
from pycarpark.models.route import RouteLeg, RouteResponse, RouteResult

__all__ = [
    "UNKNOWN",
    "AvailabilitySnapshot",
    "CarparkBaseModel",
    "CarparkEntry",
    "CarparkInfo",
    "FacilityRecord",
    "LatLng",
    "LotsAvailable",
    "RouteLeg",
    "RouteResponse",
    "RouteResult",
    "safe_float",
    "safe_int",
    "safe_str",
]
