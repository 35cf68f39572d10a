"""Geographic coordinate types."""

from __future__ import annotations

from typing import NamedTuple


class LatLng(NamedTuple):
    """A WGS84 position in (latitude, longitude) order."""

    lat: float
    lng: float

    @property
    def is_valid(self) -> bool:
        """Whether both components lie inside their legal ranges."""
        return -90.0 <= self.lat <= 90.0 and -180.0 <= self.lng <= 180.0

    @classmethod
    def from_lon_lat(cls, pair: list[float] | tuple[float, ...]) -> LatLng:
        """Build from a GeoJSON ``[lon, lat]`` pair."""
        lon, lat = pair[0], pair[1]
        return cls(float(lat), float(lon))

    def as_lon_lat(self) -> str:
        """Render as the ``lon,lat`` path segment routing services expect."""
        return f"{self.lng},{self.lat}"
