"""Route computation models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from pycarpark.models._base import CarparkBaseModel, OptionalFloat
from pycarpark.models.geo import LatLng


class RouteGeometry(CarparkBaseModel):
    coordinates: tuple[tuple[float, float], ...] = ()


class RouteLeg(CarparkBaseModel):
    """A single route as returned by the routing service (``[lon, lat]`` order)."""

    geometry: RouteGeometry = Field(default_factory=RouteGeometry)
    distance: OptionalFloat = None
    duration: OptionalFloat = None

    def path(self) -> tuple[LatLng, ...]:
        """Geometry reordered to ``(lat, lng)``."""
        return tuple(LatLng.from_lon_lat(pair) for pair in self.geometry.coordinates)


class RouteResponse(CarparkBaseModel):
    code: str | None = None
    routes: tuple[RouteLeg, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _null_routes(cls, values: Any) -> Any:
        if isinstance(values, dict) and values.get("routes") is None:
            return {**values, "routes": ()}
        return values


class RouteResult(CarparkBaseModel):
    """A completed route computation.

    Replaces any previous route wholesale.  ``path`` is empty when the
    routing service found no way between the two points.
    """

    origin: LatLng
    destination: LatLng
    path: tuple[LatLng, ...] = ()
    distance_m: float | None = None
    duration_s: float | None = None

    @property
    def found(self) -> bool:
        return bool(self.path)
