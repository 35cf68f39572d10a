"""Driving route client.

Endpoint:
  - ``GET {routing_endpoint}/{lon},{lat};{lon},{lat}?overview=full&geometries=geojson``

The service speaks GeoJSON ``[lon, lat]``; everything returned from here
is ``(lat, lng)``.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pycarpark._transport import Transport
from pycarpark.config import CarparkConfig
from pycarpark.exceptions import CarparkTransportError, RouteFetchError
from pycarpark.models.geo import LatLng
from pycarpark.models.route import RouteResponse, RouteResult

_logger = logging.getLogger(__name__)

_ENDPOINT = "route"
_ROUTE_PARAMS = {"overview": "full", "geometries": "geojson"}


def build_route_url(base: str, origin: LatLng, destination: LatLng) -> str:
    return f"{base.rstrip('/')}/{origin.as_lon_lat()};{destination.as_lon_lat()}"


class RouteClient:
    """Computes driving paths between two points."""

    def __init__(self, config: CarparkConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def fetch_route_result(self, origin: LatLng, destination: LatLng) -> RouteResult:
        """Fetch the first route with its distance and duration.

        A response with zero routes yields a result with an empty path.
        """
        url = build_route_url(self._config.routing_endpoint, origin, destination)
        try:
            payload = await self._transport.get_json(url, params=_ROUTE_PARAMS, endpoint=_ENDPOINT)
        except CarparkTransportError as exc:
            raise RouteFetchError(
                f"Route fetch failed: {exc}",
                status_code=exc.status_code,
                endpoint=_ENDPOINT,
            ) from exc

        try:
            response = RouteResponse.model_validate(payload)
        except ValidationError as exc:
            raise RouteFetchError(
                f"Malformed route payload: {exc.error_count()} validation error(s)",
                endpoint=_ENDPOINT,
            ) from exc

        if not response.routes:
            _logger.debug("No route between %s and %s (code=%s)", origin, destination, response.code)
            return RouteResult(origin=origin, destination=destination)

        first = response.routes[0]
        path = first.path()
        _logger.debug("Route %s -> %s: %d points", origin, destination, len(path))
        return RouteResult(
            origin=origin,
            destination=destination,
            path=path,
            distance_m=first.distance,
            duration_s=first.duration,
        )

    async def fetch_route(self, origin: LatLng, destination: LatLng) -> list[LatLng]:
        """Ordered ``(lat, lng)`` points of the driving path; empty if none exists."""
        result = await self.fetch_route_result(origin, destination)
        return list(result.path)
