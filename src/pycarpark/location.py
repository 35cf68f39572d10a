"""Origin resolution: device position or a geocoded address."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from pycarpark._api.geocode import Geocoder
from pycarpark._constants import MSG_LOCATION_UNAVAILABLE
from pycarpark.config import CarparkConfig
from pycarpark.exceptions import GeolocationError, GeolocationUnavailableError
from pycarpark.models.geo import LatLng

_logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    """Platform capability that yields the device's current position.

    Implementations raise :class:`~pycarpark.exceptions.GeolocationDeniedError`
    when access is refused and
    :class:`~pycarpark.exceptions.GeolocationUnavailableError` when no fix
    can be produced.
    """

    async def current_position(self) -> LatLng:
        ...


class FixedGeolocation:
    """A provider that always reports the same, already known position."""

    def __init__(self, position: LatLng) -> None:
        self._position = position

    async def current_position(self) -> LatLng:
        return self._position


class NoGeolocation:
    """Provider for hosts without any positioning capability."""

    async def current_position(self) -> LatLng:
        raise GeolocationUnavailableError(MSG_LOCATION_UNAVAILABLE)


class LocationResolver:
    """Picks the user's origin.

    A blank typed address means "where I am now" and goes to the
    geolocation provider; anything else is geocoded.
    """

    def __init__(
        self,
        config: CarparkConfig,
        geocoder: Geocoder,
        geolocation: GeolocationProvider | None = None,
    ) -> None:
        self._config = config
        self._geocoder = geocoder
        self._geolocation = geolocation if geolocation is not None else NoGeolocation()

    async def resolve_origin(self, typed_address: str) -> LatLng:
        address = typed_address.strip()
        if address:
            return await self._geocoder.resolve(address)

        try:
            async with asyncio.timeout(self._config.geolocation_timeout):
                position = await self._geolocation.current_position()
        except GeolocationError:
            raise
        except TimeoutError as exc:
            raise GeolocationUnavailableError(
                f"Timed out after {self._config.geolocation_timeout:g}s waiting for the current location."
            ) from exc
        except Exception as exc:
            _logger.warning("Location provider failed: %s", exc, exc_info=True)
            raise GeolocationUnavailableError(MSG_LOCATION_UNAVAILABLE) from exc

        _logger.debug("Device position: %s", position)
        return position
