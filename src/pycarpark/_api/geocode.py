"""Free-text address geocoding.

Endpoint:
  - ``GET {geocoding_endpoint}?format=json&q=<address>``
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pycarpark._constants import MSG_ADDRESS_NOT_FOUND
from pycarpark._transport import Transport
from pycarpark.config import CarparkConfig
from pycarpark.exceptions import AddressNotFoundError, CarparkTransportError, GeocodeFetchError
from pycarpark.models._base import CarparkBaseModel, OptionalFloat
from pycarpark.models.geo import LatLng

_logger = logging.getLogger(__name__)

_ENDPOINT = "geocode"


class GeocodeCandidate(CarparkBaseModel):
    """One search hit; the service sends coordinates as numeric strings."""

    lat: OptionalFloat = None
    lon: OptionalFloat = None
    display_name: str | None = None

    @property
    def position(self) -> LatLng | None:
        if self.lat is None or self.lon is None:
            return None
        return LatLng(self.lat, self.lon)


def _first_candidate(payload: Any) -> GeocodeCandidate | None:
    if not isinstance(payload, list):
        raise GeocodeFetchError("Geocoding response is not a list", endpoint=_ENDPOINT)
    if not payload:
        return None
    try:
        return GeocodeCandidate.model_validate(payload[0])
    except ValidationError as exc:
        raise GeocodeFetchError(f"Malformed geocoding candidate: {exc.error_count()} error(s)", endpoint=_ENDPOINT) from exc


class Geocoder:
    """Resolves an address to coordinates using the first returned candidate."""

    def __init__(self, config: CarparkConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    def _params(self, address: str) -> dict[str, str]:
        params = {"format": "json", "q": address}
        if self._config.geocoding_country_codes:
            params["countrycodes"] = self._config.geocoding_country_codes
        return params

    async def resolve(self, address: str) -> LatLng:
        """Geocode *address*.

        Raises
        ------
        ValueError
            If *address* is blank.
        AddressNotFoundError
            If the service returns no usable candidate.
        GeocodeFetchError
            On transport failure or a malformed body.
        """
        query = address.strip()
        if not query:
            raise ValueError("address must be non-empty")

        try:
            payload = await self._transport.get_json(
                self._config.geocoding_endpoint,
                params=self._params(query),
                endpoint=_ENDPOINT,
            )
        except CarparkTransportError as exc:
            raise GeocodeFetchError(
                f"Address lookup failed: {exc}",
                status_code=exc.status_code,
                endpoint=_ENDPOINT,
            ) from exc

        candidate = _first_candidate(payload)
        if candidate is None or candidate.position is None:
            raise AddressNotFoundError(MSG_ADDRESS_NOT_FOUND, address=query)

        position = candidate.position
        _logger.debug("Geocoded %r -> %s (%s)", query, position, candidate.display_name)
        return position
