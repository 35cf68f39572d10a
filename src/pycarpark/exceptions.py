"""Custom exception hierarchy for pycarpark."""

from __future__ import annotations


class CarparkError(Exception):
    """Base exception for all pycarpark errors."""


class CarparkConfigError(CarparkError):
    """Invalid configuration value."""


class CarparkTransportError(CarparkError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CarparkTimeoutError(CarparkTransportError, TimeoutError):
    """An external call did not complete within its deadline."""


class AvailabilityFetchError(CarparkTransportError):
    """The availability snapshot could not be fetched or parsed.

    Callers must read this as "snapshot unavailable", never as
    "every car park is full".
    """


class GeocodeFetchError(CarparkTransportError):
    """Transport failure while talking to the geocoding service."""


class RouteFetchError(CarparkTransportError):
    """Transport failure while talking to the routing service."""


class AddressNotFoundError(CarparkError):
    """The geocoding service returned no candidate for an address."""

    def __init__(self, message: str, *, address: str = "") -> None:
        self.address = address
        super().__init__(message)


class GeolocationError(CarparkError):
    """The device position could not be obtained."""


class GeolocationDeniedError(GeolocationError):
    """The user or platform refused access to the device position."""


class GeolocationUnavailableError(GeolocationError):
    """No device position is available (no provider, no fix, or deadline hit)."""
