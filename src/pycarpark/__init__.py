"""pycarpark - Async car park availability lookup and routing."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycarpark")
except PackageNotFoundError:
    __version__ = "0+local"
from pycarpark._api.availability import AvailabilityClient
from pycarpark._api.geocode import Geocoder
from pycarpark._api.route import RouteClient
from pycarpark._transport import HttpTransport, Transport
from pycarpark.catalog import CatalogIndex
from pycarpark.config import CarparkConfig
from pycarpark.controller import CarparkController
from pycarpark.exceptions import (
    AddressNotFoundError,
    AvailabilityFetchError,
    CarparkConfigError,
    CarparkError,
    CarparkTimeoutError,
    CarparkTransportError,
    GeocodeFetchError,
    GeolocationDeniedError,
    GeolocationError,
    GeolocationUnavailableError,
    RouteFetchError,
)
from pycarpark.location import FixedGeolocation, GeolocationProvider, LocationResolver, NoGeolocation
from pycarpark.models import (
    UNKNOWN,
    AvailabilitySnapshot,
    FacilityRecord,
    LatLng,
    LotsAvailable,
    RouteResult,
)
from pycarpark.state import SessionState

__all__ = [
    "__version__",
    "UNKNOWN",
    "AddressNotFoundError",
    "AvailabilityClient",
    "AvailabilityFetchError",
    "AvailabilitySnapshot",
    "CarparkConfig",
    "CarparkConfigError",
    "CarparkController",
    "CarparkError",
    "CarparkTimeoutError",
    "CarparkTransportError",
    "CatalogIndex",
    "FacilityRecord",
    "FixedGeolocation",
    "GeocodeFetchError",
    "Geocoder",
    "GeolocationDeniedError",
    "GeolocationError",
    "GeolocationProvider",
    "GeolocationUnavailableError",
    "HttpTransport",
    "LatLng",
    "LocationResolver",
    "LotsAvailable",
    "NoGeolocation",
    "RouteClient",
    "RouteFetchError",
    "RouteResult",
    "SessionState",
    "Transport",
]
