"""Internal constants shared across the library."""

AVAILABILITY_ENDPOINT = "https://api.data.gov.sg/v1/transport/carpark-availability"
GEOCODING_ENDPOINT = "https://nominatim.openstreetmap.org/search"
ROUTING_ENDPOINT = "https://router.project-osrm.org/route/v1/driving"
USER_AGENT = "pycarpark/0.1 (+https://github.com/pycarpark/pycarpark)"

DEFAULT_REQUEST_TIMEOUT: float = 10.0
DEFAULT_GEOLOCATION_TIMEOUT: float = 10.0

# ------------------------------------------------------------------
# User-facing messages
# ------------------------------------------------------------------

MSG_NOT_IN_MAPPING = "Location not found in mapping."
MSG_NO_AVAILABILITY = "No availability data for this carpark."
MSG_FETCH_FAILED = "Failed to fetch data."
MSG_CHECK_FIRST = "Please check carpark availability first."
MSG_ROUTE_FAILED = "Failed to calculate route. Please check your address or location access."
MSG_LOCATION_DENIED = "Failed to get current location. Please allow location access."
MSG_LOCATION_UNAVAILABLE = "Current location is unavailable. Please enter a starting address."
MSG_ADDRESS_NOT_FOUND = "Address not found"
