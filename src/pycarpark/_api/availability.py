"""Live availability feed client.

Endpoint:
  - ``GET {availability_endpoint}`` (no parameters)
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pycarpark._transport import Transport
from pycarpark.config import CarparkConfig
from pycarpark.exceptions import AvailabilityFetchError, CarparkTransportError
from pycarpark.models.availability import AvailabilitySnapshot

_logger = logging.getLogger(__name__)

_ENDPOINT = "availability"


class AvailabilityClient:
    """Fetches a fresh snapshot of open-slot counts on every call."""

    def __init__(self, config: CarparkConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def fetch_all(self) -> AvailabilitySnapshot:
        """Fetch one snapshot covering every facility in the feed.

        Raises
        ------
        AvailabilityFetchError
            On transport failure, timeout or a body that is not the
            expected feed shape.
        """
        try:
            payload = await self._transport.get_json(self._config.availability_endpoint, endpoint=_ENDPOINT)
        except CarparkTransportError as exc:
            raise AvailabilityFetchError(
                f"Availability fetch failed: {exc}",
                status_code=exc.status_code,
                endpoint=_ENDPOINT,
            ) from exc

        try:
            snapshot = AvailabilitySnapshot.from_payload(payload)
        except ValidationError as exc:
            raise AvailabilityFetchError(
                f"Malformed availability payload: {exc.error_count()} validation error(s)",
                endpoint=_ENDPOINT,
            ) from exc

        _logger.debug("Availability snapshot: %d entries at %s", len(snapshot.entries), snapshot.timestamp)
        return snapshot
