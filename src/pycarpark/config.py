"""Client configuration for pycarpark."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycarpark._constants import (
    AVAILABILITY_ENDPOINT,
    DEFAULT_GEOLOCATION_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    GEOCODING_ENDPOINT,
    ROUTING_ENDPOINT,
    USER_AGENT,
)
from pycarpark.exceptions import CarparkConfigError


def _env_timeout(name: str, value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise CarparkConfigError(f"{name} must be a number of seconds, got {value!r}") from exc
    return parsed


@dataclasses.dataclass(frozen=True)
class CarparkConfig:
    """Service endpoints and per-call limits.

    Parameters
    ----------
    availability_endpoint : str
        Live car park availability feed (single GET, no parameters).
    geocoding_endpoint : str
        Free-text address search returning a JSON candidate list.
    routing_endpoint : str
        Driving route service base URL; ``/{lon},{lat};{lon},{lat}`` is appended.
    request_timeout : float
        Total deadline in seconds for each HTTP call.
    geolocation_timeout : float
        Deadline in seconds for obtaining the device position.
    user_agent : str
        ``User-Agent`` header sent with every request.
    geocoding_country_codes : str or None
        Optional comma-separated ISO country filter for the geocoder
        (e.g. ``"sg"``).
    """

    availability_endpoint: str = AVAILABILITY_ENDPOINT
    geocoding_endpoint: str = GEOCODING_ENDPOINT
    routing_endpoint: str = ROUTING_ENDPOINT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    geolocation_timeout: float = DEFAULT_GEOLOCATION_TIMEOUT
    user_agent: str = USER_AGENT
    geocoding_country_codes: str | None = None

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise CarparkConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.geolocation_timeout <= 0:
            raise CarparkConfigError(f"geolocation_timeout must be positive, got {self.geolocation_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> CarparkConfig:
        """Create configuration from environment variables.

        Reads optional ``CARPARK_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        CarparkConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CARPARK_AVAILABILITY_ENDPOINT": "availability_endpoint",
            "CARPARK_GEOCODING_ENDPOINT": "geocoding_endpoint",
            "CARPARK_ROUTING_ENDPOINT": "routing_endpoint",
            "CARPARK_USER_AGENT": "user_agent",
            "CARPARK_GEOCODING_COUNTRY_CODES": "geocoding_country_codes",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # timeouts are numeric, handle separately
        for env_key, field_name in (
            ("CARPARK_REQUEST_TIMEOUT", "request_timeout"),
            ("CARPARK_GEOLOCATION_TIMEOUT", "geolocation_timeout"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_timeout(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
