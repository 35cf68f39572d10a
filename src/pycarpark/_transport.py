"""HTTP transport for the JSON GET services."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pycarpark.config import CarparkConfig
from pycarpark.exceptions import CarparkTimeoutError, CarparkTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        endpoint: str = "",
    ) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed transport with a per-request deadline.

    Usage::

        async with HttpTransport(config) as transport:
            body = await transport.get_json(url, endpoint="availability")
    """

    def __init__(
        self,
        config: CarparkConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http = session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def __aenter__(self) -> HttpTransport:
        self._require_session()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._external_session and self._http is not None:
            await self._http.close()
        self._http = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http is None:
            self._http = aiohttp.ClientSession()
            self._external_session = False
        return self._http

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        endpoint: str = "",
    ) -> Any:
        """GET *url* and return the decoded JSON body."""
        http = self._require_session()
        label = endpoint or url
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s params=%s", url, dict(params) if params else {})

        try:
            async with http.get(url, params=params, headers=headers, timeout=self._timeout) as resp:
                try:
                    text = await resp.text()
                except UnicodeDecodeError as exc:
                    raise CarparkTransportError(
                        f"Undecodable body from {label}",
                        status_code=resp.status,
                        endpoint=label,
                    ) from exc
                if resp.status >= 400:
                    raise CarparkTransportError(
                        f"HTTP {resp.status} from {label}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=label,
                    )
        except CarparkTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise CarparkTimeoutError(
                f"Request to {label} timed out after {self._config.request_timeout:g}s",
                endpoint=label,
            ) from exc
        except aiohttp.ClientError as exc:
            raise CarparkTransportError(
                f"Request to {label} failed: {exc}",
                endpoint=label,
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise CarparkTransportError(
                f"Invalid JSON from {label}: {text[:200]}",
                endpoint=label,
            ) from exc
