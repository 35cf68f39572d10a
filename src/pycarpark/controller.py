"""Orchestration of search, availability check and routing.

:class:`CarparkController` owns the :class:`~pycarpark.state.SessionState`
and drives the catalog and service clients in response to user actions.

Three concerns run independently on one event loop:

* Search: every query change re-matches the catalog and fetches a fresh
  availability snapshot for the matches.
* Check: resolves one facility and its open-slot count.
* Route: resolves the origin, then fetches a driving path to the checked
  facility.

Each concern keeps a generation counter that is bumped when an operation
is triggered.  A result whose generation is no longer current is dropped
on arrival, so the latest trigger wins regardless of completion order.
Network calls are never cancelled; they run to completion and are
ignored.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import defaultdict
from collections.abc import Callable, Coroutine, Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from pycarpark._api.availability import AvailabilityClient
from pycarpark._api.geocode import Geocoder
from pycarpark._api.route import RouteClient
from pycarpark._constants import (
    MSG_CHECK_FIRST,
    MSG_FETCH_FAILED,
    MSG_LOCATION_DENIED,
    MSG_NO_AVAILABILITY,
    MSG_NOT_IN_MAPPING,
    MSG_ROUTE_FAILED,
)
from pycarpark._transport import Transport
from pycarpark.catalog import CatalogIndex
from pycarpark.config import CarparkConfig
from pycarpark.exceptions import (
    AvailabilityFetchError,
    CarparkError,
    CarparkTransportError,
    GeolocationDeniedError,
)
from pycarpark.location import GeolocationProvider, LocationResolver
from pycarpark.models.facility import FacilityRecord
from pycarpark.models.geo import LatLng
from pycarpark.models.route import RouteResult
from pycarpark.state.events import (
    ControllerEvent,
    FacilityChecked,
    OriginAddressChanged,
    QueryChanged,
    StateChanged,
)
from pycarpark.state.session import (
    CheckFailed,
    Checked,
    Checking,
    RouteFailed,
    RouteIdle,
    RouteReady,
    RouteResolving,
    RouteRouting,
    SearchPhase,
    SearchState,
    SessionState,
)

_logger = logging.getLogger(__name__)

E = TypeVar("E", bound=ControllerEvent)


@dataclass(frozen=True, slots=True)
class _RouteTicket:
    """Inputs of one route cycle, captured when it is triggered."""

    generation: int
    origin_address: str
    destination: LatLng
    previous: RouteReady | None


def _route_failure_message(exc: CarparkError) -> str:
    if isinstance(exc, GeolocationDeniedError):
        return MSG_LOCATION_DENIED
    if isinstance(exc, CarparkTransportError):
        return MSG_ROUTE_FAILED
    return str(exc) or MSG_ROUTE_FAILED


class CarparkController:
    """Single owner of the session state.

    Usage::

        async with HttpTransport(config) as transport:
            controller = CarparkController.create(catalog, transport, config=config)
            await controller.update_query("ang mo kio")
            await controller.select_suggestion(controller.state.matches[0])
            result = await controller.request_route()
    """

    def __init__(
        self,
        catalog: CatalogIndex,
        *,
        availability: AvailabilityClient,
        resolver: LocationResolver,
        router: RouteClient,
    ) -> None:
        self._catalog = catalog
        self._availability = availability
        self._resolver = resolver
        self._router = router
        self._state = SessionState()
        self._search_generation = 0
        self._check_generation = 0
        self._route_generation = 0
        self._handlers: defaultdict[type[ControllerEvent], list[Callable[[Any], None]]] = defaultdict(list)
        self._tasks: set[asyncio.Task[Any]] = set()

        self.on(OriginAddressChanged, self._on_origin_address_changed)
        self.on(FacilityChecked, self._on_facility_checked)

    @classmethod
    def create(
        cls,
        catalog: CatalogIndex,
        transport: Transport,
        *,
        config: CarparkConfig | None = None,
        geolocation: GeolocationProvider | None = None,
    ) -> CarparkController:
        """Wire the default service clients around *transport*."""
        config = config if config is not None else CarparkConfig()
        geocoder = Geocoder(config, transport)
        return cls(
            catalog,
            availability=AvailabilityClient(config, transport),
            resolver=LocationResolver(config, geocoder, geolocation),
            router=RouteClient(config, transport),
        )

    @property
    def state(self) -> SessionState:
        """Snapshot of the current session state."""
        return self._state.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on(self, event_type: type[E], handler: Callable[[E], None]) -> Callable[[], None]:
        """Register *handler* for *event_type*; returns an unsubscribe callable."""
        handlers = self._handlers[event_type]
        handlers.append(handler)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                handlers.remove(handler)

        return _unsubscribe

    def subscribe(self, callback: Callable[[SessionState], None]) -> Callable[[], None]:
        """Call *callback* with a state snapshot after every transition."""

        def _deliver(event: StateChanged) -> None:
            try:
                callback(event.state)
            except Exception:
                _logger.warning("State observer %r failed", callback, exc_info=True)

        return self.on(StateChanged, _deliver)

    def _emit(self, event: ControllerEvent) -> None:
        for handler in list(self._handlers.get(type(event), ())):
            handler(event)

    def _commit(self) -> None:
        if self._handlers.get(StateChanged):
            self._emit(StateChanged(state=self.state))

    @contextlib.contextmanager
    def _loading(self) -> Iterator[None]:
        self._state.pending_operations += 1
        self._commit()
        try:
            yield
        finally:
            self._state.pending_operations -= 1
            self._commit()

    # ------------------------------------------------------------------
    # Background work
    # ------------------------------------------------------------------

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Background operation failed", exc_info=exc)

    async def wait_idle(self) -> None:
        """Wait until every automatically triggered operation has finished."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel automatically triggered operations that are still running."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def update_query(self, text: str) -> None:
        """Handle a change of the search box text.

        Matches are updated immediately; slot counts follow once the
        snapshot for this exact query arrives.  A snapshot that arrives
        after a newer query was typed is discarded.
        """
        self._search_generation += 1
        generation = self._search_generation
        self._emit(QueryChanged(text=text))

        if not text.strip():
            self._state.search = SearchState(query_text=text)
            self._commit()
            return

        matches = tuple(self._catalog.search(text))
        if not matches:
            self._state.search = SearchState(query_text=text)
            self._commit()
            return

        self._state.search = SearchState(phase=SearchPhase.TYPING, query_text=text, matches=matches)
        self._commit()

        try:
            snapshot = await self._availability.fetch_all()
        except AvailabilityFetchError:
            if generation != self._search_generation:
                _logger.debug("Discarding failed availability fetch for superseded query %r", text)
                return
            _logger.warning("Availability for %r unavailable", text, exc_info=True)
            availability = {}
        else:
            if generation != self._search_generation:
                _logger.debug("Discarding stale availability for query %r", text)
                return
            availability = snapshot.lookup(facility.id for facility in matches)

        self._state.search = SearchState(
            query_text=text,
            matches=matches,
            match_availability=availability,
        )
        self._commit()

    async def select_suggestion(self, facility: FacilityRecord) -> Checked | None:
        """Pick a suggestion: fill the search box with its address and check it."""
        self._search_generation += 1
        self._state.search = SearchState(query_text=facility.address)
        self._commit()
        return await self.check(facility.address)

    # ------------------------------------------------------------------
    # Check
    # ------------------------------------------------------------------

    def _fail_check(self, message: str) -> None:
        self._state.check = CheckFailed(message=message)
        self._state.error_message = message
        # a route to a facility that is no longer selected is meaningless
        self._route_generation += 1
        self._state.route = RouteIdle()
        self._commit()

    async def check(self, text: str | None = None) -> Checked | None:
        """Check live availability for the first facility matching *text*.

        Blank or missing *text* falls back to the current search box
        text.  Returns the new ``Checked`` state, or ``None`` when the
        check failed or was superseded by a newer one.
        """
        search_text = text or self._state.search.query_text
        self._check_generation += 1
        generation = self._check_generation

        facility = self._catalog.find_first(search_text)
        if facility is None or facility.coordinates is None:
            self._fail_check(MSG_NOT_IN_MAPPING)
            return None

        previous = self._state.last_checked
        with self._loading():
            self._state.check = Checking(text=search_text, previous=previous)
            self._commit()
            try:
                snapshot = await self._availability.fetch_all()
            except AvailabilityFetchError:
                if generation != self._check_generation:
                    return None
                _logger.warning("Availability check for %s failed", facility.id, exc_info=True)
                self._fail_check(MSG_FETCH_FAILED)
                return None

            if generation != self._check_generation:
                _logger.debug("Discarding stale check result for %s", facility.id)
                return None

            lots = snapshot.lots_available(facility.id)
            if not isinstance(lots, int):
                self._fail_check(MSG_NO_AVAILABILITY)
                return None

            checked = Checked(facility=facility, lots_available=lots)
            self._state.check = checked
            self._state.error_message = ""
            self._commit()

        changed = previous is None or previous.facility.id != facility.id
        self._emit(FacilityChecked(facility=facility, lots_available=lots, changed=changed))
        return checked

    # ------------------------------------------------------------------
    # Route
    # ------------------------------------------------------------------

    def set_origin_address(self, address: str) -> None:
        """Update the typed origin; may trigger a route recomputation."""
        previous = self._state.origin_address
        if address == previous:
            return
        self._state.origin_address = address
        self._commit()
        self._emit(OriginAddressChanged(previous=previous, address=address))

    def _start_route(self) -> _RouteTicket | None:
        facility = self._state.selected_facility
        destination = facility.coordinates if facility is not None else None
        if destination is None:
            self._state.error_message = MSG_CHECK_FIRST
            self._commit()
            return None

        self._route_generation += 1
        shown = self._state.route
        if isinstance(shown, (RouteResolving, RouteRouting)):
            shown = shown.previous
        previous = shown if isinstance(shown, RouteReady) and shown.result.destination == destination else None
        return _RouteTicket(
            generation=self._route_generation,
            origin_address=self._state.origin_address,
            destination=destination,
            previous=previous,
        )

    def _is_current_route(self, ticket: _RouteTicket) -> bool:
        return ticket.generation == self._route_generation

    async def _run_route(self, ticket: _RouteTicket) -> RouteResult | None:
        with self._loading():
            if not self._is_current_route(ticket):
                return None
            self._state.route = RouteResolving(origin_address=ticket.origin_address, previous=ticket.previous)
            self._commit()
            try:
                origin = await self._resolver.resolve_origin(ticket.origin_address)
                if not self._is_current_route(ticket):
                    _logger.debug("Discarding stale origin for %r", ticket.origin_address)
                    return None
                self._state.route = RouteRouting(
                    origin_address=ticket.origin_address,
                    origin=origin,
                    previous=ticket.previous,
                )
                self._commit()
                result = await self._router.fetch_route_result(origin, ticket.destination)
            except CarparkError as exc:
                if not self._is_current_route(ticket):
                    _logger.debug("Discarding failure of superseded route cycle: %s", exc)
                    return None
                _logger.warning("Route computation failed: %s", exc, exc_info=isinstance(exc, CarparkTransportError))
                message = _route_failure_message(exc)
                self._state.route = RouteFailed(message=message)
                self._state.error_message = message
                self._commit()
                return None

            if not self._is_current_route(ticket):
                _logger.debug("Discarding stale route for %r", ticket.origin_address)
                return None
            self._state.route = RouteReady(result=result)
            self._state.error_message = ""
            self._commit()
            return result

    async def request_route(self) -> RouteResult | None:
        """Compute a route from the origin to the checked facility.

        Returns ``None`` when nothing is checked yet, when the cycle
        failed (see ``state.error_message``) or when a newer cycle
        superseded this one.
        """
        ticket = self._start_route()
        if ticket is None:
            return None
        return await self._run_route(ticket)

    def _trigger_route(self) -> None:
        ticket = self._start_route()
        if ticket is not None:
            self._spawn(self._run_route(ticket))

    def _drop_route(self) -> None:
        self._route_generation += 1
        route = self._state.route
        if isinstance(route, (RouteResolving, RouteRouting)):
            self._state.route = route.previous if route.previous is not None else RouteIdle()
            self._commit()

    def _on_origin_address_changed(self, event: OriginAddressChanged) -> None:
        if self._state.selected_facility is None:
            return
        if not event.address.strip():
            # blank means "use device location", which is only done on request
            self._drop_route()
            return
        self._trigger_route()

    def _on_facility_checked(self, event: FacilityChecked) -> None:
        if not event.changed:
            return
        if self._state.origin_address.strip():
            self._trigger_route()
            return
        self._route_generation += 1
        if not isinstance(self._state.route, RouteIdle):
            self._state.route = RouteIdle()
            self._commit()
