"""Session state owned by the controller.

Each concern is a tagged variant so that combinations such as "route
visible without an origin" cannot be expressed:

* Search: ``SearchState`` with an idle/typing phase
* Check: ``CheckIdle | Checking | Checked | CheckFailed``
* Route: ``RouteIdle | RouteResolving | RouteRouting | RouteReady | RouteFailed``

The flat accessors (``selected_facility``, ``route_visible`` ...) are
derived from the variants.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from pycarpark.models.availability import LotsAvailable
from pycarpark.models.facility import FacilityRecord
from pycarpark.models.geo import LatLng
from pycarpark.models.route import RouteResult


class _Variant(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class SearchPhase(StrEnum):
    IDLE = "idle"
    TYPING = "typing"


class SearchState(_Variant):
    phase: SearchPhase = SearchPhase.IDLE
    query_text: str = ""
    matches: tuple[FacilityRecord, ...] = ()
    match_availability: dict[str, LotsAvailable] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Check
# ---------------------------------------------------------------------------


class CheckIdle(_Variant):
    kind: Literal["idle"] = "idle"


class Checked(_Variant):
    kind: Literal["checked"] = "checked"
    facility: FacilityRecord
    lots_available: int


class Checking(_Variant):
    kind: Literal["checking"] = "checking"
    text: str
    previous: Checked | None = None


class CheckFailed(_Variant):
    kind: Literal["failed"] = "failed"
    message: str


CheckState = Annotated[CheckIdle | Checking | Checked | CheckFailed, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------


class RouteIdle(_Variant):
    kind: Literal["idle"] = "idle"


class RouteReady(_Variant):
    kind: Literal["ready"] = "ready"
    result: RouteResult


class RouteResolving(_Variant):
    kind: Literal["resolving"] = "resolving"
    origin_address: str
    previous: RouteReady | None = None


class RouteRouting(_Variant):
    kind: Literal["routing"] = "routing"
    origin_address: str
    origin: LatLng
    previous: RouteReady | None = None


class RouteFailed(_Variant):
    kind: Literal["failed"] = "failed"
    message: str


RouteState = Annotated[
    RouteIdle | RouteResolving | RouteRouting | RouteReady | RouteFailed,
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class SessionState(BaseModel):
    """Everything the UI layer renders, mutated only by the controller."""

    model_config = ConfigDict(extra="forbid")

    search: SearchState = Field(default_factory=SearchState)
    check: CheckState = Field(default_factory=CheckIdle)
    origin_address: str = ""
    route: RouteState = Field(default_factory=RouteIdle)
    error_message: str = ""
    pending_operations: int = 0

    @property
    def query_text(self) -> str:
        return self.search.query_text

    @property
    def matches(self) -> tuple[FacilityRecord, ...]:
        return self.search.matches

    @property
    def match_availability(self) -> dict[str, LotsAvailable]:
        return self.search.match_availability

    def suggestions(self) -> list[tuple[FacilityRecord, LotsAvailable | None]]:
        """Matches paired with their slot count (``None`` while not yet known)."""
        return [(facility, self.search.match_availability.get(facility.id)) for facility in self.search.matches]

    @property
    def last_checked(self) -> Checked | None:
        check = self.check
        if isinstance(check, Checked):
            return check
        if isinstance(check, Checking):
            return check.previous
        return None

    @property
    def selected_facility(self) -> FacilityRecord | None:
        checked = self.last_checked
        return checked.facility if checked is not None else None

    @property
    def selected_availability(self) -> int | None:
        checked = self.last_checked
        return checked.lots_available if checked is not None else None

    @property
    def current_route(self) -> RouteResult | None:
        route = self.route
        if isinstance(route, RouteReady):
            return route.result
        if isinstance(route, (RouteResolving, RouteRouting)) and route.previous is not None:
            return route.previous.result
        return None

    @property
    def route_visible(self) -> bool:
        return self.current_route is not None

    @property
    def origin_coords(self) -> LatLng | None:
        result = self.current_route
        return result.origin if result is not None else None

    @property
    def route_path(self) -> tuple[LatLng, ...]:
        result = self.current_route
        return result.path if result is not None else ()

    @property
    def busy(self) -> bool:
        return self.pending_operations > 0
