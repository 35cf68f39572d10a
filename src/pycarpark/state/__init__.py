"""Session state and controller events.

The controller is the only writer of :class:`SessionState`; everything
else observes snapshots delivered through ``StateChanged`` events.
"""

from pycarpark.state.events import (
    ControllerEvent,
    FacilityChecked,
    OriginAddressChanged,
    QueryChanged,
    StateChanged,
)
from pycarpark.state.session import (
    CheckFailed,
    CheckIdle,
    Checked,
    Checking,
    CheckState,
    RouteFailed,
    RouteIdle,
    RouteReady,
    RouteResolving,
    RouteRouting,
    RouteState,
    SearchPhase,
    SearchState,
    SessionState,
)

__all__ = [
    "CheckFailed",
    "CheckIdle",
    "CheckState",
    "Checked",
    "Checking",
    "ControllerEvent",
    "FacilityChecked",
    "OriginAddressChanged",
    "QueryChanged",
    "RouteFailed",
    "RouteIdle",
    "RouteReady",
    "RouteResolving",
    "RouteRouting",
    "RouteState",
    "SearchPhase",
    "SearchState",
    "SessionState",
    "StateChanged",
]
