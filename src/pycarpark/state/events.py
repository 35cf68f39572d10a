"""Controller events.

User actions and completed transitions are published as these events;
the auto-route trigger and external observers subscribe to them.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from pycarpark.models.facility import FacilityRecord
from pycarpark.state.session import SessionState


class ControllerEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class QueryChanged(ControllerEvent):
    """The search box text changed."""

    text: str


class OriginAddressChanged(ControllerEvent):
    """The typed origin address changed (empty means "use device location")."""

    previous: str
    address: str


class FacilityChecked(ControllerEvent):
    """A Check completed successfully for *facility*."""

    facility: FacilityRecord
    lots_available: int
    changed: bool = Field(description="Whether the selection differs from the previous one.")


class StateChanged(ControllerEvent):
    """Session state after a transition."""

    state: SessionState
