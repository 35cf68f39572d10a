"""Static catalog entry model."""

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator

from pycarpark.models._base import CarparkBaseModel, OptionalFloat
from pycarpark.models.geo import LatLng


class FacilityRecord(CarparkBaseModel):
    """A parking facility from the static catalog.

    Parameters
    ----------
    id : str
        Stable facility identifier (``car_park_no`` in the source data),
        shared with the availability feed's ``carpark_number``.
    address : str
        Human-readable street address; the text searches match against.
    lat : float or None
        Latitude, absent for entries without a mapped position.
    lng : float or None
        Longitude, absent for entries without a mapped position.
    """

    id: str = Field(validation_alias=AliasChoices("id", "car_park_no", "carpark_number"))
    address: str
    lat: OptionalFloat = None
    lng: OptionalFloat = None

    @field_validator("id", "address", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def coordinates(self) -> LatLng | None:
        """Position of the facility, or ``None`` when either axis is missing."""
        # 0.0 is a legitimate coordinate, so test against None explicitly
        if self.lat is None or self.lng is None:
            return None
        return LatLng(self.lat, self.lng)

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None
