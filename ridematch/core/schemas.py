"""Core data models for the ride matching engine."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ridematch.core.config import MatchPreferences

RideStatus = Literal["active", "completed", "cancelled"]

# Effective rating for drivers with no ratings yet.
DEFAULT_DRIVER_RATING = 4.0


class GeoPoint(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class RideCandidate(BaseModel):
    """A driver-posted ride as exported by the ride store.

    Store records use camelCase keys (``driverId``, ``pickupLat``, ``from``);
    snake_case field names are accepted as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    driver_id: str = Field(alias="driverId")
    driver_name: str = Field(default="", alias="driverName")
    driver_phone: str | None = Field(default=None, alias="driverPhone")
    driver_rating: float | None = Field(default=None, ge=0.0, le=5.0, alias="driverRating")
    pickup_label: str = Field(default="", alias="from")
    dropoff_label: str = Field(default="", alias="to")
    pickup_lat: float = Field(alias="pickupLat")
    pickup_lng: float = Field(alias="pickupLng")
    dropoff_lat: float = Field(alias="dropoffLat")
    dropoff_lng: float = Field(alias="dropoffLng")
    date: str
    time: str
    price: float = Field(ge=0.0)
    total_seats: int = Field(ge=0, alias="totalSeats")
    available_seats: int = Field(ge=0, alias="availableSeats")
    status: RideStatus = "active"
    passengers: tuple[str, ...] = ()
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @model_validator(mode="after")
    def seats_within_total(self) -> "RideCandidate":
        if self.available_seats > self.total_seats:
            msg = (
                f"available_seats ({self.available_seats}) exceeds "
                f"total_seats ({self.total_seats})"
            )
            raise ValueError(msg)
        return self

    @property
    def pickup_point(self) -> GeoPoint:
        return GeoPoint(lat=self.pickup_lat, lng=self.pickup_lng)

    @property
    def dropoff_point(self) -> GeoPoint:
        return GeoPoint(lat=self.dropoff_lat, lng=self.dropoff_lng)

    @property
    def effective_driver_rating(self) -> float:
        """Driver rating used for scoring; unrated drivers (None or 0) get 4.0."""
        return self.driver_rating or DEFAULT_DRIVER_RATING


class SearchIntent(BaseModel):
    """A rider's one-shot query."""

    model_config = ConfigDict(frozen=True)

    pickup: GeoPoint
    dropoff: GeoPoint
    date: str
    time: str
    preferences: MatchPreferences | None = None


class MatchScore(BaseModel):
    """Five-component evaluation of one ride against one search intent.

    ``time_difference`` is None when a departure time could not be parsed and
    the time-parse policy does not alias it to midnight.
    """

    model_config = ConfigDict(frozen=True)

    ride_id: str
    total_score: float = Field(ge=0.0)
    pickup_distance_score: float = Field(ge=0.0, le=20.0)
    dropoff_distance_score: float = Field(ge=0.0, le=20.0)
    time_score: float = Field(ge=0.0, le=30.0)
    price_score: float = Field(ge=0.0, le=15.0)
    rating_score: float = Field(ge=0.0, le=15.0)
    pickup_distance: float = Field(ge=0.0)
    dropoff_distance: float = Field(ge=0.0)
    time_difference: int | None = None


class RideMatch(BaseModel):
    """Wrapper that pairs a frozen RideCandidate with its match score."""

    model_config = ConfigDict(frozen=True)

    ride: RideCandidate
    match_score: MatchScore
    match_percentage: int = Field(ge=0, le=100)


class MatchQuality(BaseModel):
    """Qualitative label for a match percentage, with UI color and icon tokens."""

    model_config = ConfigDict(frozen=True)

    label: str
    color: str
    icon: str
