"""Hard-constraint filter chain for ride candidates.

Filter order:
  1. ActiveRideFilter         — status "active" with at least one free seat
  2. MinSeatsFilter           — optional, available seats >= requested
  3. SameDateFilter           — optional, ride date == rider date
  4. MaxPickupDistanceFilter  — optional, great-circle pickup distance cap
  5. MaxDropoffDistanceFilter — optional, great-circle dropoff distance cap

MinDriverRatingFilter is not part of the constraint chain; the recommender
applies it from MatchPreferences.min_driver_rating.
"""

import logging
from collections.abc import Callable

from ridematch.core.config import ConstraintConfig
from ridematch.core.schemas import GeoPoint, RideCandidate, SearchIntent
from ridematch.matching.geo import haversine_km
from ridematch.matching.timeparse import parse_ride_date

logger = logging.getLogger(__name__)

# A filter is a callable that takes rides and returns a subset.
Filter = Callable[[list[RideCandidate]], list[RideCandidate]]


class ActiveRideFilter:
    """Keep only active rides that still have available seats."""

    def __call__(self, rides: list[RideCandidate]) -> list[RideCandidate]:
        result = [r for r in rides if r.status == "active" and r.available_seats > 0]
        removed = len(rides) - len(result)
        if removed:
            logger.debug("ActiveRideFilter: removed %d rides", removed)
        return result


class MinSeatsFilter:
    """Keep rides with at least ``min_seats`` available seats."""

    def __init__(self, min_seats: int) -> None:
        self._min_seats = min_seats

    def __call__(self, rides: list[RideCandidate]) -> list[RideCandidate]:
        result = [r for r in rides if r.available_seats >= self._min_seats]
        removed = len(rides) - len(result)
        if removed:
            logger.debug("MinSeatsFilter: removed %d rides", removed)
        return result


class SameDateFilter:
    """Keep rides departing on the rider's requested calendar date.

    Dates are compared after parsing, so "2025-06-01" matches "2025/06/01".
    A ride whose date cannot be parsed is removed.
    """

    def __init__(self, rider_date: str) -> None:
        self._target = parse_ride_date(rider_date)
        self._raw = rider_date

    def __call__(self, rides: list[RideCandidate]) -> list[RideCandidate]:
        if self._target is None:
            result = [r for r in rides if r.date == self._raw]
        else:
            result = [r for r in rides if parse_ride_date(r.date) == self._target]
        removed = len(rides) - len(result)
        if removed:
            logger.debug("SameDateFilter: removed %d rides", removed)
        return result


class MaxPickupDistanceFilter:
    """Remove rides whose pickup is farther than ``max_km`` from the rider's pickup."""

    def __init__(self, rider_pickup: GeoPoint, max_km: float) -> None:
        self._point = rider_pickup
        self._max_km = max_km

    def __call__(self, rides: list[RideCandidate]) -> list[RideCandidate]:
        result = [r for r in rides if haversine_km(self._point, r.pickup_point) <= self._max_km]
        removed = len(rides) - len(result)
        if removed:
            logger.debug("MaxPickupDistanceFilter: removed %d rides", removed)
        return result


class MaxDropoffDistanceFilter:
    """Remove rides whose dropoff is farther than ``max_km`` from the rider's dropoff."""

    def __init__(self, rider_dropoff: GeoPoint, max_km: float) -> None:
        self._point = rider_dropoff
        self._max_km = max_km

    def __call__(self, rides: list[RideCandidate]) -> list[RideCandidate]:
        result = [r for r in rides if haversine_km(self._point, r.dropoff_point) <= self._max_km]
        removed = len(rides) - len(result)
        if removed:
            logger.debug("MaxDropoffDistanceFilter: removed %d rides", removed)
        return result


class MinDriverRatingFilter:
    """Remove rides whose effective driver rating is below ``min_rating``.

    Unrated drivers count as DEFAULT_DRIVER_RATING (4.0).
    """

    def __init__(self, min_rating: float | None) -> None:
        self._min_rating = min_rating

    def __call__(self, rides: list[RideCandidate]) -> list[RideCandidate]:
        if self._min_rating is None:
            return rides
        result = [r for r in rides if r.effective_driver_rating >= self._min_rating]
        removed = len(rides) - len(result)
        if removed:
            logger.debug("MinDriverRatingFilter: removed %d rides", removed)
        return result


def run_filter_chain(
    rides: list[RideCandidate],
    filters: list[Filter],
) -> list[RideCandidate]:
    """Apply filters in order, returning the surviving rides."""
    result = rides
    for f in filters:
        result = f(result)
    return result


def build_constraint_filters(
    constraints: ConstraintConfig,
    intent: SearchIntent,
) -> list[Filter]:
    """Build the hard-constraint chain for a search (module docstring order)."""
    filters: list[Filter] = [ActiveRideFilter()]
    if constraints.min_available_seats is not None:
        filters.append(MinSeatsFilter(constraints.min_available_seats))
    if constraints.same_date_only:
        filters.append(SameDateFilter(intent.date))
    if constraints.max_pickup_distance is not None:
        filters.append(MaxPickupDistanceFilter(intent.pickup, constraints.max_pickup_distance))
    if constraints.max_dropoff_distance is not None:
        filters.append(MaxDropoffDistanceFilter(intent.dropoff, constraints.max_dropoff_distance))
    return filters
