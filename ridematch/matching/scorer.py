"""Weighted five-component scoring of a ride against a rider's search.

Component caps (sum 100):
  pickup proximity 20, dropoff proximity 20, time 30, price 15, rating 15.
Each component is floored at 0. The total is the unclamped sum.
"""

import logging
import math

from ridematch.core.config import MatchPreferences
from ridematch.core.schemas import MatchScore, RideCandidate, SearchIntent
from ridematch.matching.geo import haversine_km
from ridematch.matching.timeparse import date_difference_days, time_difference_minutes

logger = logging.getLogger(__name__)

PICKUP_WEIGHT = 20.0
DROPOFF_WEIGHT = 20.0
TIME_WEIGHT = 30.0
PRICE_WEIGHT = 15.0
RATING_WEIGHT = 15.0

# Flat time score for rides one calendar day away from the requested date.
ADJACENT_DAY_TIME_SCORE = 5.0


def round_half_away(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals, halves away from zero (not banker's rounding)."""
    scale = 10**digits
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return int(math.floor(value + 0.5))


def _linear_decay(weight: float, value: float, ceiling: float) -> float:
    return max(0.0, weight * (1 - value / ceiling))


def score_ride(
    ride: RideCandidate,
    intent: SearchIntent,
    preferences: MatchPreferences | None = None,
) -> MatchScore:
    """Score a single ride against the rider's search intent.

    Args:
        ride: The candidate ride.
        intent: Rider pickup/dropoff points, date and time.
        preferences: Thresholds; falls back to intent.preferences, then defaults.

    Returns:
        MatchScore with every component and the total rounded to 1 decimal.
    """
    prefs = preferences or intent.preferences or MatchPreferences()

    pickup_distance = haversine_km(intent.pickup, ride.pickup_point)
    dropoff_distance = haversine_km(intent.dropoff, ride.dropoff_point)

    time_difference = time_difference_minutes(intent.time, ride.time, prefs.time_parse_policy)
    date_difference = date_difference_days(intent.date, ride.date)

    pickup_score = _linear_decay(PICKUP_WEIGHT, pickup_distance, prefs.max_pickup_distance)
    dropoff_score = _linear_decay(DROPOFF_WEIGHT, dropoff_distance, prefs.max_dropoff_distance)

    time_score = 0.0
    if date_difference == 0:
        if time_difference is not None:
            time_score = _linear_decay(TIME_WEIGHT, time_difference, prefs.max_time_difference)
    elif date_difference == 1:
        time_score = ADJACENT_DAY_TIME_SCORE

    price_score = _linear_decay(PRICE_WEIGHT, ride.price, prefs.max_price_budget)
    rating_score = (ride.effective_driver_rating / 5) * RATING_WEIGHT

    total = pickup_score + dropoff_score + time_score + price_score + rating_score

    logger.debug(
        "Ride %s: pickup %.2fkm dropoff %.2fkm dt=%s dd=%d total=%.2f",
        ride.id, pickup_distance, dropoff_distance, time_difference, date_difference, total,
    )

    return MatchScore(
        ride_id=ride.id,
        total_score=round_half_away(total),
        pickup_distance_score=round_half_away(pickup_score),
        dropoff_distance_score=round_half_away(dropoff_score),
        time_score=round_half_away(time_score),
        price_score=round_half_away(price_score),
        rating_score=round_half_away(rating_score),
        pickup_distance=round_half_away(pickup_distance),
        dropoff_distance=round_half_away(dropoff_distance),
        time_difference=time_difference,
    )
