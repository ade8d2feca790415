"""Ride recommendation: score every candidate, drop weak matches, rank the rest."""

import logging

from ridematch.core.config import MatchPreferences, SortKey, TimeParsePolicy
from ridematch.core.schemas import RideCandidate, RideMatch, SearchIntent
from ridematch.matching.filters import MinDriverRatingFilter
from ridematch.matching.scorer import round_half_up, score_ride

logger = logging.getLogger(__name__)


def recommend_rides(
    rides: list[RideCandidate],
    intent: SearchIntent,
    preferences: MatchPreferences | None = None,
    sort_by: SortKey = SortKey.MATCH,
) -> list[RideMatch]:
    """Return rides matching the rider's search, best match first.

    Args:
        rides: Candidate rides, normally already active with free seats.
        intent: The rider's search.
        preferences: Overrides intent.preferences; defaults when both are unset.
        sort_by: MATCH (total score desc), PRICE (asc) or TIME (time difference asc).

    Returns:
        New RideMatch objects; empty if nothing clears min_match_score.
    """
    prefs = preferences or intent.preferences or MatchPreferences()

    eligible = MinDriverRatingFilter(prefs.min_driver_rating)(rides)

    matches: list[RideMatch] = []
    for ride in eligible:
        score = score_ride(ride, intent, prefs)
        if score.total_score < prefs.min_match_score:
            continue
        if score.time_difference is None and prefs.time_parse_policy is TimeParsePolicy.EXCLUDE:
            logger.info("Excluding ride %s: departure time unknown", ride.id)
            continue
        matches.append(
            RideMatch(
                ride=ride,
                match_score=score,
                match_percentage=round_half_up(score.total_score),
            ),
        )

    logger.info(
        "Recommended %d of %d rides (min score %.1f)",
        len(matches), len(rides), prefs.min_match_score,
    )
    return sort_matches(matches, sort_by)


def sort_matches(matches: list[RideMatch], sort_by: SortKey = SortKey.MATCH) -> list[RideMatch]:
    """Return a new list ordered by the given key.

    PRICE and TIME are full re-sorts, not tie-breaks on match order.
    Unknown time differences sort last under TIME.
    """
    if sort_by is SortKey.PRICE:
        return sorted(matches, key=lambda m: m.ride.price)
    if sort_by is SortKey.TIME:
        return sorted(
            matches,
            key=lambda m: (
                m.match_score.time_difference is None,
                m.match_score.time_difference or 0,
            ),
        )
    return sorted(matches, key=lambda m: m.match_score.total_score, reverse=True)
