"""Orchestrator: wires the ride query, constraint filters, recommender and export.

Data flow:
  1. Active-ride query → eligible rides
  2. Constraint filter chain → constrained rides
  3. Recommender → scored, thresholded, sorted matches
"""

import json
import logging

from ridematch.core.config import Settings
from ridematch.core.schemas import RideCandidate, RideMatch, SearchIntent
from ridematch.core.store import active_rides
from ridematch.matching.filters import build_constraint_filters, run_filter_chain
from ridematch.matching.presentation import explain_match, match_quality
from ridematch.matching.recommender import recommend_rides

logger = logging.getLogger(__name__)


class RecommendationResult:
    """Summary of a single recommendation run."""

    def __init__(
        self,
        intent: SearchIntent,
        raw_count: int,
        eligible_count: int,
        matches: list[RideMatch],
    ) -> None:
        self.intent = intent
        self.raw_count = raw_count
        self.eligible_count = eligible_count
        self.matches = matches


def run_recommendation(
    settings: Settings,
    rides: list[RideCandidate],
    intent: SearchIntent,
) -> RecommendationResult:
    """Run one rider search through the full pipeline."""
    eligible = active_rides(rides)
    logger.info("Active rides: %d of %d", len(eligible), len(rides))

    filters = build_constraint_filters(settings.constraints, intent)
    constrained = run_filter_chain(eligible, filters)
    logger.info("After constraints: %d", len(constrained))

    preferences = intent.preferences or settings.preferences
    matches = recommend_rides(constrained, intent, preferences, settings.sort_by)

    return RecommendationResult(
        intent=intent,
        raw_count=len(rides),
        eligible_count=len(constrained),
        matches=matches,
    )


def export_matches_json(result: RecommendationResult) -> str:
    """Export recommended rides as a JSON string."""
    data = []
    for m in result.matches:
        r = m.ride
        s = m.match_score
        data.append({
            "id": r.id,
            "driver_name": r.driver_name,
            "from": r.pickup_label,
            "to": r.dropoff_label,
            "date": r.date,
            "time": r.time,
            "price": r.price,
            "available_seats": r.available_seats,
            "match_percentage": m.match_percentage,
            "quality": match_quality(m.match_percentage).label,
            "score": s.model_dump(),
            "explanation": explain_match(s),
        })
    return json.dumps(data, indent=2, ensure_ascii=False)
