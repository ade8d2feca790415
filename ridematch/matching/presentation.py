"""Display helpers: quality labels, distance/time formatting, match explanations."""

from ridematch.core.schemas import MatchQuality, MatchScore
from ridematch.matching.scorer import round_half_up

# (min percentage, quality), checked top-down.
_QUALITY_BANDS: list[tuple[int, MatchQuality]] = [
    (80, MatchQuality(label="Excellent Match", color="#10B981", icon="🎯")),
    (65, MatchQuality(label="Great Match", color="#3B82F6", icon="⭐")),
    (50, MatchQuality(label="Good Match", color="#F59E0B", icon="👍")),
]
_FAIR = MatchQuality(label="Fair Match", color="#6B7280", icon="✓")

VERY_CLOSE_KM = 1.0
NEAR_KM = 3.0
PERFECT_TIMING_MIN = 15
GOOD_TIMING_MIN = 30
HIGH_COMPONENT_SCORE = 12.0


def match_quality(match_percentage: int) -> MatchQuality:
    """Map a 0-100 match percentage to a qualitative label."""
    for threshold, quality in _QUALITY_BANDS:
        if match_percentage >= threshold:
            return quality
    return _FAIR


def format_distance(km: float) -> str:
    """Render distances under 1 km in meters, otherwise km with one decimal."""
    if km < 1:
        return f"{round_half_up(km * 1000)}m"
    return f"{km:.1f}km"


def format_time_difference(minutes: int) -> str:
    """Render as "45min", "2h" or "1h 30min"."""
    if minutes < 60:
        return f"{minutes}min"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}min" if mins > 0 else f"{hours}h"


def explain_match(score: MatchScore) -> list[str]:
    """List the reasons a ride is a good match, in display order."""
    explanations: list[str] = []

    if score.pickup_distance <= VERY_CLOSE_KM:
        explanations.append(f"📍 Very close pickup ({format_distance(score.pickup_distance)})")
    elif score.pickup_distance <= NEAR_KM:
        explanations.append(f"📍 Near your pickup ({format_distance(score.pickup_distance)})")

    if score.dropoff_distance <= VERY_CLOSE_KM:
        explanations.append(f"🎯 Very close dropoff ({format_distance(score.dropoff_distance)})")
    elif score.dropoff_distance <= NEAR_KM:
        explanations.append(f"🎯 Near your destination ({format_distance(score.dropoff_distance)})")

    diff = score.time_difference
    if diff is not None:
        if diff <= PERFECT_TIMING_MIN:
            explanations.append(f"⏰ Perfect timing ({format_time_difference(diff)} difference)")
        elif diff <= GOOD_TIMING_MIN:
            explanations.append(f"⏰ Good timing ({format_time_difference(diff)} difference)")

    if score.rating_score >= HIGH_COMPONENT_SCORE:
        explanations.append("⭐ Highly rated driver")

    if score.price_score >= HIGH_COMPONENT_SCORE:
        explanations.append("💰 Great price")

    return explanations
