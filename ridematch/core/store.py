"""Read-only access to ride records exported from the ride store."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ridematch.core.schemas import RideCandidate

logger = logging.getLogger(__name__)


def parse_rides(records: list[dict[str, Any]]) -> list[RideCandidate]:
    """Validate raw ride records, skipping (and logging) invalid ones."""
    rides: list[RideCandidate] = []
    for i, record in enumerate(records):
        try:
            rides.append(RideCandidate.model_validate(record))
        except ValidationError as e:
            ride_id = record.get("id", f"#{i}") if isinstance(record, dict) else f"#{i}"
            logger.warning("Skipping invalid ride record %s: %d errors", ride_id, e.error_count())
    return rides


def load_rides(path: str | Path) -> list[RideCandidate]:
    """Load rides from a JSON file holding a list or ``{"rides": [...]}``."""
    path = Path(path)
    if not path.exists():
        msg = f"Rides file not found: {path}"
        raise FileNotFoundError(msg)
    data = json.loads(path.read_text())
    if isinstance(data, dict):
        data = data.get("rides", [])
    if not isinstance(data, list):
        msg = f"Expected a list of rides in {path}"
        raise ValueError(msg)
    rides = parse_rides(data)
    logger.info("Loaded %d rides from %s", len(rides), path)
    return rides


def active_rides(rides: list[RideCandidate]) -> list[RideCandidate]:
    """Active rides with free seats, most seats first, then newest first."""
    active = [r for r in rides if r.status == "active" and r.available_seats > 0]
    return sorted(
        active,
        key=lambda r: (
            -r.available_seats,
            -(r.created_at.timestamp() if r.created_at else 0.0),
        ),
    )
