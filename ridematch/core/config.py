"""Configuration models and YAML loader for the ride matching engine."""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class TimeParsePolicy(str, Enum):
    """How the scorer treats a departure time that cannot be parsed.

    - ``midnight``: alias the unparsable time to 00:00 (legacy behaviour).
    - ``zero``: the time difference is unknown and the time component scores 0.
    - ``exclude``: the candidate is dropped from the recommendations.
    """

    MIDNIGHT = "midnight"
    ZERO = "zero"
    EXCLUDE = "exclude"


class SortKey(str, Enum):
    """Ordering applied to recommended rides."""

    MATCH = "match"
    PRICE = "price"
    TIME = "time"


class MatchPreferences(BaseModel):
    """Rider-tunable thresholds governing score decay and filtering."""

    max_pickup_distance: float = Field(default=5.0, gt=0.0)
    max_dropoff_distance: float = Field(default=5.0, gt=0.0)
    max_time_difference: float = Field(default=60.0, gt=0.0)
    max_price_budget: float = Field(default=10.0, gt=0.0)
    min_driver_rating: float | None = Field(default=3.0, ge=1.0, le=5.0)
    min_match_score: float = Field(default=40.0, ge=0.0, le=100.0)
    time_parse_policy: TimeParsePolicy = TimeParsePolicy.MIDNIGHT


class ConstraintConfig(BaseModel):
    """Hard constraints applied before scoring. Unset constraints are skipped."""

    min_available_seats: int | None = Field(default=None, ge=1)
    same_date_only: bool = False
    max_pickup_distance: float | None = Field(default=None, gt=0.0)
    max_dropoff_distance: float | None = Field(default=None, gt=0.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def level_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            msg = f"unknown log level: {v}"
            raise ValueError(msg)
        return level


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    preferences: MatchPreferences = Field(default_factory=MatchPreferences)
    constraints: ConstraintConfig = Field(default_factory=ConstraintConfig)
    sort_by: SortKey = SortKey.MATCH
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
