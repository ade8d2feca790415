"""Tests for configuration models and YAML loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from ridematch.core.config import (
    ConstraintConfig,
    LoggingConfig,
    MatchPreferences,
    Settings,
    SortKey,
    TimeParsePolicy,
)

EXAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "settings.example.yaml"


class TestMatchPreferences:
    def test_defaults(self) -> None:
        p = MatchPreferences()
        assert p.max_pickup_distance == 5.0
        assert p.max_dropoff_distance == 5.0
        assert p.max_time_difference == 60.0
        assert p.max_price_budget == 10.0
        assert p.min_driver_rating == 3.0
        assert p.min_match_score == 40.0
        assert p.time_parse_policy is TimeParsePolicy.MIDNIGHT

    def test_distances_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            MatchPreferences(max_pickup_distance=0)
        with pytest.raises(ValidationError):
            MatchPreferences(max_time_difference=-5)

    def test_min_match_score_bounds(self) -> None:
        with pytest.raises(ValidationError):
            MatchPreferences(min_match_score=101)
        assert MatchPreferences(min_match_score=30).min_match_score == 30.0

    def test_driver_rating_bounds(self) -> None:
        with pytest.raises(ValidationError):
            MatchPreferences(min_driver_rating=6)
        assert MatchPreferences(min_driver_rating=None).min_driver_rating is None

    def test_policy_from_string(self) -> None:
        p = MatchPreferences(time_parse_policy="exclude")  # type: ignore[arg-type]
        assert p.time_parse_policy is TimeParsePolicy.EXCLUDE

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MatchPreferences(time_parse_policy="guess")  # type: ignore[arg-type]


class TestConstraintConfig:
    def test_defaults_all_off(self) -> None:
        c = ConstraintConfig()
        assert c.min_available_seats is None
        assert c.same_date_only is False
        assert c.max_pickup_distance is None
        assert c.max_dropoff_distance is None

    def test_min_seats_at_least_one(self) -> None:
        with pytest.raises(ValidationError):
            ConstraintConfig(min_available_seats=0)


class TestLoggingConfig:
    def test_level_normalised(self) -> None:
        assert LoggingConfig(level=" debug ").level == "DEBUG"

    def test_unknown_level(self) -> None:
        with pytest.raises(ValidationError, match="unknown log level"):
            LoggingConfig(level="LOUD")


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings()
        assert s.sort_by is SortKey.MATCH
        assert s.preferences == MatchPreferences()

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(dedent("""\
            preferences:
              max_pickup_distance: 8
              min_match_score: 30
              time_parse_policy: zero
            constraints:
              same_date_only: true
            sort_by: price
        """))
        s = Settings.from_yaml(path)
        assert s.preferences.max_pickup_distance == 8.0
        assert s.preferences.min_match_score == 30.0
        assert s.preferences.time_parse_policy is TimeParsePolicy.ZERO
        assert s.constraints.same_date_only is True
        assert s.sort_by is SortKey.PRICE

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert Settings.from_yaml(path) == Settings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Settings.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("sort_by: distance\n")
        with pytest.raises(ValidationError):
            Settings.from_yaml(path)

    def test_example_config_loads(self) -> None:
        s = Settings.from_yaml(EXAMPLE_CONFIG)
        assert s.preferences == MatchPreferences()
        assert s.constraints.min_available_seats == 1
