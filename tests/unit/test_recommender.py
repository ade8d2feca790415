"""Tests for the recommender: threshold filtering, rating floor and sort orders."""

from ridematch.core.config import MatchPreferences, SortKey, TimeParsePolicy
from ridematch.core.schemas import GeoPoint, RideCandidate, SearchIntent
from ridematch.matching.recommender import recommend_rides, sort_matches

PICKUP = GeoPoint(lat=26.0667, lng=50.5577)
DROPOFF = GeoPoint(lat=26.2285, lng=50.5860)
INTENT = SearchIntent(pickup=PICKUP, dropoff=DROPOFF, date="2025-06-01", time="3:00 PM")


def _ride(
    *,
    ride_id: str = "r1",
    pickup_lat: float = PICKUP.lat,
    dropoff_lat: float = DROPOFF.lat,
    date: str = "2025-06-01",
    time: str = "3:00 PM",
    price: float = 10.0,
    driver_rating: float | None = 5.0,
) -> RideCandidate:
    return RideCandidate(
        id=ride_id,
        driver_id=f"d-{ride_id}",
        driver_rating=driver_rating,
        pickup_lat=pickup_lat,
        pickup_lng=PICKUP.lng,
        dropoff_lat=dropoff_lat,
        dropoff_lng=DROPOFF.lng,
        date=date,
        time=time,
        price=price,
        total_seats=4,
        available_seats=2,
    )


def _scored_pool() -> list[RideCandidate]:
    """Rides scoring 80, 40, 60 and 15 under default preferences."""
    return [
        # 20 + 20 + 25 (10 min off) + 0 + 15
        _ride(ride_id="eighty", time="3:10 PM"),
        # 20 + 0 (far dropoff) + 5 (next day) + 0 + 15
        _ride(ride_id="forty", dropoff_lat=DROPOFF.lat + 1.0, date="2025-06-02"),
        # 20 + 20 + 5 (next day) + 0 + 15
        _ride(ride_id="sixty", date="2025-06-02"),
        # 0 + 0 + 0 (three days off) + 0 + 15
        _ride(
            ride_id="fifteen",
            pickup_lat=PICKUP.lat + 1.0,
            dropoff_lat=DROPOFF.lat + 1.0,
            date="2025-06-04",
        ),
    ]


class TestThreshold:
    def test_scores_as_designed(self) -> None:
        prefs = MatchPreferences(min_match_score=0)
        result = recommend_rides(_scored_pool(), INTENT, prefs)
        assert [m.match_score.total_score for m in result] == [80.0, 60.0, 40.0, 15.0]

    def test_default_threshold_is_forty_inclusive(self) -> None:
        result = recommend_rides(_scored_pool(), INTENT)
        assert [m.ride.id for m in result] == ["eighty", "sixty", "forty"]

    def test_threshold_thirty(self) -> None:
        prefs = MatchPreferences(min_match_score=30)
        result = recommend_rides(_scored_pool(), INTENT, prefs)
        assert [m.ride.id for m in result] == ["eighty", "sixty", "forty"]

    def test_boundary_excluded_just_above(self) -> None:
        prefs = MatchPreferences(min_match_score=40.1)
        result = recommend_rides(_scored_pool(), INTENT, prefs)
        assert [m.ride.id for m in result] == ["eighty", "sixty"]

    def test_all_below_threshold_empty(self) -> None:
        prefs = MatchPreferences(min_match_score=95)
        assert recommend_rides(_scored_pool(), INTENT, prefs) == []

    def test_empty_input(self) -> None:
        assert recommend_rides([], INTENT) == []


class TestMatchPercentage:
    def test_rounded_total(self) -> None:
        ride = _ride(price=2.5, time="3:01 PM")
        [match] = recommend_rides([ride], INTENT)
        # 20 + 20 + 29.5 + 11.25 + 15 = 95.75
        assert match.match_percentage == 96

    def test_perfect_match_is_100(self) -> None:
        [match] = recommend_rides([_ride(price=0.0)], INTENT)
        assert match.match_percentage == 100


class TestDriverRatingFloor:
    def test_below_default_floor_excluded(self) -> None:
        rides = [_ride(ride_id="low", driver_rating=2.5), _ride(ride_id="ok", driver_rating=3.0)]
        result = recommend_rides(rides, INTENT)
        assert [m.ride.id for m in result] == ["ok"]

    def test_unrated_driver_passes(self) -> None:
        result = recommend_rides([_ride(driver_rating=None)], INTENT)
        assert len(result) == 1

    def test_floor_disabled(self) -> None:
        prefs = MatchPreferences(min_driver_rating=None)
        result = recommend_rides([_ride(driver_rating=1.5)], INTENT, prefs)
        assert len(result) == 1


class TestSortOrders:
    def _price_pool(self) -> list[RideCandidate]:
        return [
            _ride(ride_id="five", price=5.0),
            _ride(ride_id="two", price=2.0, date="2025-06-02"),
            _ride(ride_id="eight", price=8.0),
        ]

    def test_match_order(self) -> None:
        result = recommend_rides(self._price_pool(), INTENT)
        assert [m.ride.id for m in result] == ["five", "eight", "two"]

    def test_price_order_ignores_score(self) -> None:
        result = recommend_rides(self._price_pool(), INTENT, sort_by=SortKey.PRICE)
        assert [m.ride.price for m in result] == [2.0, 5.0, 8.0]

    def test_time_order(self) -> None:
        rides = [
            _ride(ride_id="thirty", time="3:30 PM"),
            _ride(ride_id="five", time="3:05 PM"),
            _ride(ride_id="fifteen", time="2:45 PM"),
        ]
        result = recommend_rides(rides, INTENT, sort_by=SortKey.TIME)
        assert [m.ride.id for m in result] == ["five", "fifteen", "thirty"]

    def test_resort_existing_matches(self) -> None:
        matches = recommend_rides(self._price_pool(), INTENT)
        by_price = sort_matches(matches, SortKey.PRICE)
        assert [m.ride.id for m in by_price] == ["two", "five", "eight"]
        # input list untouched
        assert [m.ride.id for m in matches] == ["five", "eight", "two"]


class TestTimeParsePolicies:
    def test_midnight_policy_keeps_ride(self) -> None:
        prefs = MatchPreferences(min_match_score=0)
        [match] = recommend_rides([_ride(time="")], INTENT, prefs)
        assert match.match_score.time_difference == 900

    def test_zero_policy_keeps_ride_with_unknown_time(self) -> None:
        prefs = MatchPreferences(min_match_score=0, time_parse_policy=TimeParsePolicy.ZERO)
        [match] = recommend_rides([_ride(time="")], INTENT, prefs)
        assert match.match_score.time_difference is None
        assert match.match_score.time_score == 0.0

    def test_exclude_policy_drops_ride(self) -> None:
        prefs = MatchPreferences(min_match_score=0, time_parse_policy=TimeParsePolicy.EXCLUDE)
        rides = [_ride(ride_id="bad", time="later"), _ride(ride_id="good")]
        result = recommend_rides(rides, INTENT, prefs)
        assert [m.ride.id for m in result] == ["good"]

    def test_unknown_time_sorts_last(self) -> None:
        prefs = MatchPreferences(min_match_score=0, time_parse_policy=TimeParsePolicy.ZERO)
        rides = [_ride(ride_id="unknown", time="?"), _ride(ride_id="known", time="4:30 PM")]
        result = recommend_rides(rides, INTENT, prefs, sort_by=SortKey.TIME)
        assert [m.ride.id for m in result] == ["known", "unknown"]


class TestPurity:
    def test_input_list_not_mutated(self) -> None:
        rides = _scored_pool()
        ids = [r.id for r in rides]
        recommend_rides(rides, INTENT, sort_by=SortKey.PRICE)
        assert [r.id for r in rides] == ids

    def test_matches_wrap_input_rides(self) -> None:
        rides = _scored_pool()
        result = recommend_rides(rides, INTENT)
        assert all(m.ride in rides for m in result)
