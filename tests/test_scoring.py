"""
Unit tests for the livability scores.

Run with: pytest tests/test_scoring.py
"""

import pytest

from models import Coordinates, Place, UrbanType
from scoring import (
    places_within_radius,
    calculate_walking_score,
    calculate_driving_score,
    calculate_density_score,
    calculate_urban_index,
    build_profile,
    WALKING_WEIGHTS,
    DRIVING_WEIGHTS
)


class TestPlacesWithinRadius:
    """Tests for the proximity filter."""

    def test_filters_by_distance(self, center, make_place):
        """Only places inside the radius are kept, in input order."""
        near = make_place(0.2, amenity='cafe')
        far = make_place(3.0, amenity='cafe')
        mid = make_place(0.9, amenity='bank')

        assert places_within_radius(center, [near, far, mid], 1.0) == [near, mid]

    def test_center_is_inclusive(self, center, make_place):
        """A place on the center is within a zero radius."""
        place = make_place(0.0)
        assert places_within_radius(center, [place], 0.0) == [place]

    def test_empty(self, center):
        """No places gives no matches."""
        assert places_within_radius(center, [], 1.0) == []

    def test_nan_never_matches(self, center):
        """Places with NaN coordinates are never in range."""
        lost = Place(type='way', id=1, lat=float('nan'), lon=float('nan'), tags={'amenity': 'cafe'})
        assert places_within_radius(center, [lost], 100.0) == []


class TestWalkingScore:
    """Tests for the walking score."""

    def test_empty_places(self, center):
        """No places scores 0."""
        assert calculate_walking_score(center, []) == 0

    def test_missing_center(self, make_place):
        """Missing center scores 0."""
        assert calculate_walking_score(None, [make_place(amenity='cafe')]) == 0

    def test_single_grocery_rounds_half_up(self, center, make_place):
        """Grocery weight 5 / 2 = 2.5 rounds up to 3."""
        assert calculate_walking_score(center, [make_place(amenity='grocery')]) == 3

    def test_weighted_amenities(self, center, make_place):
        """Weights are summed then halved."""
        places = [
            make_place(amenity='restaurant'),  # 3
            make_place(amenity='pharmacy'),    # 4
            make_place(amenity='hospital'),    # 4
            make_place(amenity='public_transport'),  # 5
        ]
        assert calculate_walking_score(center, places) == 8

    def test_shop_bonus(self, center, make_place):
        """Supermarkets and grocery shops add 5."""
        places = [make_place(shop='supermarket'), make_place(shop='grocery')]
        assert calculate_walking_score(center, places) == 5

    def test_amenity_weight_wins_over_shop(self, center, make_place):
        """A weighted amenity that is also a grocery shop counts once."""
        place = make_place(amenity='cafe', shop='supermarket')
        assert calculate_walking_score(center, [place]) == 1

    def test_baseline_credit(self, center, make_place):
        """Unweighted amenity or shop tags add 1 each."""
        places = [make_place(amenity='bench'), make_place(shop='bakery')]
        assert calculate_walking_score(center, places) == 1

    def test_untagged_places_add_nothing(self, center, make_place):
        """Places with no amenity or shop tag contribute 0."""
        places = [make_place(0.1), make_place(0.2), make_place(0.3, leisure='park')]
        assert calculate_walking_score(center, places) == 0

    def test_places_beyond_one_mile_ignored(self, center, make_place):
        """Only places within a mile count."""
        places = [make_place(1.5, amenity='grocery'), make_place(5.0, amenity='hospital')]
        assert calculate_walking_score(center, places) == 0

    def test_clamped_at_100(self, center, make_place):
        """Thousands of weighted places never exceed 100."""
        places = [make_place(amenity='grocery') for _ in range(2000)]
        assert calculate_walking_score(center, places) == 100

    def test_deterministic(self, center, make_place):
        """Same input always gives the same score."""
        places = [make_place(0.3, amenity='restaurant'), make_place(0.6, shop='grocery')]
        assert calculate_walking_score(center, places) == calculate_walking_score(center, places)

    def test_weight_table_is_read_only(self):
        """Weight tables cannot be changed at runtime."""
        with pytest.raises(TypeError):
            WALKING_WEIGHTS['restaurant'] = 100


class TestDrivingScore:
    """Tests for the driving score."""

    def test_empty_places(self, center):
        """No places scores 0."""
        assert calculate_driving_score(center, []) == 0

    def test_missing_center(self, make_place):
        """Missing center scores 0."""
        assert calculate_driving_score(None, [make_place(amenity='cafe')]) == 0

    def test_single_grocery(self, center, make_place):
        """Grocery weight 3 / 3 = 1."""
        assert calculate_driving_score(center, [make_place(amenity='grocery')]) == 1

    def test_ten_mile_radius(self, center, make_place):
        """Places out to 10 miles count, beyond do not."""
        places = [
            make_place(8.0, amenity='shopping_mall'),  # 4
            make_place(9.5, amenity='hospital'),       # 3
            make_place(12.0, amenity='hospital'),      # out of range
        ]
        assert calculate_driving_score(center, places) == 2

    def test_shop_bonus(self, center, make_place):
        """Supermarkets and malls add 3."""
        places = [make_place(2.0, shop='mall'), make_place(3.0, shop='supermarket')]
        assert calculate_driving_score(center, places) == 2

    def test_baseline_credit(self, center, make_place):
        """Other tagged places add 0.5: 3 of them make 1.5 / 3 = 0.5, rounded up."""
        places = [make_place(amenity='bench'), make_place(amenity='toilets'), make_place(shop='bakery')]
        assert calculate_driving_score(center, places) == 1

    def test_clamped_at_100(self, center, make_place):
        """Upper clamp holds for huge lists."""
        places = [make_place(5.0, amenity='shopping_mall') for _ in range(1000)]
        assert calculate_driving_score(center, places) == 100

    def test_uses_own_weights(self):
        """Driving weights are lighter than walking weights."""
        assert DRIVING_WEIGHTS['restaurant'] < WALKING_WEIGHTS['restaurant']
        assert 'shopping_mall' in DRIVING_WEIGHTS
        assert 'shopping_mall' not in WALKING_WEIGHTS


class TestUrbanIndex:
    """Tests for the urban index classification."""

    @staticmethod
    def _far_places(make_place, bus_stations=0, restaurants=0):
        """Places 5 miles out, so only the amenity counts contribute."""
        places = [make_place(5.0, amenity='bus_station') for _ in range(bus_stations)]
        places += [make_place(5.0, amenity='restaurant') for _ in range(restaurants)]
        return places

    def test_empty_places(self, center):
        """No places is Rural with a zero score."""
        result = calculate_urban_index(center, [])
        assert result.type == UrbanType.RURAL
        assert result.score == 0
        assert result.description == "Very low amenity density"

    def test_missing_center(self, make_place):
        """Missing center is Rural with a zero score."""
        result = calculate_urban_index(None, [make_place(amenity='cafe')])
        assert result.type == UrbanType.RURAL
        assert result.score == 0

    def test_density_formula(self, center, make_place):
        """half*2 + one + restaurants*1.5 + transit*2."""
        places = [
            make_place(0.2, amenity='cafe'),         # half + one + restaurant
            make_place(0.75, amenity='taxi'),        # one + transit
            make_place(0.8),                         # one
            make_place(3.0, amenity='subway_entrance'),  # transit only
        ]
        # half=1, one=3, restaurants=1, transit=2 -> 2 + 3 + 1.5 + 4
        assert calculate_density_score(center, places) == pytest.approx(10.5)

    def test_boundary_100_is_urban(self, center, make_place):
        """Density of exactly 100 is Urban."""
        result = calculate_urban_index(center, self._far_places(make_place, bus_stations=50))
        assert result.type == UrbanType.URBAN
        assert result.score == 100
        assert result.description == "High density of amenities and services"

    def test_boundary_99_is_suburban(self, center, make_place):
        """Density of 99 is Suburban."""
        result = calculate_urban_index(center, self._far_places(make_place, bus_stations=48, restaurants=2))
        assert result.type == UrbanType.SUBURBAN
        assert result.score == pytest.approx(99)
        assert result.description == "Moderate amenity density with good accessibility"

    def test_boundary_30_is_suburban(self, center, make_place):
        """Density of exactly 30 is Suburban."""
        result = calculate_urban_index(center, self._far_places(make_place, bus_stations=15))
        assert result.type == UrbanType.SUBURBAN
        assert result.score == pytest.approx(30)

    def test_boundary_29_is_rural(self, center, make_place):
        """Density of 29 is Rural."""
        result = calculate_urban_index(center, self._far_places(make_place, bus_stations=13, restaurants=2))
        assert result.type == UrbanType.RURAL
        assert result.score == pytest.approx(29)
        assert result.description == "Lower density, more spread out amenities"

    def test_urban_score_clamped(self, center, make_place):
        """Urban scores are capped at 100."""
        places = [make_place(0.1, amenity='restaurant') for _ in range(100)]
        result = calculate_urban_index(center, places)
        assert result.type == UrbanType.URBAN
        assert result.score == 100

    def test_untagged_far_places_are_rural(self, center, make_place):
        """Untagged places outside a mile add nothing."""
        result = calculate_urban_index(center, [make_place(2.0) for _ in range(40)])
        assert result.type == UrbanType.RURAL
        assert result.score == 0


class TestBuildProfile:
    """Tests for the combined profile."""

    def test_profile_matches_calculators(self, center, make_place):
        """The profile holds each calculator's own result."""
        places = [
            make_place(0.2, amenity='restaurant', name='Diner'),
            make_place(0.6, shop='supermarket'),
            make_place(4.0, amenity='hospital'),
            make_place(0.3, leisure='park'),
        ]
        profile = build_profile(center, places)

        assert profile.walking_score == calculate_walking_score(center, places)
        assert profile.driving_score == calculate_driving_score(center, places)
        assert profile.urban_index == calculate_urban_index(center, places)
        assert profile.total_places == 4
        assert profile.active_categories == 4
        assert sum(profile.get_category_counts().values()) == 4

    def test_empty_profile(self):
        """An empty location still has all categories."""
        profile = build_profile(Coordinates(0.0, 0.0), [])

        assert profile.walking_score == 0
        assert profile.driving_score == 0
        assert profile.urban_index.type == UrbanType.RURAL
        assert len(profile.categories) == 8
        assert profile.active_categories == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
