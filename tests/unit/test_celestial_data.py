"""Tests for celestial_data.py: catalog, unit conversion, filtering."""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from celestial_data import (
    CATALOG,
    CelestialBody,
    convert_distance,
    filter_by_distance,
    get_body,
    get_upcoming_approaches,
    sort_by_proximity,
)


class TestCatalog:

    def test_count(self):
        assert len(CATALOG) == 12

    def test_unique_ids(self):
        ids = [body.id for body in CATALOG]
        assert len(set(ids)) == len(ids)

    def test_all_metrics_non_negative(self):
        for body in CATALOG:
            assert body.distance_from_earth >= 0
            assert body.velocity >= 0
            assert body.radius is not None and body.radius >= 0

    def test_get_body(self):
        assert get_body("asteroid-vesta").name == "Vesta (4)"

    def test_get_body_missing(self):
        assert get_body("asteroid-nope") is None

    def test_bodies_are_frozen(self):
        with pytest.raises(FrozenInstanceError):
            CATALOG[0].velocity = 99

    def test_to_dict(self):
        data = get_body("asteroid-apophis").to_dict()
        assert data["close_approach_date"] == "2026-03-01"
        assert data["radius"] == 0.08

    def test_to_dict_without_date(self):
        body = CelestialBody(id="x", name="X", distance_from_earth=1, velocity=1)
        assert body.to_dict()["close_approach_date"] is None
        assert body.to_dict()["radius"] is None


class TestConvertDistance:

    def test_km(self):
        assert convert_distance(1, "km") == 1_000_000

    def test_lunar_distance(self):
        assert convert_distance(0.3844, "LD") == pytest.approx(1.0)

    def test_astronomical_unit(self):
        assert convert_distance(149.5978707, "AU") == pytest.approx(1.0)

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            convert_distance(1, "parsec")


class TestFilterByDistance:

    def test_one_lunar_distance(self):
        result = filter_by_distance(CATALOG, 1, "LD")
        assert [b.id for b in result] == ["asteroid-apophis"]

    def test_one_au(self):
        result = filter_by_distance(CATALOG, 1, "AU")
        assert len(result) == 8
        assert all(b.distance_from_earth <= 149.6 for b in result)

    def test_km(self):
        result = filter_by_distance(CATALOG, 600_000, "km")
        assert {b.id for b in result} == {"asteroid-apophis", "asteroid-itokawa"}

    def test_limit_is_inclusive(self):
        body = CelestialBody(id="x", name="X", distance_from_earth=0.3844, velocity=1)
        assert filter_by_distance([body], 1, "LD") == [body]

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            filter_by_distance(CATALOG, 1, "ly")


class TestOrdering:

    def test_sort_by_proximity(self):
        result = sort_by_proximity(CATALOG)
        assert result[0].id == "asteroid-apophis"
        assert result[-1].id == "asteroid-pallas"
        distances = [b.distance_from_earth for b in result]
        assert distances == sorted(distances)

    def test_sort_does_not_mutate(self):
        original = list(CATALOG)
        sort_by_proximity(CATALOG)
        assert CATALOG == original

    def test_upcoming_approaches(self):
        result = get_upcoming_approaches(CATALOG, date(2026, 3, 1))
        assert len(result) == 8
        assert result[0].id == "asteroid-2024ab"
        assert result[1].id == "asteroid-ryugu"
        assert all(b.close_approach_date > date(2026, 3, 1) for b in result)

    def test_upcoming_skips_undated(self):
        body = CelestialBody(id="x", name="X", distance_from_earth=1, velocity=1)
        assert get_upcoming_approaches([body], date(2026, 1, 1)) == []
