"""Tests for nasa_client.py: NeoWs feed fetching and mapping."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests

from nasa_client import NasaFeedError, fetch_bodies, fetch_feed, neo_to_body


def make_neo(neo_id="2099942", name="99942 Apophis (2004 MN4)", with_approach=True):
    neo = {
        "id": neo_id,
        "name": name,
        "is_potentially_hazardous_asteroid": True,
        "estimated_diameter": {
            "kilometers": {"estimated_diameter_min": 0.1, "estimated_diameter_max": 0.16},
        },
        "close_approach_data": [],
    }
    if with_approach:
        neo["close_approach_data"].append({
            "close_approach_date": "2026-03-01",
            "relative_velocity": {"kilometers_per_second": "30.7"},
            "miss_distance": {"kilometers": "310000.0"},
        })
    return neo


def make_response(status_code=200, payload=None):
    res = MagicMock()
    res.status_code = status_code
    res.json.return_value = payload or {}
    return res


class TestNeoToBody:

    def test_conversion(self):
        body = neo_to_body(make_neo())
        assert body.id == "2099942"
        assert body.distance_from_earth == pytest.approx(0.31)
        assert body.velocity == pytest.approx(30.7)
        assert body.radius == pytest.approx(0.08)
        assert body.close_approach_date == date(2026, 3, 1)

    def test_no_approach_data(self):
        assert neo_to_body(make_neo(with_approach=False)) is None

    def test_approach_without_miss_distance(self):
        neo = {"id": "1", "name": "X",
               "close_approach_data": [{"close_approach_date": "2026-01-01"}]}
        assert neo_to_body(neo) is None

    def test_missing_diameter(self):
        neo = make_neo()
        del neo["estimated_diameter"]
        assert neo_to_body(neo).radius is None


class TestFetchFeed:

    def test_success(self):
        payload = {"element_count": 0, "near_earth_objects": {}}
        with patch("nasa_client.requests.get", return_value=make_response(payload=payload)) as get:
            assert fetch_feed(date(2026, 2, 10), date(2026, 2, 11)) == payload

        params = get.call_args.kwargs["params"]
        assert params["start_date"] == "2026-02-10"
        assert params["end_date"] == "2026-02-11"
        assert get.call_args.args[0].endswith("/feed")

    def test_non_200(self):
        with patch("nasa_client.requests.get", return_value=make_response(status_code=429)):
            with pytest.raises(NasaFeedError) as exc_info:
                fetch_feed(date(2026, 2, 10), date(2026, 2, 11))
        assert exc_info.value.status_code == 429

    def test_transport_error(self):
        with patch("nasa_client.requests.get", side_effect=requests.ConnectionError("down")):
            with pytest.raises(NasaFeedError):
                fetch_feed(date(2026, 2, 10), date(2026, 2, 11))


class TestFetchBodies:

    def test_flattens_days_and_skips_incomplete(self):
        no_distance = make_neo("4", "Four")
        del no_distance["close_approach_data"][0]["miss_distance"]
        no_velocity = make_neo("5", "Five")
        del no_velocity["close_approach_data"][0]["relative_velocity"]
        payload = {
            "near_earth_objects": {
                "2026-02-10": [make_neo("1", "One"), make_neo("2", "Two", with_approach=False)],
                "2026-02-11": [make_neo("3", "Three"), no_distance, no_velocity],
            }
        }
        with patch("nasa_client.requests.get", return_value=make_response(payload=payload)):
            bodies = fetch_bodies(date(2026, 2, 10), date(2026, 2, 11))
        assert [b.id for b in bodies] == ["1", "3"]
