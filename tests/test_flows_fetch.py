"""
Tests for the fetch flow module.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock, patch

from isochrone_planner.config import Settings
from isochrone_planner.flows import fetch
from isochrone_planner.reference.geography import BoundingBox
from isochrone_planner.schemas import Criterion, TravelMode
from isochrone_planner.store import DataStore

if TYPE_CHECKING:
    from pathlib import Path

    import pytest

SUPERMARKET = Criterion(category="supermarket", mode=TravelMode.DRIVING, minutes=5)
SCHOOL = Criterion(category="school", mode=TravelMode.WALKING, minutes=10)
BBOX = BoundingBox(south=49.37, west=8.62, north=49.44, east=8.74)

OVERPASS_ELEMENTS = {
    "supermarket": [
        {"type": "node", "id": 1, "lat": 49.41, "lon": 8.69, "tags": {"name": "Rewe"}},
        {"type": "way", "id": 2, "center": {"lat": 49.40, "lon": 8.68}, "tags": {"name": "Lidl"}},
    ],
    "school": [],
}


def fake_post(url: str, **kwargs: Any) -> Mock:
    """Answer Overpass and ORS requests from canned data."""
    resp = Mock()
    resp.raise_for_status = Mock()
    if "isochrones" in url:
        locations = kwargs["json"]["locations"]
        resp.json.return_value = {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {"group_index": i},
                    "geometry": {
                        "type": "Polygon",
                        "coordinates": [
                            [[lon, lat], [lon + 0.01, lat], [lon, lat + 0.01], [lon, lat]]
                        ],
                    },
                }
                for i, (lon, lat) in enumerate(locations)
            ],
        }
    else:
        query = kwargs["data"]["data"]
        category = "supermarket" if "supermarket" in query else "school"
        resp.json.return_value = {"elements": OVERPASS_ELEMENTS[category]}
    return resp


def use_tmp_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(fetch, "store", DataStore(tmp_path))
    monkeypatch.setattr(
        fetch,
        "get_settings",
        lambda: Settings(
            ors_api_key="key",
            batch_delay_seconds=0,
            south=BBOX.south,
            west=BBOX.west,
            north=BBOX.north,
            east=BBOX.east,
        ),
    )


class TestPaths:
    """Test store path helpers."""

    def test_places_path(self) -> None:
        assert str(fetch.places_path("school")) == "cache/places/school.json"

    def test_isochrones_path(self) -> None:
        path = fetch.isochrones_path(SUPERMARKET)
        assert str(path) == "cache/isochrones/supermarket_driving-car_5.json"


class TestFetchPlaces:
    """Test the places task."""

    @patch("isochrone_planner.datasources.overpass.client.session.post", side_effect=fake_post)
    def test_returns_dicts(self, _mock_post: Mock) -> None:
        places = fetch.fetch_places("supermarket", BBOX)
        assert [p["name"] for p in places] == ["Rewe", "Lidl"]
        assert places[1]["osm_type"] == "way"


class TestSavePlaces:
    """Test saving places to the store."""

    def test_save_places(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(fetch, "store", DataStore(tmp_path))

        path = fetch.save_places("school", [{"name": "A"}], BBOX)

        assert path == tmp_path / "cache" / "places" / "school.json"
        saved = json.loads(path.read_text())
        assert saved["meta"]["source"] == "overpass-api.de"
        assert saved["meta"]["bbox"] == [49.37, 8.62, 49.44, 8.74]
        assert "valid_until" in saved["meta"]
        assert saved["data"] == [{"name": "A"}]


class TestFetchIsochrones:
    """Test the isochrones task."""

    @patch("isochrone_planner.datasources.openrouteservice.client.session.post", side_effect=fake_post)
    def test_returns_geojson(self, _mock_post: Mock) -> None:
        places = [{"name": "Rewe", "category": "supermarket", "lat": 49.41, "lon": 8.69}]
        collection = fetch.fetch_isochrones(places, SUPERMARKET, "key", delay=0)
        assert collection["type"] == "FeatureCollection"
        assert len(collection["features"]) == 1
        assert collection["features"][0]["properties"]["place"]["name"] == "Rewe"


class TestFetchAllFlow:
    """Test the main fetch flow."""

    @patch("isochrone_planner.services.http.session.post", side_effect=fake_post)
    def test_fetch_all(
        self, mock_post: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        use_tmp_store(tmp_path, monkeypatch)

        result = fetch.fetch_all(criteria=[SUPERMARKET, SCHOOL])

        assert result["places"] == {"supermarket": 2, "school": 0}
        assert result["isochrones"] == {SUPERMARKET.key: 2, SCHOOL.key: 0}
        assert (tmp_path / "cache" / "places" / "supermarket.json").exists()
        assert (tmp_path / "cache" / "isochrones" / "supermarket_driving-car_5.json").exists()
        # Nothing cached for a category with no places
        assert not (tmp_path / "cache" / "places" / "school.json").exists()
        assert not (tmp_path / "cache" / "isochrones" / "school_foot-walking_10.json").exists()

    @patch("isochrone_planner.services.http.session.post", side_effect=fake_post)
    def test_no_isochrone_request_without_places(
        self, mock_post: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        use_tmp_store(tmp_path, monkeypatch)

        fetch.fetch_all(criteria=[SCHOOL])

        urls = [c.args[0] for c in mock_post.call_args_list]
        assert not any("isochrones" in url for url in urls)

    @patch("isochrone_planner.services.http.session.post", side_effect=fake_post)
    def test_fresh_cache_skips_requests(
        self, mock_post: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        use_tmp_store(tmp_path, monkeypatch)

        fetch.fetch_all(criteria=[SUPERMARKET])
        calls_after_first = mock_post.call_count
        result = fetch.fetch_all(criteria=[SUPERMARKET])

        assert mock_post.call_count == calls_after_first
        assert result["isochrones"] == {SUPERMARKET.key: 2}

    @patch("isochrone_planner.services.http.session.post", side_effect=fake_post)
    def test_shared_category_queried_once(
        self, mock_post: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        use_tmp_store(tmp_path, monkeypatch)
        walk = Criterion(category="supermarket", mode=TravelMode.WALKING, minutes=10)

        fetch.fetch_all(criteria=[SUPERMARKET, walk])

        urls = [c.args[0] for c in mock_post.call_args_list]
        assert sum(1 for url in urls if "isochrones" not in url) == 1
        assert sum(1 for url in urls if "isochrones" in url) == 2
