"""
Prefect flow for fetching places and isochrones.

Places come from Overpass (free, no API key); isochrones come from
OpenRouteService (API key required, small daily quota). Both are cached in
the data store and only re-fetched once stale.

Run locally:
    python -m isochrone_planner.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m isochrone_planner.flows.fetch
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from prefect import flow, task

from isochrone_planner.config import get_settings
from isochrone_planner.datasources import openrouteservice, overpass
from isochrone_planner.reference.criteria import DEFAULT_CRITERIA
from isochrone_planner.reference.geography import BoundingBox  # noqa: TC001
from isochrone_planner.schemas import Criterion, Place
from isochrone_planner.store import DataStore

store = DataStore(get_settings().data_dir)

CACHE_TTL = timedelta(days=7)


def places_path(category: str) -> Path:
    """Store path for one category's places."""
    return Path(f"cache/places/{category}.json")


def isochrones_path(criterion: Criterion) -> Path:
    """Store path for one criterion's isochrones."""
    return Path(
        f"cache/isochrones/{criterion.category}_{criterion.mode.value}_{criterion.minutes}.json"
    )


def bbox_meta(bbox: BoundingBox) -> list[float]:
    """Bounding box as stored in cache metadata: ``[south, west, north, east]``."""
    return [bbox.south, bbox.west, bbox.north, bbox.east]


@task(name="fetch-places")
def fetch_places(
    category: str,
    bbox: BoundingBox,
    url: str = overpass.OVERPASS_API,
    timeout: int = 25,
) -> list[dict[str, Any]]:
    """Fetch places of one category from Overpass."""
    places = overpass.fetch_places(category, bbox, url=url, timeout=timeout)
    return [p.model_dump() for p in places]


@task(name="save-places")
def save_places(category: str, places: list[dict[str, Any]], bbox: BoundingBox) -> Path:
    """Save places via store."""
    return store.write(
        places_path(category),
        places,
        source="overpass-api.de",
        valid_until=datetime.now(UTC) + CACHE_TTL,
        bbox=bbox_meta(bbox),
    )


@task(name="fetch-isochrones")
def fetch_isochrones(
    places: list[dict[str, Any]],
    criterion: Criterion,
    api_key: str,
    batch_size: int = openrouteservice.MAX_LOCATIONS_PER_REQUEST,
    delay: float = 3.0,
    base_url: str = openrouteservice.ORS_API,
) -> dict[str, Any]:
    """Fetch isochrones for every place and return them as GeoJSON."""
    records = [Place.model_validate(p) for p in places]
    isochrones = openrouteservice.fetch_isochrones(
        records,
        criterion,
        api_key,
        batch_size=batch_size,
        delay=delay,
        base_url=base_url,
    )
    return openrouteservice.isochrones_to_geojson(isochrones)


@task(name="save-isochrones")
def save_isochrones(
    criterion: Criterion, collection: dict[str, Any], bbox: BoundingBox
) -> Path:
    """Save an isochrone FeatureCollection via store."""
    return store.write(
        isochrones_path(criterion),
        collection,
        source="openrouteservice.org",
        valid_until=datetime.now(UTC) + CACHE_TTL,
        bbox=bbox_meta(bbox),
        criterion=criterion.key,
    )


@flow(name="fetch-data", log_prints=True)
def fetch_all(criteria: list[Criterion] | None = None) -> dict[str, Any]:
    """
    Fetch places and isochrones for every criterion.

    Checks freshness before fetching and skips sources that are still valid
    for the configured bounding box. A category with no places produces no
    isochrones and no API calls.

    Returns:
        Dict with ``places`` (count per category) and ``isochrones`` (count
        per criterion key).
    """
    settings = get_settings()
    criteria = list(criteria or DEFAULT_CRITERIA)
    bbox = settings.bbox
    region = bbox_meta(bbox)

    results: dict[str, Any] = {"places": {}, "isochrones": {}}

    # --- Places (one query per distinct category) ---
    places_by_category: dict[str, list[dict[str, Any]]] = {}
    for category in dict.fromkeys(c.category for c in criteria):
        path = places_path(category)
        if store.is_fresh(path, bbox=region):
            print(f"Places for {category} are fresh, skipping fetch.")
            places = store.read(path) or []
        else:
            print(f"Fetching {category} places in {bbox.as_overpass()}...")
            places = fetch_places(
                category, bbox, url=settings.overpass_url, timeout=settings.overpass_timeout
            )
            if places:
                saved = save_places(category, places, bbox)
                print(f"Saved {len(places)} {category} places to {saved}")
            else:
                print(f"Warning: no {category} places found, not caching.")
        places_by_category[category] = places
        results["places"][category] = len(places)

    # --- Isochrones (one batch series per criterion) ---
    for criterion in criteria:
        path = isochrones_path(criterion)
        places = places_by_category[criterion.category]
        if not places:
            print(f"Skipping {criterion.label}: no places.")
            results["isochrones"][criterion.key] = 0
            continue

        if store.is_fresh(path, bbox=region, criterion=criterion.key):
            print(f"Isochrones for {criterion.label} are fresh, skipping fetch.")
            collection = store.read(path) or {}
        else:
            print(f"Fetching isochrones for {criterion.label} ({len(places)} places)...")
            collection = fetch_isochrones(
                places,
                criterion,
                settings.ors_api_key,
                batch_size=settings.batch_size,
                delay=settings.batch_delay_seconds,
                base_url=settings.ors_url,
            )
            if collection.get("features"):
                saved = save_isochrones(criterion, collection, bbox)
                print(f"Saved {len(collection['features'])} isochrones to {saved}")
            else:
                print(f"Warning: no isochrones returned for {criterion.label}, not caching.")

        results["isochrones"][criterion.key] = len(collection.get("features", []))

    return results


if __name__ == "__main__":
    result = fetch_all()
    print(f"Flow complete: {result}")
