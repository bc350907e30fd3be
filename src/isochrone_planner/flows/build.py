"""
Prefect flow for building the static site from cached isochrones.

Loads places and isochrones from the store, runs the set algebra and writes
``index.html`` (summary page) plus ``map.html`` (interactive map).

Run locally:
    python -m isochrone_planner.flows.build
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from prefect import flow, task

from isochrone_planner.analysis.regions import RegionResult, combine
from isochrone_planner.config import get_settings
from isochrone_planner.datasources.openrouteservice import Isochrone, isochrones_from_geojson
from isochrone_planner.flows.fetch import bbox_meta, isochrones_path, places_path
from isochrone_planner.reference.criteria import DEFAULT_CRITERIA
from isochrone_planner.reference.geography import BoundingBox  # noqa: TC001
from isochrone_planner.renderers import render_template
from isochrone_planner.renderers.region_map import build_region_map
from isochrone_planner.renderers.summary import build_summary_html
from isochrone_planner.schemas import Criterion, Place
from isochrone_planner.store import DataStore

store = DataStore(get_settings().data_dir)
SITE_DIR = Path("derived/site")
MAP_FILENAME = "map.html"


# =============================================================================
# Data loading tasks
# =============================================================================


def _cached_for_region(path: Path, region: list[float]) -> Any | None:
    """Payload at ``path`` if it was fetched for ``region``, else None."""
    envelope = store.read_raw(path)
    if envelope is None:
        return None
    if envelope.get("meta", {}).get("bbox") != region:
        print(f"Warning: ignoring {path}, cached for a different region.")
        return None
    return envelope.get("data")


@task(name="load-places")
def load_places(categories: list[str], bbox: BoundingBox) -> list[Place]:
    """Load cached places for each category.

    Missing categories, and entries cached for another bounding box, are skipped.
    """
    region = bbox_meta(bbox)
    places: list[Place] = []
    for category in categories:
        data = _cached_for_region(places_path(category), region)
        if data is None:
            print(f"Warning: no cached places for {category}.")
            continue
        places.extend(Place.model_validate(p) for p in data)
    return places


@task(name="load-isochrones")
def load_isochrones(criteria: list[Criterion], bbox: BoundingBox) -> list[Isochrone]:
    """Load cached isochrones for each criterion.

    Missing criteria, and entries cached for another bounding box, are
    skipped, so they drop out of every intersection.
    """
    region = bbox_meta(bbox)
    isochrones: list[Isochrone] = []
    for criterion in criteria:
        data = _cached_for_region(isochrones_path(criterion), region)
        if data is None:
            print(f"Warning: no cached isochrones for {criterion.label}.")
            continue
        isochrones.extend(isochrones_from_geojson(data))
    return isochrones


# =============================================================================
# Build tasks and flow
# =============================================================================


@task(name="combine-regions")
def combine_regions(isochrones: list[Isochrone]) -> list[RegionResult]:
    """Union per criterion, then intersect across criteria."""
    return combine(isochrones)


@task(name="build-map-html")
def build_map_html(
    results: list[RegionResult],
    places: list[Place],
    center: tuple[float, float],
) -> str:
    """Render the interactive map as a standalone HTML page."""
    m = build_region_map(results, center, places)
    return m.get_root().render()


@task(name="build-index-html")
def build_index_html(criteria: list[Criterion], results: list[RegionResult]) -> str:
    """Render the summary page that embeds the map."""
    return render_template(
        "base.html.j2",
        title="Reachable Regions",
        updated=datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC"),
        criteria=[c.label for c in criteria],
        map_src=MAP_FILENAME,
        summary_html=build_summary_html(results),
    )


@task(name="write-site")
def write_site(index_html: str, map_html: str) -> Path:
    """Write both pages to the site directory."""
    store.write_text(SITE_DIR / MAP_FILENAME, map_html)
    return store.write_text(SITE_DIR / "index.html", index_html)


@flow(name="build-site", log_prints=True)
def build_all(criteria: list[Criterion] | None = None) -> dict[str, Any]:
    """
    Build the static site from cached data.

    Criteria whose isochrones are missing from the cache are simply absent
    from the map and from every intersection.
    """
    settings = get_settings()
    criteria = list(criteria or DEFAULT_CRITERIA)

    print("Loading isochrones...")
    isochrones = load_isochrones(criteria, settings.bbox)
    if not isochrones:
        print("No isochrone data found. Run fetch flow first.")
        return {"error": "no data"}

    print("Loading places...")
    places = load_places(list(dict.fromkeys(c.category for c in criteria)), settings.bbox)

    print(f"Combining {len(isochrones)} isochrones...")
    results = combine_regions(isochrones)
    best = max((r.count for r in results), default=0)
    print(f"Found {len(results)} region sets; best satisfies {best} of {len(criteria)} criteria.")

    print("Building HTML...")
    map_html = build_map_html(results, places, settings.bbox.center)
    index_html = build_index_html(criteria, results)

    print("Writing site...")
    output_path = write_site(index_html, map_html)

    print(f"Site built: {output_path}")
    return {
        "regions": len(results),
        "max_criteria": best,
        "output": str(output_path),
    }


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
