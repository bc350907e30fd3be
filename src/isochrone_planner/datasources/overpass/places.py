"""Place lookups: Overpass elements -> Place records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from isochrone_planner.datasources.overpass import client
from isochrone_planner.schemas import Place

if TYPE_CHECKING:
    from isochrone_planner.reference.geography import BoundingBox

logger = logging.getLogger(__name__)


# =============================================================================
# Parsing
# =============================================================================


def _element_coordinates(element: dict[str, Any]) -> tuple[float, float] | None:
    """(lat, lon) of a node, or of a way's center. None if neither is present."""
    if "lat" in element and "lon" in element:
        return float(element["lat"]), float(element["lon"])
    center = element.get("center")
    if center and "lat" in center and "lon" in center:
        return float(center["lat"]), float(center["lon"])
    return None


def parse_places(payload: dict[str, Any], category: str) -> list[Place]:
    """Normalize an Overpass JSON payload into Place records.

    Elements without usable coordinates (e.g. ways queried without
    ``out center``) are dropped, as are elements that fail validation.
    """
    places: list[Place] = []
    for element in payload.get("elements", []):
        if element.get("type") not in ("node", "way"):
            continue
        osm_id = element.get("id")
        try:
            coords = _element_coordinates(element)
            if coords is None:
                continue
            tags = element.get("tags") or {}
            name = tags.get("name") or f"{category} {osm_id}"
            place = Place(
                name=name,
                category=category,
                lat=coords[0],
                lon=coords[1],
                osm_type=element["type"],
                osm_id=osm_id,
            )
        except ValueError as exc:
            logger.warning("Skipping %s %s: %s", element["type"], osm_id, exc)
            continue
        places.append(place)
    return places


# =============================================================================
# API Fetching
# =============================================================================


def fetch_places(
    category: str,
    bbox: BoundingBox,
    *,
    url: str = client.OVERPASS_API,
    timeout: int = client.DEFAULT_QUERY_TIMEOUT,
) -> list[Place]:
    """
    Fetch every place of a category inside a bounding box.

    Network and decoding failures are logged and yield an empty list, so one
    unreachable category doesn't sink the whole run.

    Args:
        category: Place category (see ``reference.categories``).
        bbox: Region to search.
        url: Overpass interpreter endpoint.
        timeout: Server-side query timeout in seconds.

    Returns:
        List of Place records (possibly empty).

    Raises:
        ValueError: if the category is unknown.
    """
    query = client.build_query(category, bbox, timeout=timeout)
    try:
        payload = client.post_query(query, url=url)
        places = parse_places(payload, category)
    except (requests.RequestException, ValueError, KeyError) as exc:
        logger.warning("Overpass query for %s failed: %s", category, exc)
        return []

    logger.info("Found %d %s places", len(places), category)
    return places
