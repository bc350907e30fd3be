"""Overpass API client: query building and transport.

API docs: https://wiki.openstreetmap.org/wiki/Overpass_API
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from isochrone_planner.reference.categories import osm_tag_for
from isochrone_planner.services.http import session

if TYPE_CHECKING:
    from isochrone_planner.reference.geography import BoundingBox

OVERPASS_API = "https://overpass-api.de/api/interpreter"
DEFAULT_QUERY_TIMEOUT = 25  # seconds, server-side [timeout:] setting


def build_query(category: str, bbox: BoundingBox, timeout: int = DEFAULT_QUERY_TIMEOUT) -> str:
    """Build an Overpass QL query for all nodes and ways of a category in a bbox.

    Ways are returned with their ``center`` so each one collapses to a point.

    Raises:
        ValueError: if the category is unknown.
    """
    key, value = osm_tag_for(category)
    area = bbox.as_overpass()
    return (
        f"[out:json][timeout:{timeout}];\n"
        "(\n"
        f'  node["{key}"="{value}"]({area});\n'
        f'  way["{key}"="{value}"]({area});\n'
        ");\n"
        "out center;"
    )


def post_query(query: str, url: str = OVERPASS_API) -> dict[str, Any]:
    """POST a query to the interpreter and return the decoded JSON."""
    resp = session.post(url, data={"data": query})
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result
