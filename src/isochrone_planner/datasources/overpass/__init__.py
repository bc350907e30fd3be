"""OpenStreetMap places via the Overpass API.

Public API:
  - client: build_query, post_query, OVERPASS_API
  - places: fetch_places, parse_places
"""

from isochrone_planner.datasources.overpass.client import OVERPASS_API, build_query, post_query
from isochrone_planner.datasources.overpass.places import fetch_places, parse_places

__all__ = [
    "OVERPASS_API",
    "build_query",
    "fetch_places",
    "parse_places",
    "post_query",
]
