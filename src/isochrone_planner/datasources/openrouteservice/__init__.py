"""OpenRouteService isochrone data source.

Public API:
  - client: request_isochrones, ORS_API, MAX_LOCATIONS_PER_REQUEST
  - models: Isochrone
  - isochrones: fetch_isochrones, parse_isochrones, batched
  - serialization: isochrones_to_geojson, isochrones_from_geojson
"""

from isochrone_planner.datasources.openrouteservice.client import (
    MAX_LOCATIONS_PER_REQUEST,
    ORS_API,
    request_isochrones,
)
from isochrone_planner.datasources.openrouteservice.isochrones import (
    batched,
    fetch_isochrones,
    parse_isochrones,
)
from isochrone_planner.datasources.openrouteservice.models import Isochrone
from isochrone_planner.datasources.openrouteservice.serialization import (
    isochrones_from_geojson,
    isochrones_to_geojson,
)

__all__ = [
    "MAX_LOCATIONS_PER_REQUEST",
    "ORS_API",
    "Isochrone",
    "batched",
    "fetch_isochrones",
    "isochrones_from_geojson",
    "isochrones_to_geojson",
    "parse_isochrones",
    "request_isochrones",
]
