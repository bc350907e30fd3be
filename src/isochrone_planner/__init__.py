"""Isochrone Planner - find the areas that are close to everything you need.

Architecture::

    datasources/   External APIs (Overpass places, OpenRouteService isochrones)
    store.py       JSON cache with TTL (cache → derived)
    analysis/      Set algebra over isochrones (unions, intersections, areas)
    renderers/     Pure data → folium map / HTML fragments
    flows/         Prefect orchestration (fetch checks freshness, build renders site)
    services/      Shared utilities (HTTP client)
    reference/     Static tables: OSM tags per category, default region/criteria

Data flow: datasources → store (cache) → analysis → renderers → derived/site/

Extension points (see each package's docstring for step-by-step guides):
  - New place category: reference/categories.py
  - New data source:    datasources/__init__.py
  - New UI module:      renderers/__init__.py
"""

__version__ = "0.1.0"

from isochrone_planner.config import Settings
from isochrone_planner.schemas import Criterion, Place, TravelMode

__all__ = ["Criterion", "Place", "Settings", "TravelMode", "__version__"]
