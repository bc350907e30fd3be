"""
Prefect flows for the data pipeline.

Flows:
- fetch: Places from Overpass, isochrones from OpenRouteService (cached)
- build: Union/intersect isochrones and render the static site

Usage (local):
    python -m isochrone_planner.flows.fetch
    python -m isochrone_planner.flows.build
"""
