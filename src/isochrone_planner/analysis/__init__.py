"""Set algebra over fetched isochrones.

Dependency rule: analysis/ imports from datasources/ models only.
It never fetches data or produces HTML.

Modules:
  - regions: isochrones -> per-criterion unions -> cross-criterion intersections
"""

from isochrone_planner.analysis.regions import (
    RegionResult,
    combine,
    intersect_criteria,
    region_area_km2,
    union_by_criterion,
)

__all__ = [
    "RegionResult",
    "combine",
    "intersect_criteria",
    "region_area_km2",
    "union_by_criterion",
]
