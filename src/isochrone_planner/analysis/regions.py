"""Set algebra over isochrones: per-criterion unions and cross-criterion intersections.

A ``RegionResult`` is the area that satisfies a particular set of criteria,
e.g. "5 min drive to a supermarket AND 10 min walk to a school". Results of
size 1 are the plain unions; larger ones are built by folding pairwise
intersections over each subset of criteria.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from functools import reduce
from itertools import combinations
from typing import TYPE_CHECKING

from pyproj import Geod
from shapely.errors import GEOSException
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon
from shapely.ops import unary_union

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from shapely.geometry.base import BaseGeometry

    from isochrone_planner.datasources.openrouteservice import Isochrone
    from isochrone_planner.schemas import Criterion

logger = logging.getLogger(__name__)

_GEOD = Geod(ellps="WGS84")


@dataclass(frozen=True)
class RegionResult:
    """Area satisfying every criterion in ``criteria`` (sorted by key)."""

    criteria: tuple[Criterion, ...]
    geometry: BaseGeometry

    @property
    def count(self) -> int:
        return len(self.criteria)

    @property
    def key(self) -> str:
        return " & ".join(c.key for c in self.criteria)

    @property
    def label(self) -> str:
        return " + ".join(c.label for c in self.criteria)

    @property
    def area_km2(self) -> float:
        return region_area_km2(self.geometry)


def region_area_km2(geometry: BaseGeometry) -> float:
    """Geodesic area on the WGS84 ellipsoid, in square kilometres."""
    if geometry.is_empty:
        return 0.0
    area, _perimeter = _GEOD.geometry_area_perimeter(geometry)
    return abs(area) / 1_000_000


def _polygonal(geometry: BaseGeometry) -> BaseGeometry:
    """Drop the point/line slivers an intersection of touching polygons leaves behind."""
    if isinstance(geometry, Polygon | MultiPolygon):
        return geometry
    if isinstance(geometry, GeometryCollection):
        parts = [g for g in geometry.geoms if isinstance(g, Polygon | MultiPolygon)]
        return unary_union(parts) if parts else GeometryCollection()
    return GeometryCollection()


def union_by_criterion(isochrones: Iterable[Isochrone]) -> dict[Criterion, BaseGeometry]:
    """Union all isochrones that share a criterion.

    Criteria with no isochrones don't appear in the result, and neither do
    criteria whose polygons GEOS cannot union (e.g. self-intersecting rings).
    """
    grouped: dict[Criterion, list[BaseGeometry]] = defaultdict(list)
    for iso in isochrones:
        grouped[iso.criterion].append(iso.geometry)

    unions: dict[Criterion, BaseGeometry] = {}
    for criterion, geoms in grouped.items():
        try:
            unions[criterion] = unary_union(geoms)
        except GEOSException as exc:
            logger.warning("Skipping %s: union failed: %s", criterion.key, exc)
    return unions


def intersect_criteria(
    unions: Mapping[Criterion, BaseGeometry],
    min_size: int = 2,
) -> list[RegionResult]:
    """Intersect every subset of ``min_size``..N criteria.

    Subsets with an empty intersection are left out, as are subsets whose
    intersection GEOS rejects (invalid input polygons are not repaired).
    """
    criteria = sorted(unions, key=lambda c: c.key)
    results: list[RegionResult] = []
    for size in range(max(min_size, 1), len(criteria) + 1):
        for subset in combinations(criteria, size):
            try:
                geometry = reduce(
                    lambda acc, c: acc if acc.is_empty else acc.intersection(unions[c]),
                    subset[1:],
                    unions[subset[0]],
                )
                geometry = _polygonal(geometry)
            except GEOSException as exc:
                keys = " & ".join(c.key for c in subset)
                logger.warning("Skipping %s: intersection failed: %s", keys, exc)
                continue
            if geometry.is_empty:
                continue
            results.append(RegionResult(criteria=subset, geometry=geometry))
    return results


def combine(isochrones: Iterable[Isochrone]) -> list[RegionResult]:
    """Unions (count 1) plus all cross-criterion intersections.

    Ordered by criteria count, then key.
    """
    unions = union_by_criterion(isochrones)
    results = intersect_criteria(unions, min_size=1)
    return sorted(results, key=lambda r: (r.count, r.key))
