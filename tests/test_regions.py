"""Tests for union/intersection of isochrones."""

from __future__ import annotations

import logging
from itertools import combinations

import pytest
from shapely.geometry import Polygon, box

from isochrone_planner.analysis.regions import (
    RegionResult,
    combine,
    intersect_criteria,
    region_area_km2,
    union_by_criterion,
)
from isochrone_planner.datasources.openrouteservice import Isochrone
from isochrone_planner.schemas import Criterion, Place, TravelMode

SUPERMARKET = Criterion(category="supermarket", mode=TravelMode.DRIVING, minutes=5)
SCHOOL = Criterion(category="school", mode=TravelMode.WALKING, minutes=10)
HOSPITAL = Criterion(category="hospital", mode=TravelMode.DRIVING, minutes=10)


def iso(criterion: Criterion, minx: float, miny: float, maxx: float, maxy: float) -> Isochrone:
    place = Place(
        name=f"{criterion.category} at {minx},{miny}",
        category=criterion.category,
        lat=(miny + maxy) / 2,
        lon=(minx + maxx) / 2,
    )
    return Isochrone(place=place, criterion=criterion, geometry=box(minx, miny, maxx, maxy))


@pytest.fixture
def isochrones() -> list[Isochrone]:
    """Three criteria over a unit grid; all three overlap in [2,3]x[2,3]."""
    return [
        iso(SUPERMARKET, 0, 0, 3, 3),
        iso(SUPERMARKET, 5, 5, 6, 6),
        iso(SCHOOL, 2, 0, 5, 3),
        iso(SCHOOL, 2, 2, 4, 4),
        iso(HOSPITAL, 1, 2, 3, 6),
    ]


class TestUnionByCriterion:
    """Test per-criterion unions."""

    def test_groups_by_criterion(self, isochrones: list[Isochrone]) -> None:
        unions = union_by_criterion(isochrones)
        assert set(unions) == {SUPERMARKET, SCHOOL, HOSPITAL}
        assert unions[SUPERMARKET].area == pytest.approx(9 + 1)
        # [2,5]x[0,3] plus [2,4]x[2,4] minus the overlap [2,4]x[2,3]
        assert unions[SCHOOL].area == pytest.approx(9 + 4 - 2)

    def test_reunion_is_idempotent(self, isochrones: list[Isochrone]) -> None:
        unions = union_by_criterion(isochrones)
        again = union_by_criterion(
            Isochrone(place=isochrones[0].place, criterion=c, geometry=g)
            for c, g in unions.items()
        )
        for criterion, geometry in unions.items():
            assert again[criterion].equals(geometry)

    def test_criterion_without_isochrones_absent(self, isochrones: list[Isochrone]) -> None:
        without_hospital = [i for i in isochrones if i.criterion != HOSPITAL]
        assert HOSPITAL not in union_by_criterion(without_hospital)

    def test_empty(self) -> None:
        assert union_by_criterion([]) == {}


class TestIntersectCriteria:
    """Test cross-criterion intersections."""

    def test_all_subsets_of_size_two_and_up(self, isochrones: list[Isochrone]) -> None:
        results = intersect_criteria(union_by_criterion(isochrones))
        counts = sorted(r.count for r in results)
        assert counts == [2, 2, 2, 3]

    def test_three_way_region(self, isochrones: list[Isochrone]) -> None:
        results = intersect_criteria(union_by_criterion(isochrones))
        (triple,) = [r for r in results if r.count == 3]
        assert triple.geometry.equals(box(2, 2, 3, 3))

    def test_n_way_within_every_n_minus_one_way(self, isochrones: list[Isochrone]) -> None:
        results = {r.criteria: r for r in intersect_criteria(union_by_criterion(isochrones))}
        for criteria, result in results.items():
            if result.count < 3:
                continue
            for subset in combinations(criteria, result.count - 1):
                assert results[subset].geometry.covers(result.geometry)

    def test_criteria_sorted_by_key(self, isochrones: list[Isochrone]) -> None:
        for result in intersect_criteria(union_by_criterion(isochrones)):
            keys = [c.key for c in result.criteria]
            assert keys == sorted(keys)

    def test_disjoint_subset_dropped(self) -> None:
        unions = union_by_criterion([iso(SUPERMARKET, 0, 0, 1, 1), iso(SCHOOL, 5, 5, 6, 6)])
        assert intersect_criteria(unions) == []

    def test_touching_polygons_leave_no_sliver(self) -> None:
        unions = union_by_criterion([iso(SUPERMARKET, 0, 0, 1, 1), iso(SCHOOL, 1, 0, 2, 1)])
        assert intersect_criteria(unions) == []

    def test_missing_criterion_excluded_downstream(self, isochrones: list[Isochrone]) -> None:
        without_hospital = [i for i in isochrones if i.criterion != HOSPITAL]
        results = intersect_criteria(union_by_criterion(without_hospital))
        assert all(HOSPITAL not in r.criteria for r in results)
        assert [r.count for r in results] == [2]

    def test_min_size_one_includes_unions(self, isochrones: list[Isochrone]) -> None:
        results = intersect_criteria(union_by_criterion(isochrones), min_size=1)
        assert sum(1 for r in results if r.count == 1) == 3


class TestCombine:
    """Test the full combine step."""

    def test_ordered_by_count_then_key(self, isochrones: list[Isochrone]) -> None:
        results = combine(isochrones)
        order = [(r.count, r.key) for r in results]
        assert order == sorted(order)
        assert len(results) == 3 + 3 + 1

    def test_single_criterion(self) -> None:
        results = combine([iso(SCHOOL, 0, 0, 1, 1)])
        assert len(results) == 1
        assert results[0].criteria == (SCHOOL,)

    def test_no_isochrones(self) -> None:
        assert combine([]) == []


class TestRegionResult:
    """Test result labels and areas."""

    def test_key_and_label(self) -> None:
        result = RegionResult(criteria=(SCHOOL, SUPERMARKET), geometry=box(0, 0, 1, 1))
        assert result.count == 2
        assert result.key == "school/foot-walking/10 & supermarket/driving-car/5"
        assert result.label == "school, 10 min walking + supermarket, 5 min driving"

    def test_area_km2(self) -> None:
        # 0.01 x 0.01 degrees at the equator is about 1.11 km x 1.11 km
        area = region_area_km2(box(0, 0, 0.01, 0.01))
        assert area == pytest.approx(1.23, rel=0.02)

    def test_area_shrinks_with_latitude(self) -> None:
        assert region_area_km2(box(8.7, 60.0, 8.71, 60.01)) < region_area_km2(
            box(8.7, 0.0, 8.71, 0.01)
        )

    def test_empty_area(self) -> None:
        from shapely.geometry import GeometryCollection

        assert region_area_km2(GeometryCollection()) == 0.0


class TestInvalidGeometry:
    """Self-intersecting isochrones are skipped, not repaired."""

    BOWTIE = Polygon([(0, 0), (2, 2), (2, 0), (0, 2), (0, 0)])

    def test_failed_intersection_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        unions = {SUPERMARKET: self.BOWTIE, SCHOOL: box(0, 0, 1, 1)}

        with caplog.at_level(logging.WARNING):
            results = intersect_criteria(unions)

        assert results == []
        assert "intersection failed" in caplog.text

    def test_combine_keeps_valid_criteria(self) -> None:
        place = Place(name="Rewe", category="supermarket", lat=1, lon=1)
        school = Place(name="Schule", category="school", lat=0.5, lon=0.5)
        isochrones = [
            Isochrone(place=place, criterion=SUPERMARKET, geometry=self.BOWTIE),
            Isochrone(place=school, criterion=SCHOOL, geometry=box(0, 0, 1, 1)),
        ]

        results = combine(isochrones)

        assert all(r.count == 1 for r in results)
        assert SCHOOL in {r.criteria[0] for r in results}
