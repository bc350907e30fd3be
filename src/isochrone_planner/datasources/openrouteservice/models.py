"""Isochrone data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from isochrone_planner.schemas import Criterion, Place


@dataclass
class Isochrone:
    """Area reachable from one place under one criterion.

    The geometry is whatever the routing service returned; it is not
    validated or repaired.
    """

    place: Place
    criterion: Criterion
    geometry: BaseGeometry
