"""Criteria used when none are given on the command line."""

from __future__ import annotations

from isochrone_planner.schemas import Criterion, TravelMode

DEFAULT_CRITERIA: tuple[Criterion, ...] = (
    Criterion(category="supermarket", mode=TravelMode.DRIVING, minutes=5),
    Criterion(category="school", mode=TravelMode.WALKING, minutes=10),
    Criterion(category="hospital", mode=TravelMode.DRIVING, minutes=10),
)
