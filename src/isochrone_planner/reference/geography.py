"""Geographic bounds for the region of interest."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """South/west/north/east lat-lon bounding box."""

    south: float
    west: float
    north: float
    east: float

    def as_overpass(self) -> str:
        """Return the ``(s,w,n,e)`` filter body used by Overpass QL."""
        return f"{self.south},{self.west},{self.north},{self.east}"

    @property
    def center(self) -> tuple[float, float]:
        """(lat, lon) midpoint, handy for centering a map."""
        return ((self.south + self.north) / 2, (self.west + self.east) / 2)


# Heidelberg, Germany (home of openrouteservice)
DEFAULT_REGION_BBOX = BoundingBox(south=49.37, west=8.62, north=49.44, east=8.74)
