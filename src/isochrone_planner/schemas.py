"""
Domain models for isochrone planner.

Pydantic models for data from external APIs and internal processing.
These define the canonical schema - datasources normalize API responses to these.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

# =============================================================================
# Places
# =============================================================================


class Place(BaseModel):
    """A named point of interest from OpenStreetMap."""

    model_config = {"str_strip_whitespace": True, "frozen": True}

    name: str
    category: str = Field(..., description="Place category, e.g. supermarket")
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    osm_type: str = Field(default="node", description="node or way")
    osm_id: int | None = None

    @property
    def lonlat(self) -> list[float]:
        """Coordinate pair in the [lon, lat] order routing services expect."""
        return [self.lon, self.lat]

    @property
    def osm_url(self) -> str | None:
        if self.osm_id is None:
            return None
        return f"https://www.openstreetmap.org/{self.osm_type}/{self.osm_id}"


# =============================================================================
# Criteria
# =============================================================================


class TravelMode(StrEnum):
    """OpenRouteService routing profiles."""

    DRIVING = "driving-car"
    WALKING = "foot-walking"
    CYCLING = "cycling-regular"

    @classmethod
    def parse(cls, value: str) -> TravelMode:
        """Accept a profile name or a short alias (drive, walk, bike)."""
        aliases = {
            "drive": cls.DRIVING,
            "driving": cls.DRIVING,
            "car": cls.DRIVING,
            "walk": cls.WALKING,
            "walking": cls.WALKING,
            "foot": cls.WALKING,
            "bike": cls.CYCLING,
            "cycling": cls.CYCLING,
        }
        value = value.strip().lower()
        if value in aliases:
            return aliases[value]
        return cls(value)

    @property
    def verb(self) -> str:
        return {
            TravelMode.DRIVING: "driving",
            TravelMode.WALKING: "walking",
            TravelMode.CYCLING: "cycling",
        }[self]


class Criterion(BaseModel):
    """One isochrone layer: a place category reached by a mode within a time."""

    model_config = {"frozen": True}

    category: str
    mode: TravelMode
    minutes: int = Field(..., gt=0, le=60)

    @property
    def key(self) -> str:
        """Stable identifier, e.g. ``supermarket/driving-car/5``."""
        return f"{self.category}/{self.mode.value}/{self.minutes}"

    @property
    def label(self) -> str:
        """Human label, e.g. ``supermarket, 5 min driving``."""
        return f"{self.category}, {self.minutes} min {self.mode.verb}"

    @property
    def seconds(self) -> int:
        return self.minutes * 60

    @classmethod
    def parse(cls, text: str) -> Criterion:
        """Parse ``CATEGORY:MODE:MINUTES`` (e.g. ``school:walk:10``).

        Raises:
            ValueError: if the text is malformed.
        """
        parts = text.split(":")
        if len(parts) != 3:
            msg = f"Criterion must look like CATEGORY:MODE:MINUTES, got {text!r}"
            raise ValueError(msg)
        category, mode, minutes = (p.strip() for p in parts)
        try:
            return cls(category=category, mode=TravelMode.parse(mode), minutes=int(minutes))
        except ValueError as exc:
            msg = f"Invalid criterion {text!r}: {exc}"
            raise ValueError(msg) from exc
