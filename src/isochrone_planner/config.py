"""
Application settings.

Values come from environment variables prefixed with ``ISOCHRONE_PLANNER_``
(e.g. ``ISOCHRONE_PLANNER_ORS_API_KEY``) or from a ``.env`` file in the
working directory.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from isochrone_planner.reference.geography import DEFAULT_REGION_BBOX, BoundingBox

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Runtime configuration for the fetch/build pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="ISOCHRONE_PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "isochrone-planner"
    app_env: str = "development"
    debug: bool = False

    # OpenRouteService
    ors_api_key: str = ""
    ors_url: str = "https://api.openrouteservice.org/v2"
    batch_size: int = Field(default=5, ge=1, le=5)
    batch_delay_seconds: float = Field(default=3.0, ge=0)

    # Overpass
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    overpass_timeout: int = Field(default=25, ge=1)
    # Sent in the User-Agent; Overpass asks for a way to reach the operator
    contact: str = ""

    # Region of interest (defaults: Heidelberg)
    south: float = Field(default=DEFAULT_REGION_BBOX.south, ge=-90, le=90)
    west: float = Field(default=DEFAULT_REGION_BBOX.west, ge=-180, le=180)
    north: float = Field(default=DEFAULT_REGION_BBOX.north, ge=-90, le=90)
    east: float = Field(default=DEFAULT_REGION_BBOX.east, ge=-180, le=180)

    data_dir: Path = Path("data")
    serve_port: int = 8000

    @property
    def bbox(self) -> BoundingBox:
        return BoundingBox(south=self.south, west=self.west, north=self.north, east=self.east)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


def configure_logging(debug: bool = False) -> None:
    """Attach a console handler to the root logger."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)
    # urllib3 is noisy at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
