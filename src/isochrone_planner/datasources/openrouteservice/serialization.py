"""GeoJSON serialization for isochrones, used by the data store cache."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shapely.geometry import mapping, shape

from isochrone_planner.datasources.openrouteservice.models import Isochrone
from isochrone_planner.schemas import Criterion, Place

if TYPE_CHECKING:
    from collections.abc import Iterable


def isochrones_to_geojson(isochrones: Iterable[Isochrone]) -> dict[str, Any]:
    """Serialize isochrones to a GeoJSON FeatureCollection.

    Each feature carries its place and criterion in ``properties``.
    """
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": mapping(iso.geometry),
                "properties": {
                    "place": iso.place.model_dump(),
                    "criterion": iso.criterion.model_dump(mode="json"),
                },
            }
            for iso in isochrones
        ],
    }


def isochrones_from_geojson(collection: dict[str, Any]) -> list[Isochrone]:
    """Inverse of ``isochrones_to_geojson``."""
    return [
        Isochrone(
            place=Place.model_validate(feature["properties"]["place"]),
            criterion=Criterion.model_validate(feature["properties"]["criterion"]),
            geometry=shape(feature["geometry"]),
        )
        for feature in collection.get("features", [])
    ]
