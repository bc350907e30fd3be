"""Interactive folium (Leaflet) map of region results.

One togglable layer per RegionResult, colored by how many criteria it
satisfies, plus an optional layer of place markers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import folium
from shapely.geometry import mapping

from isochrone_planner.renderers.palette import build_category_palette, style_for_count

if TYPE_CHECKING:
    from collections.abc import Sequence

    from isochrone_planner.analysis.regions import RegionResult
    from isochrone_planner.schemas import Place

DEFAULT_TILES = "cartodbpositron"
DEFAULT_ZOOM = 13


def _layer_name(result: RegionResult) -> str:
    return f"[{result.count}] {result.label}"


def _add_region_layer(m: folium.Map, result: RegionResult, *, show: bool) -> None:
    style = style_for_count(result.count).as_leaflet()
    group = folium.FeatureGroup(name=_layer_name(result), show=show)
    feature = {
        "type": "Feature",
        "geometry": mapping(result.geometry),
        "properties": {"criteria": result.key, "count": result.count},
    }
    folium.GeoJson(
        feature,
        style_function=lambda _feature, style=style: style,
        tooltip=f"{result.label} ({result.area_km2:.2f} km²)",
    ).add_to(group)
    group.add_to(m)


def _add_places_layer(m: folium.Map, places: Sequence[Place]) -> None:
    colors = build_category_palette([p.category for p in places])
    group = folium.FeatureGroup(name="Places", show=False)
    for place in places:
        popup = f"<b>{place.name}</b><br>{place.category}"
        if place.osm_url:
            popup += f'<br><a href="{place.osm_url}" target="_blank">OpenStreetMap</a>'
        folium.Marker(
            location=[place.lat, place.lon],
            popup=folium.Popup(popup, max_width=250),
            tooltip=place.name,
            icon=folium.Icon(color=colors[place.category], icon="info-sign"),
        ).add_to(group)
    group.add_to(m)


def build_region_map(
    results: Sequence[RegionResult],
    center: tuple[float, float],
    places: Sequence[Place] | None = None,
    *,
    zoom_start: int = DEFAULT_ZOOM,
    tiles: str = DEFAULT_TILES,
) -> folium.Map:
    """Build a Leaflet map with a layer per region result and a layer toggle.

    Only the layers with the highest criteria count are visible at first;
    the rest can be switched on from the layer control.

    Args:
        results: Region results, typically from ``analysis.regions.combine``.
        center: (lat, lon) to center the map on.
        places: Optional places to show as markers.
        zoom_start: Initial zoom level.
        tiles: folium tile layer name.

    Returns:
        The folium map. Call ``.save(path)`` or embed ``get_root().render()``.
    """
    m = folium.Map(location=list(center), zoom_start=zoom_start, tiles=tiles)

    top_count = max((r.count for r in results), default=0)
    # Draw low counts first so the stronger layers sit on top
    for result in sorted(results, key=lambda r: (r.count, r.key)):
        _add_region_layer(m, result, show=result.count == top_count)

    if places:
        _add_places_layer(m, places)

    folium.LayerControl(collapsed=False).add_to(m)
    return m
