"""Colors for region layers and place markers.

Shared by the map and the summary table.
"""

from __future__ import annotations

from dataclasses import dataclass

# Indexed by number of satisfied criteria; the last entry covers 4 and up.
_COUNT_COLORS = [
    "#fee08b",  # 1 - yellow
    "#fdae61",  # 2 - light orange
    "#f46d43",  # 3 - orange
    "#d73027",  # 4+ - red
]

# folium.Icon only accepts its own named colors
_MARKER_COLORS = [
    "blue",
    "green",
    "purple",
    "cadetblue",
    "darkred",
    "darkgreen",
    "orange",
    "pink",
    "gray",
]


@dataclass
class LayerStyle:
    """Fill style for one region layer."""

    color: str
    fill_opacity: float

    def as_leaflet(self) -> dict[str, object]:
        return {
            "color": self.color,
            "weight": 1,
            "fillColor": self.color,
            "fillOpacity": self.fill_opacity,
        }


def color_for_count(count: int) -> str:
    """Ramp color for a result satisfying ``count`` criteria."""
    if count < 1:
        msg = f"count must be positive, got {count}"
        raise ValueError(msg)
    return _COUNT_COLORS[min(count, len(_COUNT_COLORS)) - 1]


def style_for_count(count: int) -> LayerStyle:
    """More criteria -> stronger color and higher opacity."""
    return LayerStyle(color=color_for_count(count), fill_opacity=min(0.25 + 0.1 * count, 0.65))


def build_category_palette(categories: list[str]) -> dict[str, str]:
    """Assign a marker color to each category, in sorted order."""
    return {
        category: _MARKER_COLORS[i % len(_MARKER_COLORS)]
        for i, category in enumerate(sorted(set(categories)))
    }
