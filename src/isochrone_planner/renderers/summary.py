"""Summary table of region results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from isochrone_planner.renderers import render_template
from isochrone_planner.renderers.palette import color_for_count

if TYPE_CHECKING:
    from collections.abc import Sequence

    from isochrone_planner.analysis.regions import RegionResult


def build_summary_html(results: Sequence[RegionResult]) -> str:
    """Build an HTML table listing each result set, highest count first."""
    if not results:
        return "<p>No reachable regions found. Check that places and isochrones were fetched.</p>"

    rows = [
        {
            "color": color_for_count(r.count),
            "count": r.count,
            "criteria": [c.label for c in r.criteria],
            "area_km2": f"{r.area_km2:.2f}",
        }
        for r in sorted(results, key=lambda r: (-r.count, r.key))
    ]
    return render_template("summary.html.j2", rows=rows)
