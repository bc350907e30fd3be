"""OpenRouteService isochrone endpoint.

API docs: https://openrouteservice.org/dev/#/api-docs/v2/isochrones
Free tier: 500 isochrone requests/day, 20/minute, max 5 locations per request.
Requires an API key (ISOCHRONE_PLANNER_ORS_API_KEY).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from isochrone_planner.services.http import session

if TYPE_CHECKING:
    from isochrone_planner.schemas import TravelMode

ORS_API = "https://api.openrouteservice.org/v2"
MAX_LOCATIONS_PER_REQUEST = 5

# 20 requests/minute -> one every 3 seconds
DEFAULT_BATCH_DELAY = 3.0


def request_isochrones(
    coordinates: list[list[float]],
    mode: TravelMode,
    minutes: int,
    api_key: str,
    *,
    base_url: str = ORS_API,
) -> dict[str, Any]:
    """
    Request time isochrones for up to five locations.

    Args:
        coordinates: ``[[lon, lat], ...]`` pairs.
        mode: Routing profile.
        minutes: Travel time threshold.
        api_key: OpenRouteService API key.
        base_url: API root (override for self-hosted instances).

    Returns:
        GeoJSON FeatureCollection, one feature per location. Each feature's
        ``properties.group_index`` is the index of its location.
    """
    if not api_key:
        msg = "An OpenRouteService API key is required (set ISOCHRONE_PLANNER_ORS_API_KEY)"
        raise ValueError(msg)
    if len(coordinates) > MAX_LOCATIONS_PER_REQUEST:
        msg = f"At most {MAX_LOCATIONS_PER_REQUEST} locations per request, got {len(coordinates)}"
        raise ValueError(msg)

    body = {
        "locations": coordinates,
        "range": [minutes * 60],
        "range_type": "time",
    }
    resp = session.post(
        f"{base_url}/isochrones/{mode.value}",
        json=body,
        headers={"Authorization": api_key},
    )
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result
