"""Batched isochrone fetching and response parsing."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any

import requests
from shapely.errors import GeometryTypeError
from shapely.geometry import shape

from isochrone_planner.datasources.openrouteservice import client
from isochrone_planner.datasources.openrouteservice.models import Isochrone

if TYPE_CHECKING:
    from isochrone_planner.schemas import Criterion, Place

logger = logging.getLogger(__name__)

_POLYGONAL = ("Polygon", "MultiPolygon")


def batched(places: Sequence[Place], size: int) -> Iterator[list[Place]]:
    """Yield consecutive batches of at most ``size`` places."""
    if size < 1:
        msg = f"Batch size must be positive, got {size}"
        raise ValueError(msg)
    for start in range(0, len(places), size):
        yield list(places[start : start + size])


def parse_isochrones(
    payload: dict[str, Any],
    batch: Sequence[Place],
    criterion: Criterion,
) -> list[Isochrone]:
    """Match each returned feature to its place via ``group_index``.

    Features pointing outside the batch, or without polygonal geometry, are
    skipped.
    """
    isochrones: list[Isochrone] = []
    for feature in payload.get("features", []):
        props = feature.get("properties") or {}
        index = props.get("group_index")
        if not isinstance(index, int) or not 0 <= index < len(batch):
            logger.debug("Skipping feature with group_index %r", index)
            continue
        geometry = feature.get("geometry") or {}
        if geometry.get("type") not in _POLYGONAL:
            continue
        isochrones.append(
            Isochrone(place=batch[index], criterion=criterion, geometry=shape(geometry))
        )
    return isochrones


def fetch_isochrones(
    places: Sequence[Place],
    criterion: Criterion,
    api_key: str,
    *,
    batch_size: int = client.MAX_LOCATIONS_PER_REQUEST,
    delay: float = client.DEFAULT_BATCH_DELAY,
    base_url: str = client.ORS_API,
) -> list[Isochrone]:
    """
    Fetch one isochrone per place for a criterion.

    Places are sent in batches of ``batch_size`` with a fixed ``delay``
    between consecutive requests. A failed batch is logged and skipped; the
    remaining batches still run.

    Args:
        places: Places to compute reachability from.
        criterion: Travel mode and time threshold (category is informational).
        api_key: OpenRouteService API key.
        batch_size: Locations per request (ORS allows at most 5).
        delay: Seconds to sleep between batches.
        base_url: API root.

    Returns:
        Isochrones for every place whose batch succeeded.

    Raises:
        ValueError: if ``api_key`` is empty or ``batch_size`` is out of range.
    """
    if not places:
        return []
    if not api_key:
        msg = "An OpenRouteService API key is required (set ISOCHRONE_PLANNER_ORS_API_KEY)"
        raise ValueError(msg)
    if batch_size > client.MAX_LOCATIONS_PER_REQUEST:
        msg = f"batch_size must be at most {client.MAX_LOCATIONS_PER_REQUEST}, got {batch_size}"
        raise ValueError(msg)

    isochrones: list[Isochrone] = []
    for i, batch in enumerate(batched(places, batch_size)):
        if i > 0 and delay > 0:
            time.sleep(delay)
        coordinates = [place.lonlat for place in batch]
        try:
            payload = client.request_isochrones(
                coordinates,
                criterion.mode,
                criterion.minutes,
                api_key,
                base_url=base_url,
            )
            isochrones.extend(parse_isochrones(payload, batch, criterion))
        except (requests.RequestException, ValueError, KeyError, GeometryTypeError) as exc:
            names = ", ".join(p.name for p in batch)
            logger.warning("Isochrone batch %d (%s) for %s failed: %s", i, names, criterion.key, exc)

    logger.info("Fetched %d isochrones for %s", len(isochrones), criterion.key)
    return isochrones
