"""OpenStreetMap tags for each place category.

Adding a category: add a ``name: (key, value)`` entry below. The name is what
users type in ``--criterion`` and what shows up in map layer labels.
"""

from __future__ import annotations

CATEGORY_TAGS: dict[str, tuple[str, str]] = {
    "supermarket": ("shop", "supermarket"),
    "bakery": ("shop", "bakery"),
    "school": ("amenity", "school"),
    "kindergarten": ("amenity", "kindergarten"),
    "hospital": ("amenity", "hospital"),
    "doctors": ("amenity", "doctors"),
    "pharmacy": ("amenity", "pharmacy"),
    "park": ("leisure", "park"),
    "bus_stop": ("highway", "bus_stop"),
}


def osm_tag_for(category: str) -> tuple[str, str]:
    """Look up the ``(key, value)`` OSM tag for a category.

    Raises:
        ValueError: if the category is unknown.
    """
    try:
        return CATEGORY_TAGS[category]
    except KeyError:
        known = ", ".join(sorted(CATEGORY_TAGS))
        msg = f"Unknown place category {category!r} (known: {known})"
        raise ValueError(msg) from None
