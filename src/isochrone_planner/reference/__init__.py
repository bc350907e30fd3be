"""Static reference data.

Tables that don't change with API calls: OSM tags per place category,
the default region and the default criteria.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from isochrone_planner.reference.categories import CATEGORY_TAGS as CATEGORY_TAGS
from isochrone_planner.reference.categories import osm_tag_for as osm_tag_for
from isochrone_planner.reference.criteria import DEFAULT_CRITERIA as DEFAULT_CRITERIA
from isochrone_planner.reference.geography import DEFAULT_REGION_BBOX as DEFAULT_REGION_BBOX
from isochrone_planner.reference.geography import BoundingBox as BoundingBox
