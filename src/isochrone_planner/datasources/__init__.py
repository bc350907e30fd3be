"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request helpers
    ├── models.py         # Dataclasses for API responses (optional)
    └── {feature}.py      # Fetch + parse functions (one per endpoint/concept)

Current sources:
  - overpass/          OpenStreetMap places by category (Overpass API)
  - openrouteservice/  Time isochrones around places (OpenRouteService)

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above.
   See ``overpass/`` for a minimal example.

2. Write fetch functions that return dicts or models::

       from isochrone_planner.services.http import session

       def fetch_something(bbox) -> dict[str, Any]:
           resp = session.post(API_URL, data={...})
           resp.raise_for_status()
           return resp.json()

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Wire into the pipeline (see ``flows/fetch.py``):
   - Add a ``@task`` that calls your fetch function
   - Pick a store path (e.g. ``cache/mydata.json``)
   - Call ``store.write(path, data, source="...", valid_until=...)``
   - Add the task call to ``fetch_all()``

5. Add tests in ``tests/test_{name}.py``.
"""
