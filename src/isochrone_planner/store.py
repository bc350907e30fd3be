"""JSON data store with freshness-aware caching.

Two tiers:
  - cache/: API responses (places per category, isochrones per criterion), 7-day TTL
  - derived/: Computed outputs, always rebuilt (HTML site, map page)

Every JSON file is wrapped in a metadata envelope with ``valid_until`` so the
fetch flow can skip requests whose results are still fresh. OpenRouteService
quotas are small, so re-running a build never has to spend them.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import Any


class DataStore:
    """Manages read/write of cached data files with TTL."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.cache = base_dir / "cache"
        self.derived = base_dir / "derived"

    def read(self, path: Path) -> Any | None:
        """Read the data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``cache/places/school.json``).
            data: Payload to store under the ``data`` key.
            source: Data source identifier (e.g. ``"overpass-api.de"``).
            valid_until: Expiry timestamp. None means derived/no-cache.
            **params: Extra metadata fields (bbox, criterion, etc.).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": datetime.now(UTC).isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        if params:
            meta.update(params)

        envelope = {"meta": meta, "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)

        return full

    def write_text(self, path: Path, text: str) -> Path:
        """Write a plain text file (HTML pages) without an envelope."""
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        full.write_text(text, encoding="utf-8")
        return full

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    def is_fresh(self, path: Path, **params: Any) -> bool:
        """Check if a file exists, hasn't expired, and matches ``params``.

        ``params`` are compared against the stored metadata, so a cache entry
        written for a different bounding box counts as stale.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return False

        meta: dict[str, Any] = envelope.get("meta", {})
        for key, value in params.items():
            if meta.get(key) != value:
                return False

        valid_until = meta.get("valid_until")
        if valid_until is None:
            return False

        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return datetime.now(UTC) < expiry
