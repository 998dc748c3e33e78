"""
Prepared Polygon Store

Keeps preprocessed histograms between requests so routing calls only pay
for a table lookup.

- Values are immutable PreparedPolygon instances
- Replacing a polygon swaps a single reference under the lock, so a
  concurrent routing request sees the old or the new polygon, never a mix
- Size-capped; the least recently updated polygon is evicted first
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from histogram_routing import PreparedPolygon, config


# =============================================================================
# Data Classes
# =============================================================================

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PolygonRecord:
    """Internal representation of a stored polygon."""
    id: str
    prepared: PreparedPolygon
    rev: int = 1
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


# =============================================================================
# In-Memory Implementation
# =============================================================================

class InMemoryPolygonStore:
    """
    In-memory polygon store with a size cap.

    Configuration:
    - HISTOGRAM_MAX_POLYGONS: maximum number of polygons kept (default 256)
    """

    def __init__(self, max_polygons: Optional[int] = None):
        self.max_polygons = max_polygons if max_polygons is not None else config.MAX_POLYGONS
        self._records: Dict[str, PolygonRecord] = {}
        self._lock = threading.RLock()

    def _evict_if_needed(self) -> None:
        """Drop oldest records over the cap (caller must hold lock)."""
        if len(self._records) <= self.max_polygons:
            return
        ordered = sorted(self._records.values(), key=lambda r: r.updated_at)
        for record in ordered[:len(self._records) - self.max_polygons]:
            del self._records[record.id]

    def create(self, prepared: PreparedPolygon) -> str:
        polygon_id = str(uuid4())
        with self._lock:
            self._records[polygon_id] = PolygonRecord(id=polygon_id, prepared=prepared)
            self._evict_if_needed()
        return polygon_id

    def get(self, polygon_id: str) -> Optional[PreparedPolygon]:
        with self._lock:
            record = self._records.get(polygon_id)
            return record.prepared if record is not None else None

    def get_record(self, polygon_id: str) -> Optional[PolygonRecord]:
        with self._lock:
            return self._records.get(polygon_id)

    def replace(self, polygon_id: str, prepared: PreparedPolygon) -> Optional[int]:
        """Swap in a new polygon. Returns the new revision, or None if unknown."""
        with self._lock:
            record = self._records.get(polygon_id)
            if record is None:
                return None
            record.prepared = prepared
            record.rev += 1
            record.updated_at = _utcnow()
            return record.rev

    def delete(self, polygon_id: str) -> bool:
        with self._lock:
            return self._records.pop(polygon_id, None) is not None

    def list_ids(self) -> List[str]:
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


# =============================================================================
# Factory Function
# =============================================================================

# Singleton instance
_store_instance: Optional[InMemoryPolygonStore] = None
_store_lock = threading.Lock()


def get_polygon_store() -> InMemoryPolygonStore:
    """
    Get the polygon store instance.

    The instance is cached for the lifetime of the process.
    """
    global _store_instance

    if _store_instance is not None:
        return _store_instance

    with _store_lock:
        # Double-check after acquiring lock
        if _store_instance is None:
            _store_instance = InMemoryPolygonStore()
        return _store_instance


def reset_polygon_store() -> None:
    """
    Reset the polygon store singleton.

    Useful for testing or when configuration changes.
    """
    global _store_instance
    with _store_lock:
        _store_instance = None
