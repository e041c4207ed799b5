"""Location store - in-memory registry of the Athens places.

Design decisions:
- Records are loaded once from fixtures; nothing is created or deleted later
- record_report() is the single mutation entry point
- One lock guards every read and write so concurrent reports never lose updates
- Callers always get copies; the stored records are only mutated in here
- In-memory storage, resets on restart
"""

import logging
import threading
from typing import Callable, Optional, Union

from app.engine.scoring import (
    ReportIntensity,
    apply_report_delta,
    compute_priority_index,
)
from app.schemas.location import PlaceRecord
from app.seed_data import get_athens_locations

logger = logging.getLogger(__name__)

FixtureLoader = Callable[[], list[PlaceRecord]]


class LocationStore:
    """Owns the place records and keeps their priority index current."""

    def __init__(self, loader: FixtureLoader = get_athens_locations):
        self._loader = loader
        self._lock = threading.Lock()
        self._records: list[PlaceRecord] = []
        self.reset()

    def reset(self) -> None:
        """Reload fixtures and recompute every priority index."""
        records = self._loader()
        names = [r.name.lower() for r in records]
        if len(set(names)) != len(names):
            raise ValueError("Place names must be unique")

        for record in records:
            record.priority_index = compute_priority_index(record.metrics)

        with self._lock:
            self._records = records
        logger.info(f"[STORE] Loaded {len(records)} locations")

    def list_locations(self, sort_by_priority: bool = False) -> list[PlaceRecord]:
        """Copies of all records, optionally by priority index descending.

        sorted() is stable, so equal indices keep fixture order.
        """
        with self._lock:
            records = [r.model_copy(deep=True) for r in self._records]
        if sort_by_priority:
            records = sorted(records, key=lambda r: r.priority_index, reverse=True)
        return records

    def get_location(self, location_id: int) -> Optional[PlaceRecord]:
        """Copy of the record with this id, or None."""
        with self._lock:
            for record in self._records:
                if record.id == location_id:
                    return record.model_copy(deep=True)
        return None

    def find_by_name(self, name: Optional[str], fuzzy: bool = False) -> Optional[PlaceRecord]:
        """
        Resolve a free-text place name to a record.

        Case-insensitive exact match wins. With fuzzy=True, falls back to the
        first record (fixture order) whose name contains the query or is
        contained in it. This is a heuristic: similar names can collide.

        Returns None when nothing qualifies.
        """
        with self._lock:
            record = self._find(name, fuzzy)
            return record.model_copy(deep=True) if record else None

    def record_report(
        self,
        name: Optional[str],
        intensity: Optional[Union[str, ReportIntensity]],
    ) -> Optional[PlaceRecord]:
        """
        Apply a citizen cooling report to the named place.

        Uses exact (case-insensitive) matching only, so a loose name never
        moves another place's score. Unknown names are a no-op.

        Returns a copy of the updated record, or None when unresolved.
        """
        with self._lock:
            record = self._find(name, fuzzy=False)
            if record is None:
                logger.info(f"[STORE] Report for unknown place ignored | name={name!r}")
                return None

            before_score = record.metrics.citizen_cooling_score
            before_index = record.priority_index
            record.metrics.citizen_cooling_score = apply_report_delta(before_score, intensity)
            record.priority_index = compute_priority_index(record.metrics)

            logger.info(
                f"[STORE] Report applied | name={record.name} | intensity={intensity} | "
                f"cooling={before_score}->{record.metrics.citizen_cooling_score} | "
                f"priority={before_index}->{record.priority_index}"
            )
            return record.model_copy(deep=True)

    def _find(self, name: Optional[str], fuzzy: bool) -> Optional[PlaceRecord]:
        """Lookup without locking; callers hold the lock."""
        if not name or not name.strip():
            return None
        target = name.strip().lower()

        for record in self._records:
            if record.name.lower() == target:
                return record

        if fuzzy:
            for record in self._records:
                candidate = record.name.lower()
                if target in candidate or candidate in target:
                    return record

        return None


_store: Optional[LocationStore] = None
_store_lock = threading.Lock()


def get_location_store() -> LocationStore:
    """Get the process-wide location store."""
    global _store
    with _store_lock:
        if _store is None:
            _store = LocationStore()
        return _store
