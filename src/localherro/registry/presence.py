"""
Presence registry.

Keeps the most recent location report per device id. A device that has not
reported for `stale_seconds` is dropped the next time the registry is touched
(report or query); there is no background sweeper.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from localherro.core.clock import Clock
from localherro.core.geo import GeoPoint, within_radius
from localherro.domain.models import (
    DEFAULT_PROFESSION,
    DEFAULT_USER_NAME,
    NearbyUser,
    PresenceRecord,
    PresenceReport,
    validate_payload,
)
from localherro.domain.parsing import parse_coordinate, parse_radius

logger = logging.getLogger(__name__)


class PresenceRegistry:
    def __init__(self, clock: Clock, *, stale_seconds: int = 120, default_radius_km: float = 5.0):
        self._clock = clock
        self._stale_ms = int(stale_seconds * 1000)
        self._default_radius_km = float(default_radius_km)
        self._records: dict[str, PresenceRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _prune_locked(self, now_ms: int) -> None:
        stale = [rid for rid, r in self._records.items() if now_ms - r.last_seen > self._stale_ms]
        for rid in stale:
            del self._records[rid]
        if stale:
            logger.debug("Pruned %d stale presence records", len(stale))

    def report(self, payload: Any) -> None:
        """Upsert the caller's location (the previous report of the same id is replaced)."""
        report = validate_payload(PresenceReport, payload)
        with self._lock:
            now = self._clock.now_ms()
            self._records[report.id] = PresenceRecord(
                id=report.id,
                name=report.name or DEFAULT_USER_NAME,
                profession=report.profession or DEFAULT_PROFESSION,
                latitude=report.latitude,
                longitude=report.longitude,
                last_seen=now,
            )
            self._prune_locked(now)

    def nearby(
        self,
        lat: Any,
        lng: Any,
        radius_km: Any = None,
        exclude_id: str | None = None,
    ) -> list[NearbyUser]:
        """Return live devices within `radius_km` of the point, in registry order."""
        origin = GeoPoint(lat=parse_coordinate(lat), lon=parse_coordinate(lng))
        radius = parse_radius(radius_km, self._default_radius_km)

        with self._lock:
            self._prune_locked(self._clock.now_ms())
            out: list[NearbyUser] = []
            for r in self._records.values():
                if exclude_id and r.id == exclude_id:
                    continue
                ok, d = within_radius(origin, GeoPoint(lat=r.latitude, lon=r.longitude), radius)
                if ok:
                    out.append(
                        NearbyUser(
                            id=r.id,
                            name=r.name,
                            profession=r.profession,
                            latitude=r.latitude,
                            longitude=r.longitude,
                            distance_km=d,
                        )
                    )
            return out
