"""
Help-alert registry.

An alert is Open until someone accepts it, then Accepted. Accepting is an
unconditional overwrite: a second helper accepting the same alert takes it over
(see DESIGN.md). Alerts expire `max_age_seconds` after creation whatever their
state.

Query ordering is newest first, the opposite of the public message log.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any

from localherro.core.clock import Clock
from localherro.core.errors import NotFoundError
from localherro.core.geo import GeoPoint, within_radius
from localherro.core.ids import new_id
from localherro.domain.models import (
    DEFAULT_ALERT_TYPE,
    DEFAULT_USER_NAME,
    HelpAlert,
    HelpAlertAccept,
    HelpAlertCreate,
    validate_payload,
)
from localherro.domain.parsing import parse_coordinate, parse_radius, truncate_text
from localherro.registry.retention import prune_older_than

logger = logging.getLogger(__name__)


class HelpAlertRegistry:
    def __init__(
        self,
        clock: Clock,
        *,
        max_age_seconds: int = 60 * 60,
        text_max_length: int = 500,
        default_radius_km: float = 5.0,
    ):
        self._clock = clock
        self._max_age_ms = int(max_age_seconds * 1000)
        self._text_max_length = int(text_max_length)
        self._default_radius_km = float(default_radius_km)
        self._alerts: deque[HelpAlert] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._alerts)

    def _prune_locked(self, now_ms: int) -> None:
        expired = prune_older_than(
            self._alerts, now_ms=now_ms, max_age_ms=self._max_age_ms, created_at=lambda a: a.created_at
        )
        if expired:
            logger.debug("Pruned %d expired help alerts", expired)

    def _find_locked(self, alert_id: str) -> HelpAlert:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        raise NotFoundError("Help alert not found")

    def create(self, payload: Any) -> HelpAlert:
        req = validate_payload(HelpAlertCreate, payload)
        with self._lock:
            now = self._clock.now_ms()
            alert = HelpAlert(
                id=new_id(now),
                type=req.type or DEFAULT_ALERT_TYPE,
                message=truncate_text(req.message, self._text_max_length),
                latitude=req.latitude,
                longitude=req.longitude,
                from_id=req.from_id,
                from_name=req.from_name or DEFAULT_USER_NAME,
                phone=req.phone or None,
                created_at=now,
            )
            self._alerts.append(alert)
            self._prune_locked(now)
        logger.info("Help alert %s (%s) raised by %s", alert.id, alert.type, alert.from_id)
        return alert.model_copy()

    def nearby(
        self,
        lat: Any,
        lng: Any,
        radius_km: Any = None,
        exclude_id: str | None = None,
    ) -> list[HelpAlert]:
        """Return alerts within `radius_km`, newest first, skipping `exclude_id`'s own."""
        origin = GeoPoint(lat=parse_coordinate(lat), lon=parse_coordinate(lng))
        radius = parse_radius(radius_km, self._default_radius_km)

        with self._lock:
            self._prune_locked(self._clock.now_ms())
            out = [
                a.model_copy()
                for a in self._alerts
                if not (exclude_id and a.from_id == exclude_id)
                and within_radius(origin, GeoPoint(lat=a.latitude, lon=a.longitude), radius)[0]
            ]
        out.sort(key=lambda a: a.created_at, reverse=True)
        return out

    def get(self, alert_id: str) -> HelpAlert:
        with self._lock:
            self._prune_locked(self._clock.now_ms())
            return self._find_locked(alert_id).model_copy()

    def accept(self, alert_id: str, payload: Any) -> HelpAlert:
        """Assign a helper to the alert, replacing any earlier helper."""
        req = validate_payload(HelpAlertAccept, payload)
        with self._lock:
            now = self._clock.now_ms()
            self._prune_locked(now)
            alert = self._find_locked(alert_id)
            if alert.is_accepted and alert.accepted_by_id != req.helper_id:
                logger.info(
                    "Help alert %s reassigned from %s to %s", alert.id, alert.accepted_by_id, req.helper_id
                )
            alert.accepted_by_id = req.helper_id
            alert.accepted_by_name = req.helper_name or DEFAULT_USER_NAME
            alert.accepted_by_phone = req.helper_phone or None
            alert.accepted_at = now
            logger.info("Help alert %s accepted by %s", alert.id, req.helper_id)
            return alert.model_copy()
