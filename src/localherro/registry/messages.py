"""
Public message log.

Broadcast chat messages, bounded twice: by age (`max_age_seconds`) and by count
(`max_count`, oldest dropped first). Each message snapshots its sender's location
at post time; readers see only messages posted within their radius.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any

from localherro.core.clock import Clock
from localherro.core.geo import GeoPoint, within_radius
from localherro.core.ids import new_id
from localherro.domain.models import (
    DEFAULT_PROFESSION,
    DEFAULT_USER_NAME,
    MessagePost,
    PublicMessage,
    validate_payload,
)
from localherro.domain.parsing import parse_coordinate, parse_radius, truncate_text
from localherro.registry.retention import prune_older_than, trim_to_capacity

logger = logging.getLogger(__name__)


class MessageLog:
    def __init__(
        self,
        clock: Clock,
        *,
        max_age_seconds: int = 30 * 60,
        max_count: int = 200,
        text_max_length: int = 500,
        default_radius_km: float = 5.0,
    ):
        self._clock = clock
        self._max_age_ms = int(max_age_seconds * 1000)
        self._max_count = int(max_count)
        self._text_max_length = int(text_max_length)
        self._default_radius_km = float(default_radius_km)
        self._messages: deque[PublicMessage] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def _prune_locked(self, now_ms: int) -> None:
        expired = prune_older_than(
            self._messages, now_ms=now_ms, max_age_ms=self._max_age_ms, created_at=lambda m: m.created_at
        )
        overflow = trim_to_capacity(self._messages, max_count=self._max_count)
        if expired or overflow:
            logger.debug("Pruned public messages: expired=%d overflow=%d", expired, overflow)

    def post(self, payload: Any) -> PublicMessage:
        """Store a message (text silently truncated) and return it."""
        req = validate_payload(MessagePost, payload)
        with self._lock:
            now = self._clock.now_ms()
            message = PublicMessage(
                id=new_id(now),
                from_id=req.from_id,
                from_name=req.from_name or DEFAULT_USER_NAME,
                profession=req.profession or DEFAULT_PROFESSION,
                latitude=req.latitude,
                longitude=req.longitude,
                text=truncate_text(req.text, self._text_max_length),
                created_at=now,
            )
            self._messages.append(message)
            self._prune_locked(now)
            return message.model_copy()

    def nearby(self, lat: Any, lng: Any, radius_km: Any = None) -> list[PublicMessage]:
        """Return messages posted within `radius_km`, oldest first."""
        origin = GeoPoint(lat=parse_coordinate(lat), lon=parse_coordinate(lng))
        radius = parse_radius(radius_km, self._default_radius_km)

        with self._lock:
            self._prune_locked(self._clock.now_ms())
            out = [
                m.model_copy()
                for m in self._messages
                if within_radius(origin, GeoPoint(lat=m.latitude, lon=m.longitude), radius)[0]
            ]
        out.sort(key=lambda m: m.created_at)
        return out
