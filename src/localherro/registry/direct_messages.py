"""
Direct-message log.

Private follow-up messages between a requester and their helper, keyed by alert
id. The alert id is a plain value: posting to an unknown or expired alert is
allowed, and expiring an alert does not delete its messages (they age out on
their own clock).
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any

from localherro.core.clock import Clock
from localherro.core.ids import new_id
from localherro.domain.models import (
    DEFAULT_DIRECT_SENDER_NAME,
    DirectMessage,
    DirectMessagePost,
    validate_payload,
)
from localherro.domain.parsing import truncate_text
from localherro.registry.retention import prune_older_than

logger = logging.getLogger(__name__)


class DirectMessageLog:
    def __init__(self, clock: Clock, *, max_age_seconds: int = 60 * 60, text_max_length: int = 500):
        self._clock = clock
        self._max_age_ms = int(max_age_seconds * 1000)
        self._text_max_length = int(text_max_length)
        self._messages: deque[DirectMessage] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def _prune_locked(self, now_ms: int) -> None:
        expired = prune_older_than(
            self._messages, now_ms=now_ms, max_age_ms=self._max_age_ms, created_at=lambda m: m.created_at
        )
        if expired:
            logger.debug("Pruned %d expired direct messages", expired)

    def list_for(self, alert_id: str) -> list[DirectMessage]:
        """Return the alert's messages, oldest first."""
        with self._lock:
            self._prune_locked(self._clock.now_ms())
            out = [m.model_copy() for m in self._messages if m.alert_id == alert_id]
        out.sort(key=lambda m: m.created_at)
        return out

    def post(self, alert_id: str, payload: Any) -> DirectMessage:
        req = validate_payload(DirectMessagePost, payload)
        with self._lock:
            now = self._clock.now_ms()
            self._prune_locked(now)
            message = DirectMessage(
                id=new_id(now),
                alert_id=alert_id,
                from_id=req.from_id,
                from_name=req.from_name or DEFAULT_DIRECT_SENDER_NAME,
                text=truncate_text(req.text, self._text_max_length),
                created_at=now,
            )
            self._messages.append(message)
            return message.model_copy()
