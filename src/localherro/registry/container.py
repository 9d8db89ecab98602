"""
Process-wide registry container.

The four registries share nothing but the clock; they are built once from
settings when the API first needs them and live for the life of the process.
"""

from __future__ import annotations

from dataclasses import dataclass

from localherro.config.settings import Settings
from localherro.core.clock import Clock, SystemClock
from localherro.registry.alerts import HelpAlertRegistry
from localherro.registry.direct_messages import DirectMessageLog
from localherro.registry.messages import MessageLog
from localherro.registry.presence import PresenceRegistry


@dataclass(frozen=True)
class Registries:
    presence: PresenceRegistry
    messages: MessageLog
    alerts: HelpAlertRegistry
    direct_messages: DirectMessageLog


def build_registries(settings: Settings, clock: Clock | None = None) -> Registries:
    clock = clock or SystemClock()
    limits = settings.limits
    return Registries(
        presence=PresenceRegistry(
            clock,
            stale_seconds=limits.presence_stale_seconds,
            default_radius_km=limits.default_radius_km,
        ),
        messages=MessageLog(
            clock,
            max_age_seconds=limits.message_max_age_seconds,
            max_count=limits.message_max_count,
            text_max_length=limits.text_max_length,
            default_radius_km=limits.default_radius_km,
        ),
        alerts=HelpAlertRegistry(
            clock,
            max_age_seconds=limits.alert_max_age_seconds,
            text_max_length=limits.text_max_length,
            default_radius_km=limits.default_radius_km,
        ),
        direct_messages=DirectMessageLog(
            clock,
            max_age_seconds=limits.direct_message_max_age_seconds,
            text_max_length=limits.text_max_length,
        ),
    )
