"""
API routes.

Endpoints (JSON field names are part of the client contract):
- POST `/presence`, GET `/nearby-users`: device presence
- POST/GET `/messages`: public chat around a point
- POST/GET `/help-alerts`, GET `/help-alerts/{id}`, POST `/help-alerts/{id}/accept`: help requests
- GET/POST `/help-alerts/{id}/messages`: private messages for one alert
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Body, Query

from localherro.config.settings import get_settings
from localherro.domain.models import (
    Ack,
    AlertResponse,
    DirectMessage,
    DirectMessagePosted,
    HelpAlert,
    MessagePosted,
    NearbyUser,
    PublicMessage,
)
from localherro.registry.container import Registries, build_registries

router = APIRouter()


@lru_cache
def _registries() -> Registries:
    return build_registries(get_settings())


# Presence


@router.post("/presence", response_model=Ack)
def post_presence(payload: Any = Body(None)) -> Ack:
    """Record the caller's current location."""
    _registries().presence.report(payload)
    return Ack()


@router.get("/nearby-users", response_model=list[NearbyUser])
def get_nearby_users(
    lat: str | None = None,
    lng: str | None = None,
    radius_km: str | None = Query(None, alias="radiusKm"),
    self_id: str | None = Query(None, alias="selfId"),
) -> list[NearbyUser]:
    """List live devices around a point (the caller's own id excluded)."""
    return _registries().presence.nearby(lat, lng, radius_km, exclude_id=self_id)


# Public messages


@router.post("/messages", response_model=MessagePosted)
def post_message(payload: Any = Body(None)) -> MessagePosted:
    message = _registries().messages.post(payload)
    return MessagePosted(message=message)


@router.get("/messages", response_model=list[PublicMessage])
def get_messages(
    lat: str | None = None,
    lng: str | None = None,
    radius_km: str | None = Query(None, alias="radiusKm"),
) -> list[PublicMessage]:
    """Messages posted around a point, oldest first."""
    return _registries().messages.nearby(lat, lng, radius_km)


# Help alerts


@router.post("/help-alerts", response_model=AlertResponse)
def post_help_alert(payload: Any = Body(None)) -> AlertResponse:
    alert = _registries().alerts.create(payload)
    return AlertResponse(alert=alert)


@router.get("/help-alerts", response_model=list[HelpAlert])
def get_help_alerts(
    lat: str | None = None,
    lng: str | None = None,
    radius_km: str | None = Query(None, alias="radiusKm"),
    exclude_id: str | None = Query(None, alias="excludeId"),
) -> list[HelpAlert]:
    """Alerts around a point, newest first."""
    return _registries().alerts.nearby(lat, lng, radius_km, exclude_id=exclude_id)


@router.get("/help-alerts/{alert_id}", response_model=HelpAlert)
def get_help_alert(alert_id: str) -> HelpAlert:
    return _registries().alerts.get(alert_id)


@router.post("/help-alerts/{alert_id}/accept", response_model=AlertResponse)
def accept_help_alert(alert_id: str, payload: Any = Body(None)) -> AlertResponse:
    alert = _registries().alerts.accept(alert_id, payload)
    return AlertResponse(alert=alert)


# Direct messages


@router.get("/help-alerts/{alert_id}/messages", response_model=list[DirectMessage])
def get_direct_messages(alert_id: str) -> list[DirectMessage]:
    return _registries().direct_messages.list_for(alert_id)


@router.post("/help-alerts/{alert_id}/messages", response_model=DirectMessagePosted)
def post_direct_message(alert_id: str, payload: Any = Body(None)) -> DirectMessagePosted:
    message = _registries().direct_messages.post(alert_id, payload)
    return DirectMessagePosted(message=message)
