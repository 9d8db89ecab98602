"""
Domain models (Pydantic).

These types are the stable JSON contract of the service:
- request payloads (`PresenceReport`, `MessagePost`, `HelpAlertCreate`, ...)
- stored records (`PresenceRecord`, `PublicMessage`, `HelpAlert`, `DirectMessage`)
- query results (`NearbyUser`)

Attributes are snake_case in Python and camelCase on the wire (`fromId`, `createdAt`,
`acceptedById`, ...); mobile clients depend on the exact wire names.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Mapping, TypeVar

import pydantic
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from localherro.core.errors import ValidationError

DEFAULT_USER_NAME = "Guest user"
DEFAULT_PROFESSION = "Citizen"
DEFAULT_ALERT_TYPE = "HELP"
DEFAULT_DIRECT_SENDER_NAME = "User"

# JSON numbers only: "19.07" as a string or `true` is rejected rather than coerced.
Coordinate = Annotated[float, Field(strict=True, allow_inf_nan=False)]
Identity = Annotated[str, Field(min_length=1)]
Text = Annotated[str, Field(min_length=1)]


def _display_value(value: Any) -> str | None:
    # Optional labels never fail a request: numbers become text, anything else falls back to the default.
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value or None
    return None


DisplayText = Annotated[str | None, BeforeValidator(_display_value)]


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _Payload(_WireModel):
    """Base for request bodies; `required_message` is the 400 text on any failure."""

    # Wire (camelCase) keys only; numeric ids and texts are accepted as strings.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=False, coerce_numbers_to_str=True)

    required_message: ClassVar[str] = "invalid request body"


M = TypeVar("M", bound=_Payload)


def validate_payload(model: type[M], payload: Any) -> M:
    """Validate a decoded JSON body, raising `ValidationError` with the model's message."""
    if not isinstance(payload, Mapping):
        raise ValidationError(model.required_message)
    try:
        return model.model_validate(dict(payload))
    except pydantic.ValidationError as e:
        raise ValidationError(model.required_message) from e


# --- Request payloads ---


class PresenceReport(_Payload):
    required_message: ClassVar[str] = "id, latitude and longitude are required in request body"

    id: Identity
    name: DisplayText = None
    profession: DisplayText = None
    latitude: Coordinate
    longitude: Coordinate


class MessagePost(_Payload):
    required_message: ClassVar[str] = "fromId, latitude, longitude and text are required in request body"

    from_id: Identity
    from_name: DisplayText = None
    profession: DisplayText = None
    latitude: Coordinate
    longitude: Coordinate
    text: Text


class HelpAlertCreate(_Payload):
    required_message: ClassVar[str] = "fromId, message, latitude and longitude are required in request body"

    from_id: Identity
    from_name: DisplayText = None
    phone: DisplayText = None
    type: DisplayText = None
    message: Text
    latitude: Coordinate
    longitude: Coordinate


class HelpAlertAccept(_Payload):
    required_message: ClassVar[str] = "helperId is required in request body"

    helper_id: Identity
    helper_name: DisplayText = None
    helper_phone: DisplayText = None


class DirectMessagePost(_Payload):
    required_message: ClassVar[str] = "fromId and text are required in request body"

    from_id: Identity
    from_name: DisplayText = None
    text: Text


# --- Stored records ---


class PresenceRecord(_WireModel):
    """Latest location report of one device."""

    id: str
    name: str = DEFAULT_USER_NAME
    profession: str = DEFAULT_PROFESSION
    latitude: float
    longitude: float
    last_seen: int


class NearbyUser(_WireModel):
    id: str
    name: str
    profession: str
    latitude: float
    longitude: float
    distance_km: float


class PublicMessage(_WireModel):
    """A broadcast chat message; the location is a snapshot taken at post time."""

    id: str
    from_id: str
    from_name: str = DEFAULT_USER_NAME
    profession: str = DEFAULT_PROFESSION
    latitude: float
    longitude: float
    text: str
    created_at: int


class HelpAlert(_WireModel):
    """A help request. Open while `accepted_by_id` is None, Accepted afterwards."""

    id: str
    type: str = DEFAULT_ALERT_TYPE
    message: str
    latitude: float
    longitude: float
    from_id: str
    from_name: str = DEFAULT_USER_NAME
    phone: str | None = None
    created_at: int
    accepted_by_id: str | None = None
    accepted_by_name: str | None = None
    accepted_by_phone: str | None = None
    accepted_at: int | None = None

    @property
    def is_accepted(self) -> bool:
        return self.accepted_by_id is not None


class DirectMessage(_WireModel):
    """A private follow-up message attached (by id only) to a help alert."""

    id: str
    alert_id: str
    from_id: str
    from_name: str = DEFAULT_DIRECT_SENDER_NAME
    text: str
    created_at: int


# --- Response envelopes ---


class Ack(_WireModel):
    ok: bool = True


class MessagePosted(Ack):
    message: PublicMessage


class AlertResponse(Ack):
    alert: HelpAlert


class DirectMessagePosted(Ack):
    message: DirectMessage
