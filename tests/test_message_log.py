import pytest

from localherro.core.clock import ManualClock
from localherro.core.errors import ValidationError
from localherro.registry.messages import MessageLog


def _post(log: MessageLog, text: str = "hello", **extra):
    payload = {"fromId": "d1", "latitude": 19.07, "longitude": 72.88, "text": text}
    payload.update(extra)
    return log.post(payload)


def test_post_returns_stored_message_with_defaults():
    clock = ManualClock(1_700_000_000_000)
    log = MessageLog(clock)
    msg = _post(log)

    assert msg.from_id == "d1"
    assert msg.from_name == "Guest user"
    assert msg.profession == "Citizen"
    assert msg.created_at == 1_700_000_000_000
    assert msg.id.startswith("1700000000000-")
    assert msg.model_dump(by_alias=True)["fromId"] == "d1"


def test_post_generates_unique_ids_within_same_millisecond():
    log = MessageLog(ManualClock(5))
    ids = {_post(log).id for _ in range(50)}
    assert len(ids) == 50


def test_long_text_is_truncated_not_rejected():
    log = MessageLog(ManualClock(0))
    msg = _post(log, text="x" * 750)
    assert len(msg.text) == 500


def test_log_never_exceeds_capacity_and_drops_oldest_first():
    clock = ManualClock(0)
    log = MessageLog(clock, max_count=200)
    for i in range(205):
        clock.advance(ms=1)
        _post(log, text=f"m{i}")

    assert len(log) == 200
    texts = [m.text for m in log.nearby(19.07, 72.88)]
    assert texts[0] == "m5"
    assert texts[-1] == "m204"


def test_messages_expire_after_max_age():
    clock = ManualClock(0)
    log = MessageLog(clock, max_age_seconds=1800)
    _post(log, text="old")
    clock.advance(seconds=1000)
    _post(log, text="new")
    clock.advance(seconds=900)

    assert [m.text for m in log.nearby(19.07, 72.88)] == ["new"]


def test_nearby_returns_oldest_first_and_filters_by_radius():
    clock = ManualClock(0)
    log = MessageLog(clock)
    _post(log, text="first")
    clock.advance(seconds=1)
    _post(log, text="far", latitude=28.61, longitude=77.21)
    clock.advance(seconds=1)
    _post(log, text="second")

    assert [m.text for m in log.nearby("19.07", "72.88")] == ["first", "second"]


@pytest.mark.parametrize(
    "payload",
    [
        {"latitude": 19.07, "longitude": 72.88, "text": "hi"},
        {"fromId": "d1", "latitude": 19.07, "longitude": 72.88},
        {"fromId": "d1", "latitude": 19.07, "longitude": 72.88, "text": ""},
        {"fromId": "d1", "latitude": None, "longitude": 72.88, "text": "hi"},
    ],
)
def test_post_rejects_invalid_payloads(payload):
    log = MessageLog(ManualClock(0))
    with pytest.raises(ValidationError):
        log.post(payload)
    assert len(log) == 0


def test_post_accepts_non_string_sender_fields():
    log = MessageLog(ManualClock(0))
    msg = _post(log, fromName=99, profession=None)
    assert msg.from_name == "99"
    assert msg.profession == "Citizen"

    msg = _post(log, fromId=12, text=3)
    assert msg.from_id == "12"
    assert msg.text == "3"


def test_post_rejects_snake_case_keys():
    log = MessageLog(ManualClock(0))
    with pytest.raises(ValidationError):
        log.post({"from_id": "d1", "latitude": 19.07, "longitude": 72.88, "text": "hi"})
