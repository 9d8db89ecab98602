import pytest

from localherro.core.clock import ManualClock
from localherro.core.errors import ValidationError
from localherro.registry.presence import PresenceRegistry


def _registry(clock: ManualClock) -> PresenceRegistry:
    return PresenceRegistry(clock, stale_seconds=120, default_radius_km=5)


def test_report_then_nearby_includes_self_at_zero_distance():
    reg = _registry(ManualClock(1_000_000))
    reg.report({"id": "d1", "latitude": 19.07, "longitude": 72.88})

    found = reg.nearby("19.07", "72.88", "1")
    assert [u.id for u in found] == ["d1"]
    assert found[0].distance_km < 0.01
    assert found[0].name == "Guest user"
    assert found[0].profession == "Citizen"


def test_nearby_excludes_self_id():
    reg = _registry(ManualClock(0))
    reg.report({"id": "me", "latitude": 19.07, "longitude": 72.88})
    reg.report({"id": "other", "name": "Asha", "profession": "Nurse", "latitude": 19.071, "longitude": 72.881})

    found = reg.nearby(19.07, 72.88, exclude_id="me")
    assert [u.id for u in found] == ["other"]
    assert found[0].name == "Asha"
    assert found[0].profession == "Nurse"


def test_report_overwrites_previous_location():
    reg = _registry(ManualClock(0))
    reg.report({"id": "d1", "latitude": 19.07, "longitude": 72.88})
    reg.report({"id": "d1", "latitude": 28.61, "longitude": 77.21})

    assert len(reg) == 1
    assert reg.nearby(19.07, 72.88) == []
    assert [u.id for u in reg.nearby(28.61, 77.21)] == ["d1"]


def test_stale_records_disappear_without_explicit_delete():
    clock = ManualClock(0)
    reg = _registry(clock)
    reg.report({"id": "d1", "latitude": 19.07, "longitude": 72.88})

    clock.advance(seconds=120)
    assert [u.id for u in reg.nearby(19.07, 72.88)] == ["d1"]

    clock.advance(ms=1)
    assert reg.nearby(19.07, 72.88) == []
    assert len(reg) == 0


def test_report_prunes_other_stale_devices():
    clock = ManualClock(0)
    reg = _registry(clock)
    reg.report({"id": "old", "latitude": 19.07, "longitude": 72.88})
    clock.advance(seconds=300)
    reg.report({"id": "new", "latitude": 19.07, "longitude": 72.88})

    assert len(reg) == 1


def test_radius_filters_far_devices():
    reg = _registry(ManualClock(0))
    reg.report({"id": "mumbai", "latitude": 19.07, "longitude": 72.88})
    reg.report({"id": "delhi", "latitude": 28.61, "longitude": 77.21})

    assert [u.id for u in reg.nearby(19.07, 72.88)] == ["mumbai"]
    assert {u.id for u in reg.nearby(19.07, 72.88, 2000)} == {"mumbai", "delhi"}


def test_negative_or_garbage_radius_matches_nothing():
    reg = _registry(ManualClock(0))
    reg.report({"id": "d1", "latitude": 19.07, "longitude": 72.88})

    assert reg.nearby(19.07, 72.88, "-1") == []
    assert reg.nearby(19.07, 72.88, "wide") == []


@pytest.mark.parametrize(
    "payload",
    [
        {"latitude": 19.07, "longitude": 72.88},
        {"id": "", "latitude": 19.07, "longitude": 72.88},
        {"id": "d1", "latitude": "19.07", "longitude": 72.88},
        {"id": "d1", "latitude": 19.07},
        {"id": "d1", "latitude": True, "longitude": 72.88},
        None,
        [],
    ],
)
def test_report_rejects_invalid_payloads(payload):
    reg = _registry(ManualClock(0))
    with pytest.raises(ValidationError, match="id, latitude and longitude are required"):
        reg.report(payload)
    assert len(reg) == 0


@pytest.mark.parametrize("lat,lng", [(None, "72.88"), ("abc", "72.88"), ("19.07", "nan"), ("19.07", "")])
def test_nearby_rejects_unparseable_coordinates(lat, lng):
    reg = _registry(ManualClock(0))
    with pytest.raises(ValidationError):
        reg.nearby(lat, lng)


def test_report_accepts_non_string_display_fields():
    reg = _registry(ManualClock(0))
    reg.report({"id": "d1", "name": 42, "profession": 7.5, "latitude": 19.07, "longitude": 72.88})
    reg.report({"id": "d2", "name": ["x"], "profession": {"k": 1}, "latitude": 19.07, "longitude": 72.88})
    reg.report({"id": "d3", "name": False, "profession": "", "latitude": 19.07, "longitude": 72.88})

    by_id = {u.id: u for u in reg.nearby(19.07, 72.88)}
    assert (by_id["d1"].name, by_id["d1"].profession) == ("42", "7.5")
    assert (by_id["d2"].name, by_id["d2"].profession) == ("Guest user", "Citizen")
    assert (by_id["d3"].name, by_id["d3"].profession) == ("Guest user", "Citizen")


def test_report_accepts_numeric_id():
    reg = _registry(ManualClock(0))
    reg.report({"id": 7, "latitude": 19.07, "longitude": 72.88})
    assert [u.id for u in reg.nearby(19.07, 72.88)] == ["7"]


def test_report_accepts_integer_coordinates():
    reg = _registry(ManualClock(0))
    reg.report({"id": "d1", "latitude": 19, "longitude": 72})
    assert len(reg) == 1


def test_nearby_reads_leading_number_of_query_values():
    reg = _registry(ManualClock(0))
    reg.report({"id": "d1", "latitude": 19.07, "longitude": 72.88})

    assert [u.id for u in reg.nearby("19.07abc", " 72.88", "5km")] == ["d1"]
    assert [u.id for u in reg.nearby("19.07", "72.88", ".5")] == ["d1"]
    with pytest.raises(ValidationError):
        reg.nearby("Infinity", "72.88")
