from datetime import datetime
from pathlib import Path

import pytest

from api_bridge import ApiError, TrackerBridge, _coerce_speed, _coerce_time
from tracking.csv_export import CsvExporter
from tracking.pitch_store import PitchStore


@pytest.fixture
def bridge(store, tmp_path):
    exporter = CsvExporter(store, str(tmp_path), clock=lambda: datetime(2024, 4, 6, 20, 0, 0))
    return TrackerBridge(store, exporter)


def test_record_pitch_filters_text_inputs(bridge, store):
    response = bridge.record_pitch({
        "pitch_type": "Fastball",
        "pitch_result": "Called Strike",
        "speed": "9x2",
        "time": "0.4.1",
        "fps": True,
    })
    assert response["ok"] is True
    assert response["data"] == {"recorded": True, "count": 1}

    record = store.list_all()[0]
    assert record.speed_value == 92
    assert record.time_value == pytest.approx(0.41)
    assert record.flags == (True, False, False, False)


def test_record_pitch_requires_selections(bridge, store):
    missing = bridge.record_pitch({"pitch_result": "Ball"})
    assert missing["ok"] is False
    assert missing["error"]["code"] == "missing_pitch_type"
    assert missing["error"]["message"] == "Please select a pitch type"

    invalid = bridge.record_pitch({"pitch_type": "Fastball", "pitch_result": "Foul"})
    assert invalid["error"]["code"] == "invalid_pitch_result"
    assert store.count() == 0


def test_record_pitch_reports_store_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    broken = PitchStore(str(blocker / "db.sqlite3"))
    bridge = TrackerBridge(broken, CsvExporter(broken, str(tmp_path)))

    response = bridge.record_pitch({"pitch_type": "Slider", "pitch_result": "Ball"})
    assert response["error"]["code"] == "record_failed"

    listing = bridge.list_pitches()
    assert listing["error"]["code"] == "read_failed"


def test_list_pitches_returns_payloads_and_rows(bridge, store):
    store.insert("Changeup", "Ball", None, 1.2)
    data = bridge.list_pitches()["data"]
    assert data["pitches"][0]["pitch_type"] == "Changeup"
    assert data["pitches"][0]["speed_value"] is None
    assert data["rows"][0][-1] == "TTP: 1.20"
    assert data["text"].startswith("Changeup - Ball")


def test_clear_pitches_needs_confirmation(bridge, store):
    store.insert("Fastball", "Ball")

    refused = bridge.clear_pitches({})
    assert refused["error"]["code"] == "confirmation_required"
    assert store.count() == 1

    assert bridge.clear_pitches({"confirm": True})["ok"] is True
    assert store.count() == 0


def test_export_pitches_returns_path(bridge, store, tmp_path):
    store.insert("Fastball", "Ball")
    data = bridge.export_pitches()["data"]
    assert Path(data["path"]) == tmp_path / "pitch_data_20240406_200000.csv"
    assert data["count"] == 1


def test_export_failure_maps_to_error(store, tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("x", encoding="utf-8")
    bridge = TrackerBridge(store, CsvExporter(store, str(blocker)))
    assert bridge.export_pitches()["error"]["code"] == "export_failed"


def test_numeric_coercion_rejects_wrong_types():
    assert _coerce_speed(91.0) == 91
    assert _coerce_speed("") is None
    assert _coerce_time(1) == 1.0
    with pytest.raises(ApiError):
        _coerce_speed(91.5)
    with pytest.raises(ApiError):
        _coerce_speed(True)
    with pytest.raises(ApiError):
        _coerce_time([1.2])


@pytest.mark.parametrize(
    "field, value",
    [("speed", "9" * 30), ("speed", float("inf")), ("time", float("nan")), ("time", "9" * 400)],
)
def test_out_of_range_numbers_are_invalid_fields(bridge, store, field, value):
    response = bridge.record_pitch({"pitch_type": "Fastball", "pitch_result": "Ball", field: value})
    assert response["ok"] is False
    assert response["error"]["code"] == "invalid_field"
    assert store.count() == 0
