"""API Bridge entry point for UI clients.

This module centralizes every callable operation the recording and history
screens invoke. Each call must:
  * Accept and return JSON-serializable payloads (dict/list/primitive only).
  * Never print or read from stdin; the UI decides how to show results.
  * Wrap errors in the shared `api_error` schema so the UI can raise an alert.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, Optional

from tracking.csv_export import CsvExporter
from tracking.history import format_pitch_row, render_history
from tracking.input_filters import parse_speed, parse_time
from tracking.pitch_store import SQLITE_INT_MAX, SQLITE_INT_MIN, PitchStore
from tracking.records import FLAG_LABELS, PITCH_RESULTS, PITCH_TYPES

LOG = logging.getLogger(__name__)

class ApiError(Exception):
    """Structured exception that the UI can surface cleanly."""

    def __init__(self, code: str, message: str, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


def _ok(data: Any = None) -> Dict[str, Any]:
    return {"ok": True, "data": data, "error": None}


def _fail(error: ApiError) -> Dict[str, Any]:
    return {"ok": False, "data": None, "error": error.to_payload()}


def _run(handler: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    """Wrapper to standardize error handling for exported API calls."""
    try:
        return handler()
    except ApiError as api_exc:
        LOG.warning("API error: %s", api_exc)
        return _fail(api_exc)
    except Exception as exc:  # pragma: no cover - surface unknowns cleanly
        LOG.exception("Unhandled API exception")
        return _fail(ApiError("internal_error", "Unexpected error", {"detail": str(exc)}))


def _require_choice(value: Any, field: str, choices, missing_message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ApiError(f"missing_{field}", missing_message)
    value = value.strip()
    if value not in choices:
        raise ApiError(f"invalid_{field}", f"{field} must be one of {list(choices)}", {"value": value})
    return value


def _coerce_speed(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ApiError("invalid_field", "speed must be a whole number")
    if isinstance(value, int):
        speed = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ApiError("invalid_field", "speed must be a whole number")
        speed = int(value)
    elif isinstance(value, str):
        speed = parse_speed(value)
    else:
        raise ApiError("invalid_field", "speed must be a whole number")
    if speed is not None and not SQLITE_INT_MIN <= speed <= SQLITE_INT_MAX:
        raise ApiError("invalid_field", "speed is out of range")
    return speed


def _coerce_time(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ApiError("invalid_field", "time must be a number")
    if isinstance(value, (int, float)):
        try:
            seconds = float(value)
        except OverflowError:
            raise ApiError("invalid_field", "time is out of range")
    elif isinstance(value, str):
        seconds = parse_time(value)
    else:
        raise ApiError("invalid_field", "time must be a number")
    if seconds is not None and not math.isfinite(seconds):
        raise ApiError("invalid_field", "time must be a finite number")
    return seconds


class TrackerBridge:
    """Binds the public API calls to one store and exporter."""

    def __init__(self, store: PitchStore, exporter: CsvExporter) -> None:
        self.store = store
        self.exporter = exporter

    def record_pitch(self, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Persist one pitch from the recording form.

        Args:
            payload: Expected keys:
                * pitch_type (str) – one of ``PITCH_TYPES``.
                * pitch_result (str) – one of ``PITCH_RESULTS``.
                * speed (optional int or str) – MPH; text is filtered to digits.
                * time (optional float or str) – time-to-plate; text keeps one decimal point.
                * fps / f2ps / csoop / lom (optional bool) – default False.
        """

        def handler() -> Dict[str, Any]:
            data = payload or {}
            if not isinstance(data, dict):
                raise ApiError("invalid_request", "Payload must be a dict")

            pitch_type = _require_choice(
                data.get("pitch_type"), "pitch_type", PITCH_TYPES, "Please select a pitch type"
            )
            pitch_result = _require_choice(
                data.get("pitch_result"), "pitch_result", PITCH_RESULTS, "Please select a pitch result"
            )
            speed = _coerce_speed(data.get("speed"))
            time_value = _coerce_time(data.get("time"))
            flags = {attr: bool(data.get(attr, False)) for attr, _ in FLAG_LABELS}

            if not self.store.insert(pitch_type, pitch_result, speed, time_value, **flags):
                raise ApiError("record_failed", "Failed to record pitch")
            return _ok({"recorded": True, "count": self.store.count()})

        return _run(handler)

    def list_pitches(self) -> Dict[str, Any]:
        def handler() -> Dict[str, Any]:
            ok, records = self.store.read_all()
            if not ok:
                raise ApiError("read_failed", "Unable to load pitch history")
            return _ok({
                "pitches": [record.to_payload() for record in records],
                "rows": [format_pitch_row(record) for record in records],
                "text": render_history(records),
            })

        return _run(handler)

    def clear_pitches(self, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        def handler() -> Dict[str, Any]:
            data = payload or {}
            if data.get("confirm") is not True:
                raise ApiError(
                    "confirmation_required",
                    "Are you sure you want to delete all pitch data?",
                )
            if not self.store.delete_all():
                raise ApiError("delete_failed", "Failed to delete pitch data")
            return _ok({"cleared": True})

        return _run(handler)

    def export_pitches(self) -> Dict[str, Any]:
        def handler() -> Dict[str, Any]:
            path = self.exporter.export_to_csv()
            if path is None:
                raise ApiError("export_failed", "Unable to export data to CSV")
            return _ok({"path": str(path), "count": self.store.count()})

        return _run(handler)


__all__ = ["ApiError", "TrackerBridge"]
