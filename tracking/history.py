"""Plain-text rendering of the pitch history list."""
from __future__ import annotations

from typing import Iterable, List

from tracking.records import PitchRecord

EMPTY_HISTORY = "No pitches recorded yet"


def format_pitch_row(record: PitchRecord) -> List[str]:
    lines = [
        f"{record.pitch_type} - {record.pitch_result}",
        record.formatted_timestamp(),
    ]
    if record.speed_value is not None:
        lines.append(f"MPH: {record.speed_value}")
    if record.time_value is not None:
        lines.append(f"TTP: {record.time_value:.2f}")
    badges = record.active_flag_labels()
    if badges:
        lines.append(" ".join(f"[{label}]" for label in badges))
    return lines


def render_history(records: Iterable[PitchRecord]) -> str:
    blocks = ["\n".join(format_pitch_row(record)) for record in records]
    if not blocks:
        return EMPTY_HISTORY
    return "\n\n".join(blocks)


__all__ = ["EMPTY_HISTORY", "format_pitch_row", "render_history"]
