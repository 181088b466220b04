"""Typed pitch observation plus the vocabularies offered by the recording form."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

PITCH_TYPES: Tuple[str, ...] = ("Fastball", "Curveball", "Slider", "Changeup")
PITCH_RESULTS: Tuple[str, ...] = ("In Play No Out", "Called Strike", "Swinging Strike", "Ball")

# Attribute name -> display label, in export column order.
FLAG_LABELS: Tuple[Tuple[str, str], ...] = (
    ("fps", "FPS"),
    ("f2ps", "F2PS"),
    ("csoop", "CSOOP"),
    ("lom", "LOM"),
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class PitchRecord:
    """One stored pitch. Built only from rows the store has already written."""

    id: int
    timestamp: datetime
    pitch_type: str
    pitch_result: str
    speed_value: Optional[int] = None
    time_value: Optional[float] = None
    fps: bool = False
    f2ps: bool = False
    csoop: bool = False
    lom: bool = False

    @classmethod
    def from_row(cls, row: Any) -> "PitchRecord":
        return cls(
            id=int(row.id),
            timestamp=row.timestamp,
            pitch_type=row.pitch_type,
            pitch_result=row.pitch_result,
            speed_value=None if row.speed_value is None else int(row.speed_value),
            time_value=None if row.time_value is None else float(row.time_value),
            fps=bool(row.fps),
            f2ps=bool(row.f2ps),
            csoop=bool(row.csoop),
            lom=bool(row.lom),
        )

    @property
    def flags(self) -> Tuple[bool, bool, bool, bool]:
        return (self.fps, self.f2ps, self.csoop, self.lom)

    def active_flag_labels(self) -> List[str]:
        return [label for attr, label in FLAG_LABELS if getattr(self, attr)]

    def formatted_timestamp(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.formatted_timestamp(),
            "pitch_type": self.pitch_type,
            "pitch_result": self.pitch_result,
            "speed_value": self.speed_value,
            "time_value": self.time_value,
            "fps": self.fps,
            "f2ps": self.f2ps,
            "csoop": self.csoop,
            "lom": self.lom,
        }


__all__ = [
    "FLAG_LABELS",
    "PITCH_RESULTS",
    "PITCH_TYPES",
    "PitchRecord",
    "TIMESTAMP_FORMAT",
]
