"""CSV export of the full pitch history."""
from __future__ import annotations

import csv
import io
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from config import EXPORT_PREFIX
from tracking.records import PitchRecord

logger = logging.getLogger(__name__)

CSV_HEADER = ["ID", "Timestamp", "Pitch Type", "Pitch Result", "MPH", "TTP", "FPS", "F2PS", "CSOOP", "LOM"]
FILE_STAMP_FORMAT = "%Y%m%d_%H%M%S"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def format_row(record: PitchRecord) -> List[str]:
    """Column values for one record, in header order."""
    return [
        str(record.id),
        record.formatted_timestamp(),
        record.pitch_type,
        record.pitch_result,
        "" if record.speed_value is None else str(record.speed_value),
        "" if record.time_value is None else f"{record.time_value:.2f}",
        *(_yes_no(flag) for flag in record.flags),
    ]


def render_csv(records: Iterable[PitchRecord]) -> str:
    # Minimal quoting leaves vocabulary values untouched and only wraps
    # free text that contains a comma, quote or line break.
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for record in records:
        writer.writerow(format_row(record))
    return buffer.getvalue()


def export_file_name(moment: datetime) -> str:
    return f"{EXPORT_PREFIX}{moment.strftime(FILE_STAMP_FORMAT)}.csv"


class CsvExporter:
    """Writes the store's current contents to a timestamped CSV file."""

    def __init__(
        self,
        store,
        export_dir: str,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.export_dir = Path(export_dir).expanduser()
        self._clock = clock or datetime.now

    def export_to_csv(self) -> Optional[Path]:
        records = self.store.list_all()
        content = render_csv(records)
        target = self.export_dir / export_file_name(self._clock())

        try:
            self._write_atomic(target, content)
        except (OSError, UnicodeError):
            logger.exception("Failed to create CSV file at %s", target)
            return None

        logger.info("CSV file created at: %s (%d rows)", target, len(records))
        return target

    def _write_atomic(self, target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=str(target.parent), prefix=".pitch_export_", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            os.replace(tmp_name, target)
        except (OSError, UnicodeError):
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise


__all__ = ["CSV_HEADER", "CsvExporter", "export_file_name", "format_row", "render_csv"]
