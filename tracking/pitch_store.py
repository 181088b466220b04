"""SQLite-backed store for pitch observations.

Every public operation reports its outcome as a value (bool, list, int) and
never lets a storage exception reach the caller. A store whose database could
not be opened stays usable as an object: all of its operations simply fail.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from database.setup_db import (
    Pitch,
    build_engine,
    build_session_factory,
    create_database,
    session_scope,
)
from tracking.records import PitchRecord

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


class PitchStore:
    """Insert, list and bulk-delete pitch records in a single SQLite file."""

    def __init__(self, db_path: str, *, clock: Optional[Clock] = None) -> None:
        self.db_path = db_path
        self._clock: Clock = clock or datetime.now
        self._engine = None
        self._session_factory = None
        self._open()

    def _open(self) -> None:
        try:
            engine = build_engine(self.db_path)
            create_database(engine)
        except (OSError, SQLAlchemyError):
            logger.exception("Database setup failed for %s", self.db_path)
            return
        self._engine = engine
        self._session_factory = build_session_factory(engine)
        logger.debug("Database setup successful: %s", self.db_path)

    @property
    def is_ready(self) -> bool:
        return self._session_factory is not None

    @property
    def engine(self):
        return self._engine

    def close(self) -> None:
        """Release pooled connections. The store is unusable afterwards."""
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert(
        self,
        pitch_type: str,
        pitch_result: str,
        speed_value: Optional[int] = None,
        time_value: Optional[float] = None,
        *,
        fps: bool = False,
        f2ps: bool = False,
        csoop: bool = False,
        lom: bool = False,
    ) -> bool:
        if not self.is_ready:
            logger.warning("Insert skipped: database unavailable")
            return False
        if not _is_text(pitch_type) or not _is_text(pitch_result):
            logger.warning("Insert refused: pitch type and result must be non-empty strings")
            return False

        try:
            speed, seconds = _coerce_measurements(speed_value, time_value)
            row = Pitch(
                timestamp=self._clock(),
                pitch_type=pitch_type,
                pitch_result=pitch_result,
                speed_value=speed,
                time_value=seconds,
                fps=bool(fps),
                f2ps=bool(f2ps),
                csoop=bool(csoop),
                lom=bool(lom),
            )
        except (TypeError, ValueError, OverflowError):
            logger.warning("Insert refused: unusable numeric value (speed=%r, time=%r)", speed_value, time_value)
            return False

        try:
            with session_scope(self._session_factory) as session:
                session.add(row)
                session.commit()
        except (SQLAlchemyError, OverflowError, UnicodeError):
            logger.exception("Failed to record pitch")
            return False

        logger.info("Pitch recorded: #%s %s / %s", row.id, pitch_type, pitch_result)
        return True

    def delete_all(self) -> bool:
        if not self.is_ready:
            logger.warning("Delete skipped: database unavailable")
            return False
        try:
            with session_scope(self._session_factory) as session:
                removed = session.query(Pitch).delete(synchronize_session=False)
                session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to delete pitches")
            return False

        logger.info("All pitches deleted (%d rows)", removed)
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def read_all(self) -> Tuple[bool, List[PitchRecord]]:
        """Return ``(ok, records)`` newest first; ``ok`` is False when the read failed."""
        if not self.is_ready:
            return False, []
        try:
            with session_scope(self._session_factory) as session:
                rows = (
                    session.query(Pitch)
                    .order_by(Pitch.timestamp.desc(), Pitch.id.desc())
                    .all()
                )
                records = [PitchRecord.from_row(row) for row in rows]
        except SQLAlchemyError:
            logger.exception("Failed to fetch pitches")
            return False, []
        return True, records

    def list_all(self) -> List[PitchRecord]:
        """Every record, newest first. A failed read looks like an empty table."""
        _, records = self.read_all()
        return records

    def count(self) -> int:
        if not self.is_ready:
            return 0
        try:
            with session_scope(self._session_factory) as session:
                return int(session.query(func.count(Pitch.id)).scalar() or 0)
        except SQLAlchemyError:
            logger.exception("Failed to count pitches")
            return 0


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _coerce_measurements(speed_value, time_value) -> Tuple[Optional[int], Optional[float]]:
    """Convert to column types; raise ValueError for what SQLite cannot hold faithfully."""
    speed = None
    if speed_value is not None:
        if isinstance(speed_value, float) and not math.isfinite(speed_value):
            raise ValueError("speed must be finite")
        speed = int(speed_value)
        if not SQLITE_INT_MIN <= speed <= SQLITE_INT_MAX:
            raise ValueError("speed outside SQLite INTEGER range")

    seconds = None
    if time_value is not None:
        seconds = float(time_value)
        # SQLite stores NaN as NULL, which would read back as absent.
        if not math.isfinite(seconds):
            raise ValueError("time must be finite")
    return speed, seconds


__all__ = ["PitchStore"]
