# tracking/__init__.py
from .csv_export import CsvExporter
from .pitch_store import PitchStore
from .records import PITCH_RESULTS, PITCH_TYPES, PitchRecord

__all__ = ["CsvExporter", "PitchStore", "PitchRecord", "PITCH_TYPES", "PITCH_RESULTS"]
