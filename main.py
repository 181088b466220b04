"""Command-line front end for recording and exporting pitches.

Subcommands mirror the two screens of the tracker:
- record: submit one pitch from the recording form.
- history / export / clear: the history screen actions.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

import config
from api_bridge import TrackerBridge
from tracking.csv_export import CsvExporter
from tracking.pitch_store import PitchStore
from tracking.records import FLAG_LABELS, PITCH_RESULTS, PITCH_TYPES


def build_bridge(data_dir: Optional[str] = None) -> TrackerBridge:
    """Wire the store and exporter to one private data directory."""
    home = config.ensure_user_data_dir(data_dir)
    store = PitchStore(config.db_path_for(home))
    exporter = CsvExporter(store, home)
    return TrackerBridge(store, exporter)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Baseball pitch tracker")
    parser.add_argument(
        "--data-dir",
        default=None,
        help=f"Private data directory (default: ${config.HOME_ENV_VAR} or the per-user app folder)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level for diagnostics (e.g. INFO, DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    record = subparsers.add_parser("record", help="Record one pitch")
    record.add_argument("--type", dest="pitch_type", choices=PITCH_TYPES, required=True)
    record.add_argument("--result", dest="pitch_result", choices=PITCH_RESULTS, required=True)
    record.add_argument("--mph", default=None, help="Speed; non-digits are ignored")
    record.add_argument("--ttp", default=None, help="Time to plate; one decimal point allowed")
    for attr, label in FLAG_LABELS:
        record.add_argument(f"--{attr}", action="store_true", help=f"Mark {label}")

    subparsers.add_parser("history", help="Show recorded pitches, newest first")
    subparsers.add_parser("export", help="Export every pitch to a CSV file")

    clear = subparsers.add_parser("clear", help="Delete all pitch data")
    clear.add_argument("--yes", action="store_true", help="Confirm deletion of all pitch data")

    return parser


def _report(response: Dict[str, Any]) -> int:
    if response["ok"]:
        return 0
    error = response["error"]
    print(f"Error: {error['message']}", file=sys.stderr)
    return 1


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = getattr(logging, str(args.log_level).upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    bridge = build_bridge(args.data_dir)

    if args.command == "record":
        payload = {
            "pitch_type": args.pitch_type,
            "pitch_result": args.pitch_result,
            "speed": args.mph,
            "time": args.ttp,
        }
        payload.update({attr: getattr(args, attr) for attr, _ in FLAG_LABELS})
        response = bridge.record_pitch(payload)
        if response["ok"]:
            print(f"Pitch recorded ({response['data']['count']} total).")
    elif args.command == "history":
        response = bridge.list_pitches()
        if response["ok"]:
            print(response["data"]["text"])
    elif args.command == "export":
        response = bridge.export_pitches()
        if response["ok"]:
            print(f"CSV file created at: {response['data']['path']}")
    elif args.command == "clear":
        response = bridge.clear_pitches({"confirm": args.yes})
        if response["ok"]:
            print("All pitch data deleted.")
    else:  # pragma: no cover
        parser.error("Unknown command")

    return _report(response)


if __name__ == "__main__":
    sys.exit(main())
