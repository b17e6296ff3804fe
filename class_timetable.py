#!/usr/bin/env python3
"""
Class Timetable - A PySide6 desktop timetable for weekly recurring classes.

This is the main entry point for the application.
"""

import sys
import argparse
from datetime import date
from pathlib import Path

from backend.config import Config
from backend.debug import set_debug_enabled, debug_print
from backend.ics_export import export_ics
from backend.schedule_store import create_schedule_store
from backend.time_utils import set_timezone, local_today


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Class Timetable - A desktop timetable for weekly classes"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    parser.add_argument(
        "--export-ics",
        type=Path,
        metavar="PATH",
        help="Write the timetable as an iCalendar file and exit"
    )
    parser.add_argument(
        "--term-start",
        type=date.fromisoformat,
        metavar="YYYY-MM-DD",
        help="First week of term for --export-ics (default: today)"
    )
    return parser.parse_args(argv)


def run_gui(config: Config, store) -> int:
    from PySide6.QtWidgets import QApplication
    from PySide6.QtCore import Qt

    from gui.main_window import MainWindow

    # Enable high DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Class Timetable")
    app.setApplicationVersion("0.1")
    app.setStyle("Fusion")

    window = MainWindow(config, store)
    window.show()
    return app.exec()


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    set_debug_enabled(args.debug)

    try:
        config = Config.load(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"\nThe default location is {Config.get_default_config_path()}", file=sys.stderr)
        print("\nExample configuration:", file=sys.stderr)
        print("""
[General]
storage_file = "~/.local/share/class-timetable/schedules.json"
default_view = "week"

[Layout]
first_hour = 7
last_hour = 22
""", file=sys.stderr)
        sys.exit(1)
    except (ValueError, OSError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    set_timezone(config.timezone)
    debug_print("MAIN", f"Loaded configuration from: {args.config or Config.get_default_config_path()}")
    debug_print("MAIN", f"Schedules file: {config.storage_file}")

    try:
        store = create_schedule_store(config.storage_file)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        print(f"Error reading {config.storage_file}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.export_ics:
        term_start = args.term_start or local_today()
        path = export_ics(store.list(), args.export_ics, term_start)
        print(f"Exported {len(store.list())} classes to {path}")
        return

    sys.exit(run_gui(config, store))


if __name__ == "__main__":
    main()
