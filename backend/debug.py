"""
Debug output for Class Timetable.

All backend modules report through debug_print(), which writes timestamped,
tagged lines to stderr. Output is off until set_debug_enabled(True) is called
(the --debug command line flag).
"""

import sys
from datetime import datetime


_enabled: bool = False


def set_debug_enabled(enabled: bool):
    """Turn debug output on or off."""
    global _enabled
    _enabled = enabled


def is_debug_enabled() -> bool:
    return _enabled


def debug_print(tag: str, msg: str) -> None:
    if not _enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {tag}: {msg}", file=sys.stderr)
