"""
Configuration parser for Class Timetable.

Handles TOML file parsing into typed configuration sections.
"""

import hashlib
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from .debug import debug_print
from .navigation import ViewType
from .schedule_store import get_default_storage_path


@dataclass
class LayoutConfig:
    """Configuration for UI layout and fonts."""
    interface_font: str = "Sans"
    interface_font_size: int = 12
    text_font: str = "Sans"
    text_font_size: int = 11
    hour_height: int = 60       # Height of an hour slot in day/week view in pixels
    first_hour: int = 7         # First hour shown in day/week view
    last_hour: int = 22         # Last hour shown in day/week view
    snap_minutes: int = 30      # Click-to-create snaps to this interval
    default_duration_minutes: int = 90  # Length of a new class


@dataclass
class BindingsConfig:
    """Configuration for keyboard bindings."""
    next: str = "Right"     # Key to go to next period
    prev: str = "Left"      # Key to go to previous period
    today: str = "Home"     # Key to jump to today
    new_class: str = ""     # Key to create a new class


@dataclass
class ColorsConfig:
    """Configuration for UI colors."""
    # Day/Week Grid Colors
    day_column_background: str = "#ffffff"
    hour_line: str = "#e8e8e8"
    cell_border: str = "#e0e0e0"
    current_time_line: str = "#d32f2f"      # Red line indicating current time

    # Header/Navigation Colors
    header_background: str = "#f5f5f5"
    today_highlight_background: str = "#e3f2fd"
    today_highlight_text: str = "#1976d2"

    # Month/Year View Colors
    month_cell_current: str = "#ffffff"
    month_cell_other: str = "#f5f5f5"
    month_text_current: str = "#000000"
    month_text_other: str = "#999999"

    secondary_text: str = "rgba(0, 0, 0, 0.6)"

    # Button Colors (Schedule Dialog)
    button_save_background: str = "#007bff"
    button_save_text: str = "#ffffff"
    button_delete_background: str = "#dc3545"
    button_delete_text: str = "#ffffff"


@dataclass
class LabelsConfig:
    """Configuration for UI labels."""
    window_title: str = "Class Timetable"

    # View Switcher Labels
    view_day: str = "Day"
    view_week: str = "Week"
    view_month: str = "Month"
    view_year: str = "Year"

    # Toolbar Button Labels
    button_prev: str = "◀"
    button_next: str = "▶"
    button_today: str = "Today"
    button_new_class: str = "New Class"
    button_export: str = "Export iCal"
    button_quit: str = "Quit"

    # Schedule Dialog Labels
    dialog_new_class: str = "New Class"
    dialog_edit_class: str = "Edit: {}"
    field_course_code: str = "Course code:"
    field_course_name: str = "Course name:"
    field_day: str = "Day:"
    field_start: str = "Start:"
    field_end: str = "End:"
    field_location: str = "Location:"
    field_lecturer: str = "Lecturer:"
    field_week: str = "Week:"
    button_save: str = "Save"
    button_cancel: str = "Cancel"
    button_delete: str = "Delete"

    # Miscellaneous Labels
    no_classes: str = "No classes"
    class_count: str = "{} classes"
    location_icon: str = "📍"


@dataclass
class LocalizationConfig:
    """Configuration for localized day and month names."""
    # Monday-first abbreviated day names, matching the grid columns
    day_names: Optional[list[str]] = None
    month_names: Optional[list[str]] = None

    def __post_init__(self):
        if self.day_names is None:
            self.day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        if self.month_names is None:
            self.month_names = [
                "January", "February", "March", "April", "May", "June",
                "July", "August", "September", "October", "November", "December"
            ]

    def get_day_name(self, weekday: int) -> str:
        """Get localized day name for a grid column (0=Monday, 6=Sunday)."""
        return self.day_names[weekday] if 0 <= weekday < len(self.day_names) else ""

    def get_month_name(self, month: int) -> str:
        """Get localized month name (1=January, 12=December)."""
        return self.month_names[month - 1] if 1 <= month <= len(self.month_names) else ""


def _section(cls, data: dict, section_name: str):
    """Build a config dataclass from a TOML table, keeping defaults for missing keys."""
    known = {f.name for f in fields(cls)}
    values = {}
    for key, value in data.items():
        if key in known:
            values[key] = value
        else:
            debug_print("CONFIG", f"Ignoring unknown key '{key}' in [{section_name}]")
    return cls(**values)


@dataclass
class Config:
    """Main configuration container for Class Timetable."""

    storage_file: Path
    timezone: Optional[str] = None  # None: use the system clock
    default_view: str = "week"
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    bindings: BindingsConfig = field(default_factory=BindingsConfig)
    localization: LocalizationConfig = field(default_factory=LocalizationConfig)
    colors: ColorsConfig = field(default_factory=ColorsConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'class-timetable' / 'class-timetable.toml'

    @classmethod
    def get_default_storage_path(cls) -> Path:
        """Get the default schedule storage path."""
        return get_default_storage_path()

    @classmethod
    def defaults(cls) -> 'Config':
        return cls(storage_file=cls.get_default_storage_path())

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from a TOML file.

        Without an explicit path the default location is tried and defaults
        are used if nothing is there. An explicit path must exist.
        """
        if config_path is None:
            config_path = cls.get_default_config_path()
            if not config_path.exists():
                debug_print("CONFIG", f"No config at {config_path}, using defaults")
                return cls.defaults()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
        debug_print("CONFIG", f"Loaded {config_path}, sections: {list(data.keys())}")

        # Parse General section
        general = data.get('General', {})
        storage_str = general.get('storage_file', str(cls.get_default_storage_path()))
        storage_file = Path(os.path.expanduser(storage_str))
        timezone = general.get('timezone') or None
        default_view = ViewType.parse(general.get('default_view', 'week')).value

        layout = _section(LayoutConfig, data.get('Layout', {}), 'Layout')
        if layout.hour_height <= 0:
            raise ValueError(f"[Layout] hour_height must be positive, got {layout.hour_height}")
        if not 0 <= layout.first_hour < layout.last_hour <= 24:
            raise ValueError(
                f"[Layout] need 0 <= first_hour < last_hour <= 24, "
                f"got {layout.first_hour}..{layout.last_hour}"
            )

        bindings = _section(BindingsConfig, data.get('Bindings', {}), 'Bindings')
        colors = _section(ColorsConfig, data.get('Colors', {}), 'Colors')
        labels = _section(LabelsConfig, data.get('Labels', {}), 'Labels')

        # Day and month names are space-separated strings
        localization_data = data.get('Localization', {})
        day_names_str = localization_data.get('day_names', '')
        month_names_str = localization_data.get('month_names', '')
        localization = LocalizationConfig(
            day_names=day_names_str.split() if day_names_str else None,
            month_names=month_names_str.split() if month_names_str else None,
        )

        return cls(
            storage_file=storage_file,
            timezone=timezone,
            default_view=default_view,
            layout=layout,
            bindings=bindings,
            localization=localization,
            colors=colors,
            labels=labels,
        )


# Colors palette for course blocks
COURSE_COLORS = [
    '#4285f4',  # Blue
    '#34a853',  # Green
    '#ea4335',  # Red
    '#fbbc05',  # Yellow
    '#9c27b0',  # Purple
    '#00bcd4',  # Cyan
    '#ff5722',  # Deep Orange
    '#607d8b',  # Blue Grey
    '#e91e63',  # Pink
    '#3f51b5',  # Indigo
]


def course_color(course_code: str) -> str:
    """Stable palette color for a course, so every block of a course looks the same."""
    digest = hashlib.md5(course_code.strip().upper().encode('utf-8')).hexdigest()
    return COURSE_COLORS[int(digest, 16) % len(COURSE_COLORS)]
