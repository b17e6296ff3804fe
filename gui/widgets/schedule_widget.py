"""
Schedule Widget for displaying one class block.

Shows the course in the calendar views, colored by course code.
"""

from PySide6.QtWidgets import QWidget, QLabel, QVBoxLayout, QFrame, QSizePolicy
from PySide6.QtCore import Qt, Signal, QSize
from PySide6.QtGui import QFont, QMouseEvent, QFontMetrics

from backend.config import LayoutConfig, LabelsConfig, course_color
from backend.schedule import ScheduleRecord
from backend.time_utils import format_time


# Module-level configs (set by MainWindow at startup via calendar_widget)
_layout_config: LayoutConfig = LayoutConfig()
_labels_config: LabelsConfig = LabelsConfig()


def set_schedule_layout_config(config: LayoutConfig):
    """Set the layout configuration for schedule widgets."""
    global _layout_config
    _layout_config = config


def set_schedule_labels_config(config: LabelsConfig):
    """Set the labels configuration for schedule widgets."""
    global _labels_config
    _labels_config = config


def get_text_font() -> QFont:
    """Get the configured text font for schedule blocks."""
    return QFont(_layout_config.text_font, _layout_config.text_font_size)


def get_contrasting_text_color(bg_color: str) -> str:
    """Calculate whether black or white text contrasts better with the background."""
    color = bg_color.lstrip('#')
    if len(color) == 3:
        color = ''.join([c*2 for c in color])

    try:
        r = int(color[0:2], 16)
        g = int(color[2:4], 16)
        b = int(color[4:6], 16)
    except (ValueError, IndexError):
        return "#000000"

    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#ffffff"


def lighten_color(hex_color: str, factor: float = 0.3) -> str:
    """Lighten a hex color by the given factor."""
    color = hex_color.lstrip('#')
    if len(color) == 3:
        color = ''.join([c*2 for c in color])

    try:
        r = int(color[0:2], 16)
        g = int(color[2:4], 16)
        b = int(color[4:6], 16)
    except (ValueError, IndexError):
        return hex_color

    r = int(min(255, r + (255 - r) * factor))
    g = int(min(255, g + (255 - g) * factor))
    b = int(min(255, b + (255 - b) * factor))
    return f"#{r:02x}{g:02x}{b:02x}"


class ScheduleWidget(QFrame):
    """
    Widget representing one class in the calendar view.

    The full layout (day and week views) shows time, course and location;
    the compact layout (month view) is a single line.
    """

    # Emitted with the schedule on a single click
    clicked = Signal(object)

    # Emitted with the schedule on double-click (for editing)
    double_clicked = Signal(object)

    def __init__(self, schedule: ScheduleRecord, compact: bool = False, parent: QWidget = None):
        super().__init__(parent)
        self.schedule = schedule
        self.compact = compact
        self.color = course_color(schedule.course_code)

        self.setFont(get_text_font())
        if compact:
            self._setup_compact_ui()
        else:
            self._setup_full_ui()

        self.setFrameStyle(QFrame.StyledPanel | QFrame.Plain)
        self.setCursor(Qt.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Minimum)
        self._setup_tooltip()
        self._apply_style()

    def _time_text(self) -> str:
        return f"{format_time(self.schedule.start_time)} - {format_time(self.schedule.end_time)}"

    def _setup_tooltip(self) -> None:
        lines = [
            f"<b>{self.schedule.title}</b>",
            f"{self.schedule.day_name}, {self._time_text()}",
            f"{_labels_config.location_icon} {self.schedule.location}",
        ]
        if self.schedule.lecturer:
            lines.append(self.schedule.lecturer)
        if self.schedule.week:
            lines.append(f"<i>{self.schedule.week}</i>")
        self.setToolTip("<br>".join(lines))

    def _setup_compact_ui(self) -> None:
        """Single top-aligned line: start time and course code."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignTop)

        label = QLabel(f"{self.schedule.start_time} {self.schedule.course_code}")
        label.setWordWrap(False)
        label.setTextFormat(Qt.PlainText)
        font = QFont(get_text_font())
        font.setBold(True)
        label.setFont(font)
        layout.addWidget(label)

    def _setup_full_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 4, 6, 4)
        layout.setSpacing(2)
        layout.setAlignment(Qt.AlignTop)
        text_font = get_text_font()

        time_label = QLabel(self._time_text())
        time_label.setFont(text_font)
        layout.addWidget(time_label)

        title_label = QLabel(self.schedule.title)
        title_font = QFont(text_font)
        title_font.setBold(True)
        title_label.setFont(title_font)
        title_label.setWordWrap(True)
        layout.addWidget(title_label)

        location_label = QLabel(f"{_labels_config.location_icon} {self.schedule.location}")
        location_label.setFont(text_font)
        location_label.setWordWrap(True)
        layout.addWidget(location_label)

    def _apply_style(self) -> None:
        """Apply color styling based on the course color."""
        bg_lighter = lighten_color(self.color, 0.4)
        text_color = get_contrasting_text_color(bg_lighter)

        self.setStyleSheet(f"""
            ScheduleWidget {{
                background-color: {bg_lighter};
                border: 2px solid {self.color};
                border-left: 4px solid {self.color};
                border-radius: 4px;
                color: {text_color};
            }}
            ScheduleWidget:hover {{
                background-color: {lighten_color(self.color, 0.2)};
            }}
            QLabel {{
                color: {text_color};
                background: transparent;
                border: none;
                padding: 0px;
                margin: 0px;
            }}
        """)

    def mousePressEvent(self, mouse_event: QMouseEvent) -> None:
        if mouse_event.button() == Qt.LeftButton:
            self.clicked.emit(self.schedule)
        super().mousePressEvent(mouse_event)

    def mouseDoubleClickEvent(self, mouse_event: QMouseEvent) -> None:
        if mouse_event.button() == Qt.LeftButton:
            self.double_clicked.emit(self.schedule)
        super().mouseDoubleClickEvent(mouse_event)

    def sizeHint(self) -> QSize:
        """Return the preferred size for this widget based on font metrics."""
        line_height = QFontMetrics(self.font()).height()
        if self.compact:
            return QSize(150, line_height + 8)
        return QSize(150, 3 * line_height + 12)

    def minimumSizeHint(self) -> QSize:
        line_height = QFontMetrics(self.font()).height()
        return QSize(50, line_height + 4)
