"""
Calendar Widget with Day, Week, Month and Year views.

The widget owns a navigation ViewState and redraws whichever view the state
selects from the schedule list it was last given.
"""

from datetime import date
from typing import Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel,
    QScrollArea, QFrame, QStackedWidget, QApplication, QStyle
)
from PySide6.QtCore import Qt, Signal, QTimer
from PySide6.QtGui import QFontMetrics, QMouseEvent

from backend.config import LayoutConfig, LocalizationConfig, ColorsConfig, LabelsConfig
from backend.date_grid import build_month_grid, build_week_days, build_year_months, is_today
from backend.layout import PlacedBlock, layout_column, current_time_offset, offset_to_time
from backend.navigation import (
    ViewType, ViewState, initial_state, go_previous, go_next, go_today,
    switch_view, open_day, open_month
)
from backend.recurrence import schedules_by_date, schedules_for_date, schedules_for_month
from backend.schedule import ScheduleRecord
from backend.time_utils import local_now, local_today
from .schedule_widget import ScheduleWidget, set_schedule_layout_config, set_schedule_labels_config

# Module-level configs (set by MainWindow at startup)
_layout_config: LayoutConfig = LayoutConfig()
_localization_config: LocalizationConfig = LocalizationConfig()
_colors_config: ColorsConfig = ColorsConfig()
_labels_config: LabelsConfig = LabelsConfig()


def set_layout_config(config: LayoutConfig):
    """Set the layout configuration for this module and schedule widget."""
    global _layout_config
    _layout_config = config
    set_schedule_layout_config(config)


def set_localization_config(config: LocalizationConfig):
    global _localization_config
    _localization_config = config


def get_localization_config() -> LocalizationConfig:
    return _localization_config


def set_colors_config(config: ColorsConfig):
    global _colors_config
    _colors_config = config


def get_colors_config() -> ColorsConfig:
    return _colors_config


def set_labels_config(config: LabelsConfig):
    """Set the labels configuration for this module and schedule widget."""
    global _labels_config
    _labels_config = config
    set_schedule_labels_config(config)


def get_labels_config() -> LabelsConfig:
    return _labels_config


def get_interface_font() -> tuple[str, int]:
    """Get the configured interface font name and size."""
    return (_layout_config.interface_font, _layout_config.interface_font_size)


def _hour_height() -> int:
    return _layout_config.hour_height


def _column_height() -> int:
    """Pixel height of a day column covering first_hour..last_hour."""
    return (_layout_config.last_hour - _layout_config.first_hour) * _hour_height()


def _get_single_line_height() -> int:
    """Calculate height for a single-line block based on font metrics."""
    sample_label = QLabel("Sample")
    return QFontMetrics(sample_label.font()).height() + 8


def _get_time_column_width() -> int:
    """Calculate time column width based on actual font metrics."""
    sample_label = QLabel("00:00")
    metrics = QFontMetrics(sample_label.font())
    return metrics.horizontalAdvance("00:00") + 15


def _header_style(highlight: bool) -> str:
    font_name, font_size = get_interface_font()
    colors = get_colors_config()
    if highlight:
        return (f"font-family: '{font_name}'; font-size: {font_size}pt; font-weight: bold; padding: 8px; "
                f"background: {colors.today_highlight_background}; color: {colors.today_highlight_text};")
    return (f"font-family: '{font_name}'; font-size: {font_size}pt; font-weight: bold; padding: 8px; "
            f"background: {colors.header_background};")


def _build_time_labels() -> QWidget:
    """Hour labels aligned with the hour lines of a day column."""
    hour_height = _hour_height()
    widget = QWidget()
    widget.setFixedWidth(_get_time_column_width())
    widget.setFixedHeight(_column_height())
    widget.setStyleSheet(f"background: {get_colors_config().header_background};")
    layout = QVBoxLayout(widget)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setSpacing(0)

    # Half-hour spacers centre each label on its line
    top_spacer = QWidget()
    top_spacer.setFixedHeight(hour_height // 2)
    layout.addWidget(top_spacer)

    for hour in range(_layout_config.first_hour + 1, _layout_config.last_hour):
        lbl = QLabel(f"{hour:02d}:00")
        lbl.setFixedHeight(hour_height)
        lbl.setAlignment(Qt.AlignCenter)
        layout.addWidget(lbl)

    bot_spacer = QWidget()
    bot_spacer.setFixedHeight(hour_height - hour_height // 2)
    layout.addWidget(bot_spacer)
    return widget


class DayColumnWidget(QWidget):
    """
    A single day column with absolute positioning for schedule blocks.
    Blocks span according to their duration. Overlapping blocks are placed side by side.
    """

    slot_clicked = Signal(object, str)         # date, "HH:MM"
    slot_double_clicked = Signal(object, str)
    schedule_clicked = Signal(object)
    schedule_double_clicked = Signal(object)

    def __init__(self, for_date: date, parent=None):
        super().__init__(parent)
        self._date = for_date
        self._schedules: list[ScheduleRecord] = []
        self._blocks: list[PlacedBlock] = []
        self._widgets: list[ScheduleWidget] = []

        self._setup_ui()
        self._setup_time_indicator()

    def _setup_ui(self):
        colors = get_colors_config()
        self.setFixedHeight(_column_height())
        self.setStyleSheet(f"background-color: {colors.day_column_background}; border: 1px solid {colors.cell_border};")
        self.setCursor(Qt.PointingHandCursor)

        hours = _layout_config.last_hour - _layout_config.first_hour
        for hour in range(1, hours):
            line = QFrame(self)
            line.setFrameStyle(QFrame.HLine | QFrame.Plain)
            line.setStyleSheet(f"background-color: {colors.hour_line};")
            line.setGeometry(0, hour * _hour_height(), 2000, 1)

    def _setup_time_indicator(self):
        """Set up the current time indicator line."""
        self._time_indicator = QFrame(self)
        self._time_indicator.setFrameStyle(QFrame.HLine | QFrame.Plain)
        self._time_indicator.setStyleSheet(f"background-color: {get_colors_config().current_time_line};")
        self._time_indicator.setFixedHeight(3)

        self._time_timer = QTimer(self)
        self._time_timer.timeout.connect(self._update_time_indicator)
        self._time_timer.start(60000)
        self._update_time_indicator()

    def _update_time_indicator(self):
        """Only today's column shows the line, and only within the visible hours."""
        if not is_today(self._date, local_today()):
            self._time_indicator.hide()
            return
        y_pos = current_time_offset(_hour_height(), local_now(), _layout_config.first_hour)
        if not 0 <= y_pos <= _column_height():
            self._time_indicator.hide()
            return
        self._time_indicator.show()
        self._time_indicator.setGeometry(0, int(y_pos), self.width(), 2)
        self._time_indicator.raise_()

    def set_date(self, new_date: date):
        self._date = new_date
        self._update_time_indicator()

    def set_schedules(self, schedules: list[ScheduleRecord]):
        """Replace the column's schedules; they must all occur on this date."""
        self._schedules = list(schedules)
        self._blocks = layout_column(self._schedules, _hour_height(), _layout_config.first_hour)
        self._create_schedule_widgets()

    def clear_schedules(self):
        for widget in self._widgets:
            widget.deleteLater()
        self._widgets.clear()
        self._schedules.clear()
        self._blocks.clear()

    def _create_schedule_widgets(self):
        for widget in self._widgets:
            widget.deleteLater()
        self._widgets.clear()

        for block in self._blocks:
            widget = ScheduleWidget(block.schedule, compact=block.total_columns > 1, parent=self)
            widget.clicked.connect(self.schedule_clicked.emit)
            widget.double_clicked.connect(self.schedule_double_clicked.emit)
            self._widgets.append(widget)
            widget.show()

        self._position_schedule_widgets()
        self._time_indicator.raise_()

    def _position_schedule_widgets(self):
        available_width = self.width() - 4  # 2px margin on each side
        for widget, block in zip(self._widgets, self._blocks):
            col_width = available_width // block.total_columns
            x = 2 + block.column * col_width
            height = max(int(block.height), 20)
            widget.setGeometry(x, int(block.top) + 1, col_width - 1, height - 2)

    def _time_at(self, y: float) -> str:
        return offset_to_time(y, _hour_height(), _layout_config.snap_minutes, _layout_config.first_hour)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._position_schedule_widgets()
        self._update_time_indicator()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.slot_clicked.emit(self._date, self._time_at(event.position().y()))
        super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.slot_double_clicked.emit(self._date, self._time_at(event.position().y()))
        super().mouseDoubleClickEvent(event)


class TimeGridView(QWidget):
    """Day or week view: a header row over a scrollable grid of day columns."""

    slot_clicked = Signal(object, str)
    slot_double_clicked = Signal(object, str)
    schedule_clicked = Signal(object)
    schedule_double_clicked = Signal(object)

    def __init__(self, num_days: int, parent=None):
        super().__init__(parent)
        self._num_days = num_days
        self._dates: list[date] = [local_today()] * num_days
        self._schedules: list[ScheduleRecord] = []
        self._columns: list[DayColumnWidget] = []
        self._setup_ui()

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        time_col_width = _get_time_column_width()
        scrollbar_width = QApplication.style().pixelMetric(QStyle.PM_ScrollBarExtent)

        header = QWidget()
        header.setStyleSheet(f"background: {get_colors_config().header_background};")
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(time_col_width, 0, scrollbar_width, 0)
        header_layout.setSpacing(1)
        self._header_labels = []
        for _ in range(self._num_days):
            label = QLabel()
            label.setAlignment(Qt.AlignCenter)
            header_layout.addWidget(label, 1)
            self._header_labels.append(label)
        main_layout.addWidget(header)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)

        content = QWidget()
        content_layout = QHBoxLayout(content)
        content_layout.setContentsMargins(0, 0, 0, 0)
        content_layout.setSpacing(0)
        content_layout.addWidget(_build_time_labels())

        for d in self._dates:
            col = DayColumnWidget(d)
            col.slot_clicked.connect(self.slot_clicked.emit)
            col.slot_double_clicked.connect(self.slot_double_clicked.emit)
            col.schedule_clicked.connect(self.schedule_clicked.emit)
            col.schedule_double_clicked.connect(self.schedule_double_clicked.emit)
            content_layout.addWidget(col, 1)
            self._columns.append(col)

        scroll.setWidget(content)
        self._scroll = scroll
        main_layout.addWidget(scroll, 1)

    def _dates_for(self, d: date) -> list[date]:
        raise NotImplementedError

    def _update_headers(self):
        localization = get_localization_config()
        today = local_today()
        for label, d in zip(self._header_labels, self._dates):
            # Grid columns are Monday-first, as is date.weekday()
            label.setText(f"{localization.get_day_name(d.weekday())} {d.day}")
            label.setStyleSheet(_header_style(is_today(d, today)))

    def get_scroll_position(self) -> int:
        return self._scroll.verticalScrollBar().value()

    def set_scroll_position(self, position: int):
        self._scroll.verticalScrollBar().setValue(position)

    def set_date(self, d: date):
        self._dates = self._dates_for(d)
        for col, day in zip(self._columns, self._dates):
            col.set_date(day)
        self._update_headers()
        self.refresh_schedules()

    def set_schedules(self, schedules: list[ScheduleRecord]):
        self._schedules = list(schedules)
        self.refresh_schedules()

    def refresh_schedules(self):
        by_date = schedules_by_date(self._schedules, self._dates)
        for col, d in zip(self._columns, self._dates):
            col.clear_schedules()
            col.set_schedules(by_date[d])

    def refresh_styles(self):
        self._update_headers()


class DayView(TimeGridView):
    """Single day view with time slots."""

    def __init__(self, parent=None):
        super().__init__(num_days=1, parent=parent)

    def _dates_for(self, d: date) -> list[date]:
        return [d]


class WeekView(TimeGridView):
    """Week view showing Monday to Sunday side by side."""

    def __init__(self, parent=None):
        super().__init__(num_days=7, parent=parent)

    def _dates_for(self, d: date) -> list[date]:
        return build_week_days(d)


class MonthDayCell(QFrame):
    """Single day cell in month view."""

    clicked = Signal(object)
    double_clicked = Signal(object)
    schedule_clicked = Signal(object)
    schedule_double_clicked = Signal(object)

    def __init__(self, d: date, is_current_month: bool = True, parent=None):
        super().__init__(parent)
        self._date = d
        self.is_current_month = is_current_month
        self._widgets: list[ScheduleWidget] = []
        self._setup_ui()

    @property
    def date(self):
        return self._date

    def _setup_ui(self):
        self.setFrameStyle(QFrame.Box | QFrame.Plain)
        fm = QFontMetrics(self.font())
        # Day number plus room for two single-line blocks
        min_height = fm.height() + 2 * _get_single_line_height() + 12
        min_width = fm.horizontalAdvance("00") + 16
        self.setMinimumSize(max(min_width, 60), max(min_height, 60))
        self.setCursor(Qt.PointingHandCursor)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        self._day_label = QLabel(str(self._date.day))
        self._day_label.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        layout.addWidget(self._day_label)

        self._schedules_layout = QVBoxLayout()
        self._schedules_layout.setSpacing(1)
        layout.addLayout(self._schedules_layout)
        layout.addStretch()

        self._update_style()

    def _update_style(self):
        colors = get_colors_config()
        bg = colors.month_cell_current if self.is_current_month else colors.month_cell_other
        text = colors.month_text_current if self.is_current_month else colors.month_text_other

        if is_today(self._date, local_today()):
            self._day_label.setStyleSheet(f"color: {colors.today_highlight_text}; font-weight: bold; background: {colors.today_highlight_background}; border-radius: 10px; padding: 2px 6px;")
        else:
            self._day_label.setStyleSheet(f"color: {text};")

        self.setStyleSheet(f"background-color: {bg}; border: 1px solid {colors.cell_border};")

    def set_date(self, d: date, is_current_month: bool = True):
        self._date = d
        self.is_current_month = is_current_month
        self._day_label.setText(str(d.day))
        self._update_style()
        self.clear_schedules()

    def add_schedule(self, schedule: ScheduleRecord):
        widget = ScheduleWidget(schedule, compact=True)
        widget.setMaximumHeight(_get_single_line_height())
        widget.clicked.connect(self.schedule_clicked.emit)
        widget.double_clicked.connect(self.schedule_double_clicked.emit)
        self._schedules_layout.addWidget(widget)
        self._widgets.append(widget)

    def clear_schedules(self):
        for widget in self._widgets:
            widget.deleteLater()
        self._widgets.clear()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self._date)
        super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.double_clicked.emit(self._date)
        super().mouseDoubleClickEvent(event)


class MonthView(QWidget):
    """Month view showing the 6x7 calendar grid."""

    day_clicked = Signal(object)
    day_double_clicked = Signal(object)
    schedule_clicked = Signal(object)
    schedule_double_clicked = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._anchor = local_today()
        self._schedules: list[ScheduleRecord] = []
        self._cells: list[MonthDayCell] = []
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        header = QWidget()
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(0, 0, 0, 0)
        header_layout.setSpacing(1)
        self._header_labels = []
        localization = get_localization_config()
        for i in range(7):
            label = QLabel(localization.get_day_name(i))
            label.setAlignment(Qt.AlignCenter)
            label.setStyleSheet(_header_style(False))
            header_layout.addWidget(label, 1)
            self._header_labels.append(label)
        layout.addWidget(header)

        grid_widget = QWidget()
        self._grid_layout = QGridLayout(grid_widget)
        self._grid_layout.setContentsMargins(0, 0, 0, 0)
        self._grid_layout.setSpacing(1)
        for col in range(7):
            self._grid_layout.setColumnStretch(col, 1)

        for index, cell_info in enumerate(build_month_grid(self._anchor)):
            cell = MonthDayCell(cell_info.date, cell_info.is_current_period)
            cell.clicked.connect(self.day_clicked.emit)
            cell.double_clicked.connect(self.day_double_clicked.emit)
            cell.schedule_clicked.connect(self.schedule_clicked.emit)
            cell.schedule_double_clicked.connect(self.schedule_double_clicked.emit)
            row, col = divmod(index, 7)
            self._grid_layout.addWidget(cell, row, col)
            self._cells.append(cell)

        layout.addWidget(grid_widget, 1)

    def set_date(self, d: date):
        self._anchor = d
        for cell, cell_info in zip(self._cells, build_month_grid(d)):
            cell.set_date(cell_info.date, cell_info.is_current_period)
        self.refresh_schedules()

    def set_schedules(self, schedules: list[ScheduleRecord]):
        self._schedules = list(schedules)
        self.refresh_schedules()

    def refresh_schedules(self):
        by_date = schedules_by_date(self._schedules, [cell.date for cell in self._cells])
        for cell in self._cells:
            cell.clear_schedules()
            for schedule in by_date[cell.date]:
                cell.add_schedule(schedule)

    def refresh_styles(self):
        for label in self._header_labels:
            label.setStyleSheet(_header_style(False))
        for cell in self._cells:
            cell._update_style()


class ClickableLabel(QLabel):
    """A label that reports left clicks."""

    clicked = Signal()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)


class MiniMonthWidget(QFrame):
    """One month of the year view: name, class count and a small date grid."""

    month_clicked = Signal(object)
    day_clicked = Signal(object)

    def __init__(self, month_first: date, parent=None):
        super().__init__(parent)
        self._month_first = month_first
        self._day_labels: list[QLabel] = []
        self._cell_dates: list[date] = []
        self._setup_ui()

    def _setup_ui(self):
        self.setFrameStyle(QFrame.Box | QFrame.Plain)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        self._title = ClickableLabel()
        self._title.setAlignment(Qt.AlignCenter)
        self._title.setCursor(Qt.PointingHandCursor)
        self._title.clicked.connect(lambda: self.month_clicked.emit(self._month_first))
        layout.addWidget(self._title)

        self._count_label = QLabel()
        self._count_label.setAlignment(Qt.AlignCenter)
        self._count_label.setStyleSheet(f"color: {get_colors_config().secondary_text};")
        layout.addWidget(self._count_label)

        grid = QGridLayout()
        grid.setSpacing(0)
        localization = get_localization_config()
        for col in range(7):
            name = QLabel(localization.get_day_name(col)[:2])
            name.setAlignment(Qt.AlignCenter)
            grid.addWidget(name, 0, col)
        for index in range(42):
            label = ClickableLabel()
            label.setAlignment(Qt.AlignCenter)
            label.setCursor(Qt.PointingHandCursor)
            label.clicked.connect(lambda i=index: self._on_day_clicked(i))
            row, col = divmod(index, 7)
            grid.addWidget(label, row + 1, col)
            self._day_labels.append(label)
        layout.addLayout(grid)

    def set_month(self, cells, schedules: list[ScheduleRecord]):
        """Show one month grid; dates with at least one class are bold."""
        self._month_first = next(c.date for c in cells if c.is_current_period)
        self._cell_dates = [c.date for c in cells]
        colors = get_colors_config()
        labels = get_labels_config()

        self._title.setText(get_localization_config().get_month_name(self._month_first.month))
        self._title.setStyleSheet(_header_style(False))

        count = len(schedules_for_month(schedules, self._month_first))
        self._count_label.setText(labels.class_count.format(count) if count else labels.no_classes)

        today = local_today()
        for label, cell in zip(self._day_labels, cells):
            label.setText(str(cell.date.day))
            color = colors.month_text_current if cell.is_current_period else colors.month_text_other
            weight = "bold" if cell.is_current_period and schedules_for_date(schedules, cell.date) else "normal"
            if is_today(cell.date, today):
                label.setStyleSheet(f"color: {colors.today_highlight_text}; background: {colors.today_highlight_background}; font-weight: {weight};")
            else:
                label.setStyleSheet(f"color: {color}; font-weight: {weight};")

    def _on_day_clicked(self, index: int):
        if index < len(self._cell_dates):
            self.day_clicked.emit(self._cell_dates[index])


class YearView(QWidget):
    """Year view: twelve month grids in a 3x4 layout."""

    month_clicked = Signal(object)
    day_clicked = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._anchor = local_today()
        self._schedules: list[ScheduleRecord] = []
        self._months: list[MiniMonthWidget] = []
        self._setup_ui()

    def _setup_ui(self):
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        content = QWidget()
        grid = QGridLayout(content)
        grid.setSpacing(8)
        for index in range(12):
            month = MiniMonthWidget(date(self._anchor.year, index + 1, 1))
            month.month_clicked.connect(self.month_clicked.emit)
            month.day_clicked.connect(self.day_clicked.emit)
            row, col = divmod(index, 4)
            grid.addWidget(month, row, col)
            self._months.append(month)
        scroll.setWidget(content)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(scroll)

    def set_date(self, d: date):
        self._anchor = d
        self.refresh_schedules()

    def set_schedules(self, schedules: list[ScheduleRecord]):
        self._schedules = list(schedules)
        self.refresh_schedules()

    def refresh_schedules(self):
        for widget, cells in zip(self._months, build_year_months(self._anchor)):
            widget.set_month(cells, self._schedules)

    def refresh_styles(self):
        self.refresh_schedules()


class CalendarWidget(QWidget):
    """Main calendar widget with switchable views."""

    slot_clicked = Signal(object, str)
    slot_double_clicked = Signal(object, str)
    schedule_clicked = Signal(object)
    schedule_double_clicked = Signal(object)
    state_changed = Signal(object)  # ViewState

    def __init__(self, mode: ViewType = ViewType.WEEK, parent=None):
        super().__init__(parent)
        self._state = initial_state(mode)
        self._schedules: list[ScheduleRecord] = []
        self._setup_ui()
        self._show_state()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._stack = QStackedWidget()
        self._day_view = DayView()
        self._week_view = WeekView()
        self._month_view = MonthView()
        self._year_view = YearView()
        self._views = {
            ViewType.DAY: self._day_view,
            ViewType.WEEK: self._week_view,
            ViewType.MONTH: self._month_view,
            ViewType.YEAR: self._year_view,
        }

        for view in (self._day_view, self._week_view):
            view.slot_clicked.connect(self.slot_clicked.emit)
            view.slot_double_clicked.connect(self.slot_double_clicked.emit)
        for view in (self._day_view, self._week_view, self._month_view):
            view.schedule_clicked.connect(self.schedule_clicked.emit)
            view.schedule_double_clicked.connect(self.schedule_double_clicked.emit)

        # Drill down from the coarser views
        self._month_view.day_double_clicked.connect(self.open_day)
        self._year_view.day_clicked.connect(self.open_day)
        self._year_view.month_clicked.connect(self.open_month)

        for view in self._views.values():
            self._stack.addWidget(view)
        layout.addWidget(self._stack)

    @property
    def state(self) -> ViewState:
        return self._state

    def set_state(self, state: ViewState):
        self._state = state
        self._show_state()
        self.state_changed.emit(state)

    def _show_state(self):
        view = self._views[self._state.mode]
        self._stack.setCurrentWidget(view)
        view.set_date(self._state.anchor_date)

    def set_schedules(self, schedules: list[ScheduleRecord]):
        """Give every view the current schedule snapshot."""
        self._schedules = list(schedules)
        for view in self._views.values():
            view.set_schedules(self._schedules)

    def get_current_view(self) -> ViewType:
        return self._state.mode

    def get_current_date(self) -> date:
        return self._state.anchor_date

    def go_today(self):
        self.set_state(go_today(self._state, local_today()))

    def go_previous(self):
        self.set_state(go_previous(self._state))

    def go_next(self):
        self.set_state(go_next(self._state))

    def switch_view(self, mode: ViewType):
        self.set_state(switch_view(self._state, mode, local_today()))

    def open_day(self, d: date):
        self.set_state(open_day(self._state, d))

    def open_month(self, d: date):
        self.set_state(open_month(self._state, d))

    def get_scroll_position(self) -> int:
        if self._state.mode in (ViewType.DAY, ViewType.WEEK):
            return self._views[self._state.mode].get_scroll_position()
        return 0

    def set_scroll_position(self, position: int):
        self._day_view.set_scroll_position(position)
        self._week_view.set_scroll_position(position)

    def refresh_styles(self):
        for view in self._views.values():
            view.refresh_styles()

    def reference_date(self) -> Optional[date]:
        """Date a new class should default to: the anchor in day view, else None."""
        if self._state.mode == ViewType.DAY:
            return self._state.anchor_date
        return None
