"""
Main Window for Class Timetable.

The primary application window with the calendar view and navigation toolbar.
"""

from datetime import date
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QToolBar, QPushButton, QLabel,
    QComboBox, QStatusBar, QMessageBox, QApplication, QSizePolicy,
    QFileDialog, QInputDialog
)
from PySide6.QtGui import QCloseEvent, QFont, QKeySequence, QShortcut

from backend.config import Config
from backend.date_grid import week_start
from backend.debug import debug_print
from backend.ics_export import export_ics
from backend.navigation import ViewType, ViewState, visible_range
from backend.schedule import ScheduleRecord
from backend.schedule_store import ScheduleStore

from .widgets.calendar_widget import (
    CalendarWidget, set_layout_config, set_localization_config,
    get_localization_config, set_colors_config, set_labels_config
)
from .schedule_dialog import ScheduleDialog


class MainWindow(QMainWindow):
    """
    Main application window.

    Contains:
    - Toolbar with navigation and view switching
    - Main calendar view (day/week/month/year)
    """

    def __init__(self, config: Config, store: ScheduleStore, parent=None):
        super().__init__(parent)
        self.config = config
        self.store = store

        # Set configs for calendar widget BEFORE creating UI
        set_layout_config(config.layout)
        set_localization_config(config.localization)
        set_colors_config(config.colors)
        set_labels_config(config.labels)

        # Apply text_font as application default (for tooltips, block content, etc.)
        QApplication.instance().setFont(QFont(config.layout.text_font, config.layout.text_font_size))

        # Interface font for explicit use on UI elements
        self._interface_font = QFont(config.layout.interface_font, config.layout.interface_font_size)

        self._schedule_dialogs: list[ScheduleDialog] = []

        self._setup_window()
        self._setup_ui()
        self._setup_toolbar()
        self._setup_shortcuts()
        self._setup_statusbar()

        self._refresh_schedules()

    def _setup_window(self):
        self.setWindowTitle(self.config.labels.window_title)
        self.setMinimumSize(800, 600)
        self.resize(1200, 800)

    def _setup_shortcuts(self):
        """Set up keyboard shortcuts from config bindings."""
        bindings = self.config.bindings
        prev_shortcut = QShortcut(QKeySequence(bindings.prev), self)
        prev_shortcut.activated.connect(self._calendar_widget.go_previous)

        next_shortcut = QShortcut(QKeySequence(bindings.next), self)
        next_shortcut.activated.connect(self._calendar_widget.go_next)

        today_shortcut = QShortcut(QKeySequence(bindings.today), self)
        today_shortcut.activated.connect(self._calendar_widget.go_today)

        if bindings.new_class:
            new_class_shortcut = QShortcut(QKeySequence(bindings.new_class), self)
            new_class_shortcut.activated.connect(self._on_new_class)

    def _setup_ui(self):
        main_widget = QWidget()
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)

        self._calendar_widget = CalendarWidget(ViewType.parse(self.config.default_view))
        self._calendar_widget.slot_double_clicked.connect(self._on_slot_double_clicked)
        self._calendar_widget.schedule_clicked.connect(self._on_schedule_clicked)
        self._calendar_widget.schedule_double_clicked.connect(self._on_schedule_clicked)
        self._calendar_widget.state_changed.connect(self._on_state_changed)

        main_layout.addWidget(self._calendar_widget)
        self.setCentralWidget(main_widget)

    def _add_button(self, toolbar: QToolBar, text: str, slot, tooltip: Optional[str] = None) -> QPushButton:
        button = QPushButton(text)
        button.setFont(self._interface_font)
        if tooltip:
            button.setToolTip(tooltip)
        button.clicked.connect(slot)
        toolbar.addWidget(button)
        return button

    def _add_spacer(self, toolbar: QToolBar):
        spacer = QWidget()
        spacer.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        toolbar.addWidget(spacer)

    def _setup_toolbar(self):
        """Set up the navigation toolbar."""
        labels = self.config.labels
        toolbar = QToolBar("Navigation")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)
        if toolbar.layout():
            toolbar.layout().setContentsMargins(8, 12, 8, 8)

        # === LEFT BLOCK ===
        self._date_label = QLabel()
        date_font = QFont(self._interface_font)
        date_font.setBold(True)
        self._date_label.setFont(date_font)
        self._date_label.setMinimumWidth(200)
        toolbar.addWidget(self._date_label)

        toolbar.addSeparator()

        self._view_combo = QComboBox()
        self._view_combo.setFont(self._interface_font)
        self._view_combo.addItem(labels.view_day, ViewType.DAY)
        self._view_combo.addItem(labels.view_week, ViewType.WEEK)
        self._view_combo.addItem(labels.view_month, ViewType.MONTH)
        self._view_combo.addItem(labels.view_year, ViewType.YEAR)
        self._sync_view_combo(self._calendar_widget.get_current_view())
        self._view_combo.currentIndexChanged.connect(self._on_view_combo_changed)
        toolbar.addWidget(self._view_combo)

        toolbar.addSeparator()

        self._add_button(toolbar, labels.button_prev, self._calendar_widget.go_previous, "Previous")
        self._add_button(toolbar, labels.button_today, self._calendar_widget.go_today)
        self._add_button(toolbar, labels.button_next, self._calendar_widget.go_next, "Next")

        # === CENTER: New Class button ===
        self._add_spacer(toolbar)
        self._add_button(toolbar, labels.button_new_class, self._on_new_class)
        self._add_spacer(toolbar)

        # === RIGHT BLOCK: Actions ===
        self._add_button(toolbar, labels.button_export, self._on_export, "Export the timetable as iCalendar")
        self._add_button(toolbar, labels.button_quit, self.close, "Exit application")

        self._update_date_label()

    def _setup_statusbar(self):
        self._statusbar = QStatusBar()
        self._statusbar.setFont(self._interface_font)
        self.setStatusBar(self._statusbar)
        self._statusbar.showMessage("Ready")

    def _sync_view_combo(self, mode: ViewType):
        """Select the combo entry for mode without re-triggering a view switch."""
        self._view_combo.blockSignals(True)
        self._view_combo.setCurrentIndex(self._view_combo.findData(mode))
        self._view_combo.blockSignals(False)

    def _refresh_schedules(self):
        """Hand the current schedule snapshot to the calendar."""
        schedules = self.store.list()
        self._calendar_widget.set_schedules(schedules)
        self._statusbar.showMessage(f"Loaded {len(schedules)} classes", 3000)

    def _update_date_label(self):
        """Update the date label in the toolbar using yyyy/mm/dd format."""
        state = self._calendar_widget.state
        anchor = state.anchor_date

        if state.mode == ViewType.DAY:
            text = anchor.strftime("%Y/%m/%d")
        elif state.mode == ViewType.WEEK:
            first, last = visible_range(state)
            if first.year == last.year and first.month == last.month:
                text = f"{first.strftime('%Y/%m/%d')}-{last.day:02d}"
            else:
                text = f"{first.strftime('%Y/%m/%d')} - {last.strftime('%Y/%m/%d')}"
        elif state.mode == ViewType.MONTH:
            text = f"{get_localization_config().get_month_name(anchor.month)} {anchor.year}"
        else:  # YEAR
            text = str(anchor.year)

        self._date_label.setText(text)

    def _on_view_combo_changed(self, index: int):
        mode = self._view_combo.currentData()
        if mode:
            self._calendar_widget.switch_view(mode)

    def _on_state_changed(self, state: ViewState):
        debug_print("VIEW", f"{state.mode.value} @ {state.anchor_date.isoformat()}")
        self._sync_view_combo(state.mode)
        self._update_date_label()

    def _on_slot_double_clicked(self, day: date, time: str):
        """Double-click on an empty time slot creates a class on that weekday and time."""
        self._open_schedule_dialog(initial_date=day, initial_time=time)

    def _on_schedule_clicked(self, schedule: ScheduleRecord):
        self._open_schedule_dialog(schedule=schedule)

    def _on_new_class(self):
        self._open_schedule_dialog(initial_date=self._calendar_widget.reference_date())

    def _open_schedule_dialog(
        self,
        schedule: Optional[ScheduleRecord] = None,
        initial_date: Optional[date] = None,
        initial_time: Optional[str] = None
    ):
        """Open a schedule dialog window."""
        dialog = ScheduleDialog(
            store=self.store,
            config=self.config,
            schedule=schedule,
            initial_date=initial_date,
            initial_time=initial_time
        )
        dialog.schedule_saved.connect(self._on_schedule_saved)
        dialog.schedule_deleted.connect(self._on_schedule_deleted)
        dialog.closed.connect(lambda d=dialog: self._on_schedule_dialog_closed(d))

        self._schedule_dialogs.append(dialog)
        dialog.show()
        dialog.raise_()
        dialog.activateWindow()

    def _on_schedule_dialog_closed(self, dialog: ScheduleDialog):
        if dialog in self._schedule_dialogs:
            self._schedule_dialogs.remove(dialog)

    def _on_schedule_saved(self, schedule: ScheduleRecord):
        self._refresh_schedules()
        self._statusbar.showMessage(f"Saved '{schedule.title}'", 3000)

    def _on_schedule_deleted(self, schedule: ScheduleRecord):
        self._refresh_schedules()
        self._statusbar.showMessage(f"Class '{schedule.title}' deleted", 3000)

    def _on_export(self):
        """Export the timetable as a weekly recurring iCalendar file."""
        default_start = week_start(self._calendar_widget.get_current_date())
        text, ok = QInputDialog.getText(
            self, "Export iCal", "First week of term (YYYY-MM-DD):", text=default_start.isoformat()
        )
        if not ok:
            return
        try:
            term_start = date.fromisoformat(text.strip())
        except ValueError:
            QMessageBox.warning(self, "Export iCal", f"Not a date: {text!r}")
            return

        path_str, _ = QFileDialog.getSaveFileName(
            self, "Export iCal", str(Path.home() / "timetable.ics"), "iCalendar (*.ics)"
        )
        if not path_str:
            return

        try:
            path = export_ics(self.store.list(), Path(path_str), term_start)
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Could not write calendar file:\n{e}")
            return
        self._statusbar.showMessage(f"Exported timetable to {path}", 3000)

    def closeEvent(self, event: QCloseEvent):
        for dialog in self._schedule_dialogs[:]:
            dialog.close()
        super().closeEvent(event)
