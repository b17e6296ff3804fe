"""
Schedule Dialog for creating and editing classes.

This is an independent window (not a modal dialog) for editing a class's
course, weekday, times and room.
"""

from datetime import date
from typing import Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLineEdit, QTimeEdit, QComboBox, QPushButton, QMessageBox
)
from PySide6.QtCore import Qt, Signal, QTime
from PySide6.QtGui import QCloseEvent

from backend.config import Config
from backend.errors import ScheduleValidationError, ScheduleNotFoundError
from backend.schedule import ScheduleRecord
from backend.schedule_store import ScheduleStore
from backend.time_utils import add_minutes
from backend.weekdays import DAY_NAMES, index_to_day_name, sunday_based_weekday


# Monday-first order for the day picker; values stay Sunday-based names
_PICKER_DAYS = DAY_NAMES[1:] + DAY_NAMES[:1]

DEFAULT_START_TIME = "09:00"


class ScheduleDialog(QWidget):
    """Independent window for creating/editing a class."""

    schedule_saved = Signal(object)
    schedule_deleted = Signal(object)
    closed = Signal()

    def __init__(self, store: ScheduleStore, config: Config,
                 schedule: Optional[ScheduleRecord] = None,
                 initial_date: Optional[date] = None,
                 initial_time: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.store = store
        self.config = config
        self.schedule = schedule
        self.is_new = schedule is None
        self.initial_date = initial_date
        self.initial_time = initial_time or DEFAULT_START_TIME

        self._setup_window()
        self._setup_ui()
        self._populate_data()

    def _setup_window(self):
        labels = self.config.labels
        if self.is_new:
            self.setWindowTitle(labels.dialog_new_class)
        else:
            self.setWindowTitle(labels.dialog_edit_class.format(self.schedule.title))
        self.setWindowFlags(Qt.Window)
        self.setAttribute(Qt.WA_DeleteOnClose)
        self.setMinimumSize(380, 320)

    def _setup_ui(self):
        labels = self.config.labels
        colors = self.config.colors
        layout = QVBoxLayout(self)
        layout.setSpacing(8)
        layout.setContentsMargins(8, 8, 8, 8)

        form = QFormLayout()
        form.setSpacing(8)

        self._code_edit = QLineEdit()
        self._code_edit.setPlaceholderText("e.g. CS101")
        form.addRow(labels.field_course_code, self._code_edit)

        self._name_edit = QLineEdit()
        form.addRow(labels.field_course_name, self._name_edit)

        self._day_combo = QComboBox()
        for name in _PICKER_DAYS:
            self._day_combo.addItem(name, name)
        form.addRow(labels.field_day, self._day_combo)

        self._start_edit = QTimeEdit()
        self._start_edit.setDisplayFormat("HH:mm")
        self._start_edit.timeChanged.connect(self._on_start_changed)
        form.addRow(labels.field_start, self._start_edit)

        self._end_edit = QTimeEdit()
        self._end_edit.setDisplayFormat("HH:mm")
        form.addRow(labels.field_end, self._end_edit)

        self._location_edit = QLineEdit()
        form.addRow(labels.field_location, self._location_edit)

        self._lecturer_edit = QLineEdit()
        self._lecturer_edit.setPlaceholderText("(optional)")
        form.addRow(labels.field_lecturer, self._lecturer_edit)

        self._week_edit = QLineEdit()
        self._week_edit.setPlaceholderText("(optional)")
        form.addRow(labels.field_week, self._week_edit)

        layout.addLayout(form)
        layout.addStretch()

        button_layout = QHBoxLayout()
        if not self.is_new:
            self._delete_btn = QPushButton(labels.button_delete)
            self._delete_btn.setStyleSheet(
                f"background: {colors.button_delete_background}; color: {colors.button_delete_text};"
            )
            self._delete_btn.clicked.connect(self._on_delete)
            button_layout.addWidget(self._delete_btn)

        button_layout.addStretch()

        self._cancel_btn = QPushButton(labels.button_cancel)
        self._cancel_btn.clicked.connect(self.close)
        button_layout.addWidget(self._cancel_btn)

        self._save_btn = QPushButton(labels.button_save)
        self._save_btn.setStyleSheet(
            f"background: {colors.button_save_background}; color: {colors.button_save_text};"
        )
        self._save_btn.clicked.connect(self._on_save)
        self._save_btn.setDefault(True)
        button_layout.addWidget(self._save_btn)

        layout.addLayout(button_layout)

    @staticmethod
    def _to_qtime(value: str) -> QTime:
        return QTime.fromString(value, "H:mm")

    def _populate_data(self):
        if self.schedule:
            self._code_edit.setText(self.schedule.course_code)
            self._name_edit.setText(self.schedule.course_name)
            self._day_combo.setCurrentIndex(max(0, self._day_combo.findData(self.schedule.day_name)))
            self._start_edit.setTime(self._to_qtime(self.schedule.start_time))
            self._end_edit.setTime(self._to_qtime(self.schedule.end_time))
            self._location_edit.setText(self.schedule.location)
            self._lecturer_edit.setText(self.schedule.lecturer or "")
            self._week_edit.setText(self.schedule.week or "")
        else:
            if self.initial_date is not None:
                day_name = index_to_day_name(sunday_based_weekday(self.initial_date))
                self._day_combo.setCurrentIndex(self._day_combo.findData(day_name))
            end_time = add_minutes(self.initial_time, self.config.layout.default_duration_minutes)
            self._start_edit.setTime(self._to_qtime(self.initial_time))
            self._end_edit.setTime(self._to_qtime(end_time))

    def _on_start_changed(self, start: QTime):
        if self._end_edit.time() <= start:
            end_time = add_minutes(start.toString("HH:mm"), self.config.layout.default_duration_minutes)
            self._end_edit.setTime(self._to_qtime(end_time))

    def _field_values(self) -> dict:
        return {
            "course_code": self._code_edit.text().strip(),
            "course_name": self._name_edit.text().strip(),
            "day": self._day_combo.currentData(),
            "start_time": self._start_edit.time().toString("HH:mm"),
            "end_time": self._end_edit.time().toString("HH:mm"),
            "location": self._location_edit.text().strip(),
            "lecturer": self._lecturer_edit.text().strip() or None,
            "week": self._week_edit.text().strip() or None,
        }

    def _on_save(self):
        values = self._field_values()
        try:
            if self.is_new:
                saved = self.store.create(values)
            else:
                saved = self.store.update(self.schedule.id, values)
        except ScheduleValidationError as e:
            lines = [f"{name.replace('_', ' ')}: {msg}" for name, msg in e.errors.items()]
            QMessageBox.warning(self, "Validation Error", "\n".join(lines))
            return
        except ScheduleNotFoundError as e:
            QMessageBox.critical(self, "Error", str(e))
            return
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Failed to save class:\n{e}")
            return

        self.schedule_saved.emit(saved)
        self.close()

    def _on_delete(self):
        if self.schedule is None:
            return
        result = QMessageBox.question(self, "Delete Class",
            f"Are you sure you want to delete '{self.schedule.title}'?",
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
        if result != QMessageBox.Yes:
            return

        try:
            self.store.delete(self.schedule.id)
        except (ScheduleNotFoundError, OSError) as e:
            QMessageBox.critical(self, "Error", f"Failed to delete class:\n{e}")
            return
        self.schedule_deleted.emit(self.schedule)
        self.close()

    def closeEvent(self, close_event: QCloseEvent):
        self.closed.emit()
        super().closeEvent(close_event)
