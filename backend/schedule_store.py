"""
Schedule storage for Class Timetable.

Abstract base class and implementations for keeping schedule records.
The calendar engine only ever reads a list() snapshot; create, update and
delete are driven by the UI, which then asks the engine to redraw.
"""

import json
import os
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .debug import debug_print
from .errors import ScheduleNotFoundError, ScheduleValidationError
from .schedule import ScheduleRecord, EDITABLE_FIELDS, validate_schedule_fields


def _debug_print(msg: str) -> None:
    debug_print("STORE", msg)


class ScheduleStore(ABC):
    """
    Abstract base class for schedule stores.

    Subclasses provide the record container; validation, id generation and
    partial updates are shared here.
    """

    @abstractmethod
    def _records(self) -> list[ScheduleRecord]:
        """The live, ordered record list."""
        pass

    @abstractmethod
    def _persist(self) -> None:
        """Write the record list wherever the store keeps it."""
        pass

    def list(self) -> list[ScheduleRecord]:
        """Snapshot of all schedules in insertion order."""
        return list(self._records())

    def get(self, schedule_id: str) -> ScheduleRecord:
        for record in self._records():
            if record.id == schedule_id:
                return record
        raise ScheduleNotFoundError(schedule_id)

    def _index_of(self, schedule_id: str) -> int:
        for i, record in enumerate(self._records()):
            if record.id == schedule_id:
                return i
        raise ScheduleNotFoundError(schedule_id)

    def create(self, fields: dict[str, Any]) -> ScheduleRecord:
        """
        Validate and add a new schedule with a generated identifier.

        Raises:
            ScheduleValidationError: if the fields are invalid.
            ValueError: for unknown field names.
        """
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown schedule fields: {', '.join(sorted(unknown))}")
        values = {name: fields.get(name) for name in EDITABLE_FIELDS}
        validate_schedule_fields(values)

        record = ScheduleRecord(id=str(uuid.uuid4()), **values)
        self._records().append(record)
        self._persist()
        _debug_print(f"Created schedule {record.id} ({record.title})")
        return record

    def update(self, schedule_id: str, changes: dict[str, Any]) -> ScheduleRecord:
        """
        Replace some fields of an existing schedule. The identifier never changes.

        Raises:
            ScheduleNotFoundError: if no schedule has this id.
            ScheduleValidationError: if the merged record is invalid.
            ValueError: on an attempt to change the id or unknown fields.
        """
        changes = dict(changes)
        if "id" in changes:
            if changes.pop("id") != schedule_id:
                raise ValueError("Schedule id is immutable")
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown schedule fields: {', '.join(sorted(unknown))}")

        index = self._index_of(schedule_id)
        records = self._records()
        updated = records[index].with_changes(changes)
        validate_schedule_fields(updated.editable_fields())

        records[index] = updated
        self._persist()
        _debug_print(f"Updated schedule {schedule_id}: {sorted(changes)}")
        return updated

    def delete(self, schedule_id: str) -> None:
        index = self._index_of(schedule_id)
        del self._records()[index]
        self._persist()
        _debug_print(f"Deleted schedule {schedule_id}")


class InMemoryScheduleStore(ScheduleStore):
    """Store that keeps records only for the lifetime of the process."""

    def __init__(self, records: Optional[list[ScheduleRecord]] = None):
        self._items: list[ScheduleRecord] = list(records or [])

    def _records(self) -> list[ScheduleRecord]:
        return self._items

    def _persist(self) -> None:
        pass


class JsonScheduleStore(ScheduleStore):
    """
    JSON file-based schedule store.

    Structure of the file:
        {"updated": "<iso timestamp>", "schedules": [{"id": ..., "courseCode": ...}, ...]}
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._items: list[ScheduleRecord] = self._load()
        _debug_print(f"Initialized JSON store at {self.path} ({len(self._items)} schedules)")

    def _load(self) -> list[ScheduleRecord]:
        if not self.path.exists():
            return []

        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}, got {type(data).__name__}")

        records = []
        for item in data.get("schedules", []):
            try:
                record = ScheduleRecord.from_dict(item)
                validate_schedule_fields(record.editable_fields())
                records.append(record)
            except (KeyError, TypeError, ScheduleValidationError) as e:
                _debug_print(f"Skipping malformed schedule {item!r}: {e}")
        return records

    def reload(self) -> int:
        """Re-read the file, discarding in-memory state. Returns the record count."""
        self._items = self._load()
        return len(self._items)

    def _records(self) -> list[ScheduleRecord]:
        return self._items

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "updated": datetime.now().isoformat(),
            "schedules": [record.to_dict() for record in self._items],
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)
        _debug_print(f"Saved {len(self._items)} schedules to {self.path}")


def get_default_storage_path() -> Path:
    """Get the default schedule file path respecting XDG."""
    xdg_data = os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share'))
    return Path(xdg_data) / 'class-timetable' / 'schedules.json'


def create_schedule_store(path: Optional[Path] = None) -> ScheduleStore:
    """Factory function to create the schedule store."""
    if path is None:
        path = get_default_storage_path()
    return JsonScheduleStore(path)
