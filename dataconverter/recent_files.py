"""
Recent file operations history.

A short, capped list of the latest conversions and tool runs. Persistence
is injected so the same store works in memory (tests, one-off runs) or
backed by a JSON file.
"""

import json
import logging
import os
import time
import uuid
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class RecentFile:
    """One entry in the history."""
    id: str
    file_name: str
    operation: str  # e.g. "json-to-csv", "pdf-dark-mode"
    operation_label: str  # Human-readable, e.g. "JSON to CSV"
    timestamp: float  # Seconds since the epoch
    output_format: Optional[str] = None
    output_path: Optional[str] = None  # Current session only, never persisted

    def to_record(self) -> dict:
        record = asdict(self)
        record.pop("output_path")
        return record

    @classmethod
    def from_record(cls, record: dict) -> "RecentFile":
        return cls(
            id=str(record["id"]),
            file_name=str(record["file_name"]),
            operation=str(record["operation"]),
            operation_label=str(record.get("operation_label", record["operation"])),
            timestamp=float(record["timestamp"]),
            output_format=record.get("output_format"),
        )


class MemoryStorage:
    """Keeps serialized records in memory."""

    def __init__(self, records: Optional[list] = None):
        self._records = records

    def load(self) -> Optional[list]:
        return self._records

    def save(self, records: list) -> None:
        self._records = records

    def clear(self) -> None:
        self._records = None


class JSONFileStorage:
    """Keeps serialized records in a JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Optional[list]:
        if not self.path.exists():
            return None
        return json.loads(self.path.read_text(encoding="utf-8"))

    def save(self, records: list) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class RecentFilesStore:
    """
    Capped, de-duplicated history of recent file operations.

    Newest entries come first. Adding an entry with the same file name
    and operation as an existing one replaces it, and the oldest entries
    are evicted once the cap is reached.
    """

    MAX_ITEMS = 5
    DEFAULT_HISTORY_PATH = Path.home() / ".dataconverter" / "recent_files.json"

    def __init__(self, storage=None, max_items: int = MAX_ITEMS):
        """
        Initialize the store and load any persisted history.

        Args:
            storage: Object with load()/save()/clear(); defaults to memory.
            max_items: Maximum number of entries kept.
        """
        if max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")

        self.storage = storage if storage is not None else MemoryStorage()
        self.max_items = max_items
        self._files: list[RecentFile] = self._load()

    @property
    def files(self) -> list[RecentFile]:
        return list(self._files)

    @property
    def has_history(self) -> bool:
        return bool(self._files)

    def add(
        self,
        file_name: str,
        operation: str,
        operation_label: str,
        output_format: Optional[str] = None,
    ) -> str:
        """Record an operation and return the new entry's id."""
        now = time.time()
        entry = RecentFile(
            id=f"{int(now * 1000)}-{uuid.uuid4().hex[:9]}",
            file_name=file_name,
            operation=operation,
            operation_label=operation_label,
            timestamp=now,
            output_format=output_format,
        )

        remaining = [
            f for f in self._files
            if not (f.file_name == file_name and f.operation == operation)
        ]
        self._files = [entry] + remaining[: self.max_items - 1]
        self._save()
        return entry.id

    def update_output_path(self, file_id: str, output_path: str) -> None:
        for entry in self._files:
            if entry.id == file_id:
                entry.output_path = output_path

    def remove(self, file_id: str) -> None:
        self._files = [f for f in self._files if f.id != file_id]
        self._save()

    def clear(self) -> None:
        self._files = []
        self._save()

    def _load(self) -> list[RecentFile]:
        try:
            records = self.storage.load()
            if records is None:
                return []
            if not isinstance(records, list):
                raise ValueError("history is not a list")
            files = [RecentFile.from_record(r) for r in records]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding unreadable recent files history: %s", e)
            self._discard()
            return []

        return files[: self.max_items]

    def _discard(self) -> None:
        try:
            self.storage.clear()
        except OSError as e:
            logger.warning("Could not clear recent files history: %s", e)

    def _save(self) -> None:
        try:
            self.storage.save([f.to_record() for f in self._files])
        except OSError as e:
            logger.warning("Could not save recent files history: %s", e)


def format_relative_time(timestamp: float, lang: str = "en", now: Optional[float] = None) -> str:
    """Short relative age of a history entry, e.g. "5m ago"."""
    now = time.time() if now is None else now
    seconds = int(now - timestamp)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if lang == "fr":
        if seconds < 60:
            return "À l'instant"
        if minutes < 60:
            return f"Il y a {minutes} min"
        if hours < 24:
            return f"Il y a {hours}h"
        if days == 1:
            return "Hier"
        return f"Il y a {days}j"

    if seconds < 60:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days == 1:
        return "Yesterday"
    return f"{days}d ago"
