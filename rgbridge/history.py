"""Persisted search history.

A JSON list in <directory>/search_history.json, newest first, capped at
MAX_HISTORY_COUNT entries. A search is recorded once: repeating the same
pattern, path and options does not add a second entry.
"""

import json
import logging
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rgbridge.constants import HISTORY_FILE_NAME, MAX_HISTORY_COUNT, MAX_HISTORY_DAYS
from rgbridge.primitives.errors import HistoryError
from rgbridge.search.models import SearchRequest
from rgbridge.utils.path_utils import ensure_directory, get_config_dir

logger = logging.getLogger(__name__)

_DAY_MS = 24 * 60 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class SearchHistoryEntry:
    """One recorded search.

    Attributes:
        id: Unique id (creation time in ms, as a string).
        pattern: Search pattern.
        path: Root path searched.
        options: SearchRequest.options() at the time of the search.
        timestamp: Creation time, epoch milliseconds.
    """

    id: str
    pattern: str
    path: str
    options: Dict[str, Any] = field(default_factory=dict)
    timestamp: int = 0

    def matches(self, request: SearchRequest) -> bool:
        return (
            self.pattern == request.pattern
            and self.path == request.root_path
            and self.options == request.options()
        )

    def to_request(self) -> SearchRequest:
        return SearchRequest.from_options(self.path, self.pattern, self.options)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchHistoryEntry":
        return cls(
            id=str(data["id"]),
            pattern=data["pattern"],
            path=data["path"],
            options=dict(data.get("options") or {}),
            timestamp=int(data.get("timestamp", 0)),
        )


class SearchHistory:
    """Search history backed by a JSON file."""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory else get_config_dir()
        self.entries: List[SearchHistoryEntry] = []

    @property
    def path(self) -> Path:
        return self.directory / HISTORY_FILE_NAME

    def load(self) -> List[SearchHistoryEntry]:
        """Load entries from disk. A missing or corrupt file gives an empty history."""
        if not self.path.exists():
            logger.debug("No history file at %s", self.path)
            self.entries = []
            return self.entries

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError("history file must hold a JSON list")
            self.entries = [SearchHistoryEntry.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load search history %s: %s", self.path, e)
            self.entries = []
        return self.entries

    def save(self) -> Path:
        """Write entries to disk.

        Raises:
            HistoryError: If the directory or file cannot be written.
        """
        try:
            ensure_directory(self.directory)
            content = json.dumps([e.to_dict() for e in self.entries], indent=2)
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise HistoryError(f"Failed to save search history: {e}", path=str(self.path))
        return self.path

    def add(self, request: SearchRequest, now: Optional[int] = None) -> bool:
        """Record a search. Returns False if an identical one is already recorded."""
        if any(entry.matches(request) for entry in self.entries):
            return False

        timestamp = now if now is not None else _now_ms()
        entry = SearchHistoryEntry(
            id=str(timestamp),
            pattern=request.pattern,
            path=request.root_path,
            options=request.options(),
            timestamp=timestamp,
        )
        self.entries.insert(0, entry)
        del self.entries[MAX_HISTORY_COUNT:]
        self.save()
        return True

    def get(self, entry_id: str) -> Optional[SearchHistoryEntry]:
        return next((e for e in self.entries if e.id == entry_id), None)

    def clear(self) -> None:
        self.entries = []
        self.save()

    def cleanup(self, max_days: int = MAX_HISTORY_DAYS, now: Optional[int] = None) -> int:
        """Drop entries older than max_days and trim to MAX_HISTORY_COUNT.

        Returns:
            Number of entries removed. The file is only rewritten if > 0.
        """
        now = now if now is not None else _now_ms()
        max_age = max_days * _DAY_MS

        kept = [e for e in self.entries if now - e.timestamp < max_age]
        kept = kept[:MAX_HISTORY_COUNT]

        removed = len(self.entries) - len(kept)
        if removed:
            self.entries = kept
            self.save()
            logger.info("Search history cleaned, %d entries left", len(kept))
        return removed

    def relocate(self, directory: Optional[str]) -> Tuple[bool, str]:
        """Move the history file to another directory.

        Blank or None switches back to the default directory. Otherwise
        the directory is created if needed and checked for write access
        before switching.

        Returns:
            (success, message)
        """
        target = directory.strip() if directory else ""
        if not target:
            self.directory = get_config_dir()
            try:
                self.save()
            except HistoryError as e:
                return False, str(e)
            return True, f"Using default history directory {self.directory}"

        new_dir = Path(target).expanduser()
        probe = new_dir / ".temp-write-test"
        try:
            ensure_directory(new_dir)
            probe.write_text("test", encoding="utf-8")
            probe.unlink()
        except OSError as e:
            logger.error("History directory %s is not writable: %s", new_dir, e)
            return False, f"Failed to set history directory: {e}"

        self.directory = new_dir
        try:
            self.save()
        except HistoryError as e:
            return False, str(e)
        return True, f"History directory set to {new_dir}"
