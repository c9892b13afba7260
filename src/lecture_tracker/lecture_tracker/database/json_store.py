from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from ..common.validators import normalize_code
from ..core.constants import LECTURES_FILE, SCHEDULES_FILE, SUBJECTS_FILE, TASKS_FILE
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)

SUBJECTS = "subjects"
LECTURES = "lectures"
SCHEDULES = "weekly_schedules"
TASKS = "tasks"

_FILES = {
    SUBJECTS: SUBJECTS_FILE,
    LECTURES: LECTURES_FILE,
    SCHEDULES: SCHEDULES_FILE,
    TASKS: TASKS_FILE,
}

Record = Dict[str, Any]


class JsonCollections:
    """The four id-keyed collections, as seen inside a transaction.

    Records are plain JSON dicts; they are replaced, never mutated in place, so
    a shallow copy of each collection is a complete snapshot.
    """

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Record]] = {name: {} for name in _FILES}
        self.dirty = False

    def get(self, name: str) -> dict[str, Record]:
        return self._data[name]

    def put(self, name: str, record: Record) -> None:
        self._data[name][str(record["id"])] = dict(record)
        self.dirty = True

    def remove(self, name: str, record_id: str) -> bool:
        if self._data[name].pop(record_id, None) is None:
            return False
        self.dirty = True
        return True

    def snapshot(self) -> dict[str, dict[str, Record]]:
        return {name: dict(items) for name, items in self._data.items()}

    def restore(self, snapshot: dict[str, dict[str, Record]]) -> None:
        self._data = snapshot


class JsonFileDatabase:
    """In-memory store persisted as flat JSON files (one per collection).

    Note: one re-entrant lock serializes every read and write. With
    ``data_dir=None`` nothing touches the disk (used by tests).
    """

    def __init__(self, data_dir: Optional[str | os.PathLike[str]] = None):
        self._data_dir = Path(data_dir) if data_dir else None
        self._lock = threading.RLock()
        self._depth = 0
        self._collections = JsonCollections()
        if self._data_dir is not None:
            self._load(self._data_dir)

    @property
    def data_dir(self) -> Optional[Path]:
        return self._data_dir

    @contextmanager
    def transaction(self) -> Iterator[JsonCollections]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield self._collections
                finally:
                    self._depth -= 1
                return

            snapshot = self._collections.snapshot()
            self._collections.dirty = False
            self._depth = 1
            try:
                yield self._collections
                if self._collections.dirty:
                    self._flush()
            except BaseException:
                self._collections.restore(snapshot)
                raise
            finally:
                self._collections.dirty = False
                self._depth = 0

    def _load(self, data_dir: Path) -> None:
        for name, filename in _FILES.items():
            path = data_dir / filename
            if not path.exists():
                continue
            try:
                rows = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise StorageError(f"Cannot read {path}: {exc}") from exc
            if not isinstance(rows, list):
                raise StorageError(f"Cannot read {path}: expected a JSON list")

            seen_codes: set[str] = set()
            for row in rows:
                if name == SUBJECTS:
                    code_key = normalize_code(row.get("code"))
                    if code_key and code_key in seen_codes:
                        logger.warning("Dropping subject %s: duplicate code %r", row.get("id"), row.get("code"))
                        continue
                    if code_key:
                        seen_codes.add(code_key)
                self._collections.get(name)[str(row["id"])] = row

        logger.info(
            "Loaded data from %s (%s)",
            data_dir,
            ", ".join(f"{name}={len(self._collections.get(name))}" for name in _FILES),
        )

    def _flush(self) -> None:
        if self._data_dir is None:
            return
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            for name, filename in _FILES.items():
                rows = list(self._collections.get(name).values())
                _write_atomic(self._data_dir / filename, json.dumps(rows, indent=2, ensure_ascii=False))
        except OSError as exc:
            logger.error("Saving data to %s failed: %s", self._data_dir, exc)
            raise StorageError(f"Saving data failed: {exc}") from exc


def _write_atomic(path: Path, text: str) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
