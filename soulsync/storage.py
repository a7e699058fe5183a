"""JSON file helpers shared by the file-backed stores.

Each store keeps its records in one or more JSON files under its
``base_dir``.  A :class:`JsonFile` pairs a path with a re-entrant lock so a
read-modify-write cycle (:meth:`JsonFile.transaction`) is atomic within the
process.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator

from soulsync.config import get_settings


def safe_filename(name: str) -> str:
    """Sanitise a name for use as part of a filename."""
    return re.sub(r"[^\w\-.]", "_", name)


def resolve_base_dir(base_dir: str | Path | None, name: str) -> Path:
    """Return *base_dir*, or ``<SOULSYNC_HOME>/<name>`` when it is None, created."""
    base = Path(base_dir) if base_dir else get_settings().data_dir(name)
    base.mkdir(parents=True, exist_ok=True)
    return base


class JsonFile:
    """A JSON document on disk guarded by a lock."""

    def __init__(self, path: Path, default: Callable[[], Any] = list) -> None:
        self.path = path
        self._default = default
        self.lock = threading.RLock()

    def read(self) -> Any:
        with self.lock:
            if not self.path.exists():
                return self._default()
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError):
                return self._default()
            expected = type(self._default())
            return data if isinstance(data, expected) else self._default()

    def write(self, data: Any) -> None:
        with self.lock:
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2, default=str, ensure_ascii=False)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """Yield the current document; it is written back if the block succeeds."""
        with self.lock:
            data = self.read()
            yield data
            self.write(data)
