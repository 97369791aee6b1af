"""
Whole-file JSON collections.

Each collection is a pretty-printed JSON array of record objects on disk.
A missing file is an empty collection and is created on first read. Every
mutation is a full read-modify-write done inside ``transaction()``.
"""
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

from rxdesk.exceptions import StorageError

logger = logging.getLogger(__name__)


class JsonCollection:
    """One JSON array file plus the lock guarding its read-modify-write."""

    def __init__(self, path, name: str = None):
        self.path = Path(path)
        self.name = name or self.path.stem
        self._lock = threading.RLock()

    def __repr__(self):
        return f"<JsonCollection {self.name} ({self.path})>"

    def load(self) -> List[Dict[str, Any]]:
        """Read the full collection, creating an empty file if none exists."""
        with self._lock:
            if not self.path.exists():
                logger.info(f"Creating empty {self.name} collection at {self.path}")
                self.save([])
                return []
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                logger.error(f"{self.path} is corrupted: {e}")
                raise StorageError(f"Failed to read {self.name}: file is not valid JSON") from e
            except OSError as e:
                logger.error(f"Cannot read {self.path}: {e}")
                raise StorageError(f"Failed to read {self.name}: {e.strerror or e}") from e

            if not isinstance(data, list):
                raise StorageError(f"Failed to read {self.name}: expected a JSON array")
            return data

    def save(self, records: List[Dict[str, Any]]) -> None:
        """Replace the collection on disk.

        The new content is written to a sibling temp file and moved over the
        old one, so a failed write leaves the previous collection intact.
        """
        with self._lock:
            tmp_path = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(
                    dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix='.tmp'
                )
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(records, f, indent=2, ensure_ascii=False)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
                tmp_path = None
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Cannot write {self.path}: {e}")
                raise StorageError(f"Failed to write {self.name}: {e}") from e
            finally:
                if tmp_path and os.path.exists(tmp_path):
                    os.remove(tmp_path)

    @contextmanager
    def transaction(self) -> Iterator[List[Dict[str, Any]]]:
        """Hold the collection lock for a load-modify-save sequence.

        Yields the loaded records; callers mutate the list and call
        ``save`` before leaving the block.
        """
        with self._lock:
            yield self.load()
