from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from models.item import is_valid_item_id

log = logging.getLogger(__name__)


class DedupStoreError(Exception):
    """Base class for failures that make dedup state untrustworthy."""


class CorruptStateError(DedupStoreError):
    """The state file exists but does not hold a list of post ids."""


class StorageError(DedupStoreError):
    """Reading or writing the state file failed at the OS level."""


class DeduplicationStore:
    """Durable set of post ids that have already been relayed.

    The set only ever grows. It lives in memory for the lifetime of the
    process and is written back as a JSON array whenever a cycle added
    at least one id. Writes go to a temporary file first and are moved
    into place with ``os.replace`` so a crash never leaves a truncated file.
    """

    def __init__(self, path: Path, seen: set[int] | None = None) -> None:
        self._path = Path(path)
        self._seen: set[int] = set(seen or ())
        self._dirty = False

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> "DeduplicationStore":
        """Read the state file, or start empty when there is none yet."""
        path = Path(path)
        if not path.exists():
            log.info("No dedup state at %s, starting empty", path)
            return cls(path)

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read dedup state {path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise CorruptStateError(f"Dedup state {path} is not valid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise CorruptStateError(
                f"Dedup state {path} must be a JSON array, got {type(data).__name__}"
            )

        seen: set[int] = set()
        for value in data:
            if not is_valid_item_id(value):
                raise CorruptStateError(
                    f"Dedup state {path} holds a non-id entry: {value!r}"
                )
            seen.add(value)

        log.info("Loaded %d relayed id(s) from %s", len(seen), path)
        return cls(path, seen)

    @property
    def size(self) -> int:
        return len(self._seen)

    @property
    def dirty(self) -> bool:
        """True while there are inserts that have not been persisted."""
        return self._dirty

    def contains(self, item_id: int) -> bool:
        return item_id in self._seen

    def insert(self, item_id: int) -> bool:
        """Add ``item_id``; return True only the first time it is added."""
        if item_id in self._seen:
            return False
        self._seen.add(item_id)
        self._dirty = True
        return True

    def snapshot(self) -> frozenset[int]:
        return frozenset(self._seen)

    def persist(self) -> None:
        """Overwrite the state file with the full set, atomically."""
        payload = json.dumps(sorted(self._seen))
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write dedup state {self._path}: {exc}") from exc

        self._dirty = False
        log.debug("Persisted %d relayed id(s) to %s", len(self._seen), self._path)
