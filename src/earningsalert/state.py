"""State backends for notified-event keys — JSON file (disk) and Memory."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path

from earningsalert.errors import PersistenceError
from earningsalert.models.notification import NotificationRecord, NotificationState

logger = logging.getLogger(__name__)


class StateStore(ABC):
    """Abstract durable key-set of already-notified events.

    A store is owned by one run at a time; there is no locking, so two
    overlapping runs against the same backend can double-send.
    """

    @abstractmethod
    def load(self) -> NotificationState:
        """Return persisted state, or an empty state if none is usable. Never raises."""
        ...

    @abstractmethod
    def save(self, state: NotificationState) -> None:
        """Replace persisted state with ``state``.

        Raises:
            PersistenceError: The state could not be written.
        """
        ...


class MemoryStateStore(StateStore):
    """In-process store. Keeps a snapshot of the last saved records."""

    def __init__(self, records: list[NotificationRecord] | None = None) -> None:
        self._records: list[NotificationRecord] = list(records or [])
        self.save_count = 0

    def load(self) -> NotificationState:
        return NotificationState(self._records)

    def save(self, state: NotificationState) -> None:
        self._records = list(state)
        self.save_count += 1

    @property
    def records(self) -> list[NotificationRecord]:
        return list(self._records)


class JsonStateStore(StateStore):
    """Disk store: a JSON array of ``{"symbol", "date"}`` objects.

    Writes go to a sibling ``.tmp`` file which is fsynced and then renamed
    over the target, so readers see either the old or the new file.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> NotificationState:
        if not self.path.exists():
            logger.info("No state file at %s, starting empty", self.path)
            return NotificationState()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable state file %s, starting empty: %s", self.path, exc)
            return NotificationState()

        if not isinstance(raw, list):
            logger.warning(
                "Malformed state file %s (expected a list, got %s), starting empty",
                self.path,
                type(raw).__name__,
            )
            return NotificationState()

        state = NotificationState()
        for entry in raw:
            try:
                record = NotificationRecord.from_dict(entry)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping bad state entry %r: %s", entry, exc)
                continue
            state.add(record)

        logger.debug("Loaded %d records from %s", len(state), self.path)
        return state

    def save(self, state: NotificationState) -> None:
        logger.info("Saving state to %s", self.path)
        t0 = time.monotonic()
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(state.to_list(), f, indent=2)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            raise PersistenceError(
                f"Could not write state to {self.path}: {exc}"
            ) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000
        logger.info("State saved in %.0f ms", elapsed_ms)
