"""Process registry: the table of every process launched in this run."""

from __future__ import annotations

import itertools
import uuid
from collections.abc import Callable

from react_mcp.errors import ProcessNotFound
from react_mcp.process_manager.models import ProcessRecord

IdGenerator = Callable[[], str]


def random_ids() -> IdGenerator:
    """Short random identifiers, e.g. ``"3f9c0a1b2d4e"``."""
    return lambda: uuid.uuid4().hex[:12]


def counter_ids(prefix: str = "proc-") -> IdGenerator:
    """Deterministic identifiers: ``proc-1``, ``proc-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


class ProcessRegistry:
    """Insertion-ordered store of :class:`ProcessRecord` objects.

    Records are never removed, so finished processes stay visible for the
    lifetime of the supervisor.  All access happens on the event loop
    thread, which is what keeps reads and writes from interleaving.
    """

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self._next_id = id_generator or random_ids()
        self._records: dict[str, ProcessRecord] = {}

    def register(self, record: ProcessRecord) -> str:
        process_id = self._next_id()
        while process_id in self._records:
            process_id = self._next_id()
        record.id = process_id
        self._records[process_id] = record
        return process_id

    def get(self, process_id: str) -> ProcessRecord:
        try:
            return self._records[process_id]
        except KeyError:
            raise ProcessNotFound(process_id) from None

    def list(self) -> list[ProcessRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, process_id: object) -> bool:
        return process_id in self._records
