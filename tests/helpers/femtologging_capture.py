"""Capture femtologging output in tests.

femtologging delivers records on a worker thread, so assertions wait for
the expected number of records instead of reading them immediately.
"""

from __future__ import annotations

import contextlib
import dataclasses
import threading
import time
import typing as typ

from femtologging import get_logger


@dataclasses.dataclass(slots=True)
class CapturedRecord:
    """One captured log record."""

    logger: str
    level: str
    message: str


class FemtoLogCapture:
    """femtologging handler storing records for assertions."""

    def __init__(self) -> None:
        self.records: list[CapturedRecord] = []
        self._condition = threading.Condition()

    def handle(self, logger: str, level: str, message: str) -> None:
        """Store a record delivered by the femtologging worker."""
        with self._condition:
            self.records.append(
                CapturedRecord(logger=str(logger), level=str(level), message=message)
            )
            self._condition.notify_all()

    def wait_for_count(self, count: int, timeout: float = 1.0) -> None:
        """Block until ``count`` records arrived, then assert they did."""
        deadline = time.monotonic() + timeout
        with self._condition:
            while len(self.records) < count:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self._condition.wait(timeout=remaining)

        assert len(self.records) >= count, (
            f"Expected {count} records, got {len(self.records)}"
        )


@contextlib.contextmanager
def capture_femto_logs(
    logger_name: str,
    *,
    level: str = "TRACE",
) -> typ.Iterator[FemtoLogCapture]:
    """Attach a capturing handler to ``logger_name`` for the block."""
    logger = get_logger(logger_name)
    previous_level = logger.level
    previous_propagate = logger.propagate

    logger.set_level(level)
    logger.set_propagate(False)
    handler = FemtoLogCapture()
    logger.add_handler(handler)
    try:
        yield handler
    finally:
        logger.remove_handler(handler)
        logger.set_level(previous_level)
        logger.set_propagate(previous_propagate)
