"""Port for reporting batch comparison progress."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressReporter(Protocol):
    """Receives progress updates from a batch run.

    Implementations must be safe to call from whichever thread drives the batch.
    """

    def report(self, processed: int, total: int) -> None: ...
