"""Serialise rebuilds triggered by file-change events."""

from __future__ import annotations

import threading
from typing import Callable

from ..logging import get_logger


class RebuildGate:
    """Run ``action`` for each trigger without ever overlapping two runs.

    A trigger arriving while a run is in flight is coalesced: the running
    trigger repeats the action once more after it finishes. Failures are
    logged and never escape, so the watch loop keeps serving.
    """

    def __init__(self, name: str, action: Callable[[], object]) -> None:
        self.name = name
        self._action = action
        self._state = threading.Lock()
        self._running = False
        self._pending = False
        self.logger = get_logger("serve.gate")

    def trigger(self) -> bool:
        """Return True when this call performed the rebuild itself."""
        with self._state:
            if self._running:
                self._pending = True
                self.logger.debug("%s rebuild already running; queued another pass", self.name)
                return False
            self._running = True

        while True:
            self._run_once()
            with self._state:
                if not self._pending:
                    self._running = False
                    return True
                self._pending = False

    def __call__(self) -> None:
        self.trigger()

    def _run_once(self) -> None:
        try:
            self._action()
        except Exception as exc:
            self.logger.error("%s rebuild failed: %s", self.name, exc)
            self.logger.debug("%s rebuild traceback", self.name, exc_info=True)


__all__ = ["RebuildGate"]
