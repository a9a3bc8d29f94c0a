"""
Progress events.

The orchestrator publishes ProgressEvents; UIs and the CLI subscribe.
Delivery is synchronous and advisory: a subscriber that raises is logged
and skipped, and never interrupts the run.
"""

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

EMBEDDING_PHASE = "embedding"
EXTRACTION_PHASE = "extraction"


@dataclass(frozen=True)
class ProgressEvent:
    """
    One progress update.

    phase: "embedding" or "extraction"
    label: human-readable step ("Generating embeddings", a metric label)
    percent: 0-100, non-decreasing within a phase
    """
    phase: str
    label: str
    percent: int


ProgressCallback = Callable[[ProgressEvent], None]


class ProgressEmitter:
    """Fan-out of progress events to subscribed callbacks."""

    def __init__(self) -> None:
        self._subscribers: list[ProgressCallback] = []

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """Register a callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, event: ProgressEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                logger.warning(f"Progress subscriber failed on {event.phase} event: {e}")
