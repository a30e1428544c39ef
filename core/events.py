"""
Snapshot publishing.

Stateful components (favorites repository, location session, map controller)
emit an immutable snapshot after each mutation; consumers subscribe and
re-render on receipt.
"""

from typing import Callable, Generic, List, Optional, TypeVar
import logging

SnapshotType = TypeVar("SnapshotType")
Listener = Callable[[SnapshotType], None]

logger = logging.getLogger("besteats.events")


class EventChannel(Generic[SnapshotType]):
    """Ordered fan-out of snapshots to subscribed listeners"""

    def __init__(self, name: str):
        self.name = name
        self._listeners: List[Listener] = []
        self.last: Optional[SnapshotType] = None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, snapshot: SnapshotType) -> None:
        self.last = snapshot
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Listener failed on channel %s", self.name)

    def __len__(self) -> int:
        return len(self._listeners)
