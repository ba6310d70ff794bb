# stockroom/inventory_domain/infrastructure/live_queries/snapshot_listener.py
"""Live queries: re-run a store query on a schedule and push the full result to subscribers."""

import logging
from typing import Any, Callable

import schedule

from stockroom.common.exceptions.custom_exceptions import ApplicationError

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Any], None]
ErrorCallback = Callable[[Exception], None]


class SnapshotListener:
    """
    A named query whose whole result is delivered to every subscriber on each poll.

    Subscribers replace their state with what they receive; nothing is diffed.
    A failing fetch is logged and reported to the error callbacks, and the
    previous state stays in place until a later poll succeeds.
    """

    def __init__(self, name: str, fetch: Callable[[], Any]) -> None:
        self.name = name
        self.fetch = fetch
        self._subscribers: list[tuple[SnapshotCallback, ErrorCallback | None]] = []

    def subscribe(self, on_snapshot: SnapshotCallback, on_error: ErrorCallback | None = None) -> Callable[[], None]:
        """Registers a subscriber, delivers the current snapshot to it, and returns an unsubscribe callable."""
        entry = (on_snapshot, on_error)
        self._subscribers.append(entry)
        self._deliver([entry])

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def poll(self) -> None:
        """Runs the query once and pushes the result to all subscribers."""
        if self._subscribers:
            self._deliver(list(self._subscribers))

    def _deliver(self, subscribers: list[tuple[SnapshotCallback, ErrorCallback | None]]) -> None:
        try:
            snapshot = self.fetch()
        except (ApplicationError, ValueError) as e:
            logger.error(f"Error fetching {self.name}: {e}")
            for _, on_error in subscribers:
                if on_error:
                    on_error(e)
            return

        for on_snapshot, _ in subscribers:
            on_snapshot(snapshot)


class LiveQueryScheduler:
    """Polls a set of listeners at a fixed interval using its own schedule.Scheduler."""

    def __init__(self, interval_seconds: int, scheduler: schedule.Scheduler | None = None) -> None:
        self.interval_seconds = interval_seconds
        self.scheduler = scheduler or schedule.Scheduler()
        self.listeners: dict[str, SnapshotListener] = {}

    def register(self, listener: SnapshotListener) -> SnapshotListener:
        self.listeners[listener.name] = listener
        self.scheduler.every(self.interval_seconds).seconds.do(listener.poll).tag(listener.name)
        logger.info(f"Live query '{listener.name}' polling every {self.interval_seconds}s")
        return listener

    def unregister(self, name: str) -> None:
        self.scheduler.clear(name)
        self.listeners.pop(name, None)

    def run_pending(self) -> None:
        self.scheduler.run_pending()

    def poll_all(self) -> None:
        """Polls every listener immediately, regardless of the schedule."""
        for listener in self.listeners.values():
            listener.poll()
