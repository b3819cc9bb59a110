"""
Station change feed

Push-style notification of station document changes. A view subscribes to
one station and receives every ``added`` / ``modified`` / ``removed`` event
until it disposes its subscription.

Publishers may run on any thread (sync routes execute in the thread pool);
delivery is always scheduled onto the subscriber's own event loop so that
callbacks interleave with the rest of that view's I/O in publish order.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

ADDED = "added"
MODIFIED = "modified"
REMOVED = "removed"


@dataclass(frozen=True)
class StationChange:
    station_id: str
    kind: str
    # serialized station for added/modified, None for removed
    station: Optional[Dict[str, Any]] = None


@dataclass(eq=False)
class Subscription:
    """Handle returned by ``ChangeFeed.subscribe``; closing it stops delivery."""

    feed: "ChangeFeed"
    station_id: Optional[str]
    callback: Callable[[StationChange], Any]
    loop: asyncio.AbstractEventLoop
    closed: bool = field(default=False)

    def close(self):
        if not self.closed:
            self.closed = True
            self.feed._remove(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class ChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: List[Subscription] = []

    def subscribe(
        self,
        station_id: Optional[str],
        callback: Callable[[StationChange], Any],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> Subscription:
        """Register ``callback`` for changes to ``station_id`` (None = every station).

        Must be called from the event loop that should run the callback
        unless ``loop`` is given explicitly.
        """
        if loop is None:
            loop = asyncio.get_running_loop()
        subscription = Subscription(self, station_id, callback, loop)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug(f"Subscribed to station changes for {station_id or 'all stations'}")
        return subscription

    def _remove(self, subscription: Subscription):
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
        logger.debug(f"Unsubscribed from station changes for {subscription.station_id or 'all stations'}")

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, change: StationChange):
        with self._lock:
            targets = [
                s for s in self._subscriptions
                if s.station_id is None or s.station_id == change.station_id
            ]
        for subscription in targets:
            try:
                subscription.loop.call_soon_threadsafe(self._deliver, subscription, change)
            except RuntimeError:
                # the subscriber's loop has shut down
                logger.warning(f"Dropping subscription for {subscription.station_id}: event loop closed")
                subscription.close()

    @staticmethod
    def _deliver(subscription: Subscription, change: StationChange):
        if subscription.closed:
            return
        try:
            subscription.callback(change)
        except Exception:
            logger.exception(f"Station change callback failed for {change.station_id}")
