from loguru import logger
from typing import Callable, List, Optional


class Subscription:
    """
    Owned handle for a single Signal connection.

    Disposing the handle disconnects the callback. Disposal is idempotent,
    so owners can release all of their handles on teardown without
    tracking which ones are still live.
    """
    def __init__(self, signal: "Signal", callback: Callable):
        self._signal: Optional["Signal"] = signal
        self.callback = callback

    @property
    def active(self) -> bool:
        return self._signal is not None and self.callback in self._signal._subscribers

    def dispose(self):
        if self._signal is None:
            return
        self._signal.disconnect(self.callback)
        self._signal = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()


class CompositeSubscription:
    """A bag of subscriptions released together."""
    def __init__(self):
        self._items: List[Subscription] = []

    def add(self, subscription: Subscription) -> Subscription:
        self._items.append(subscription)
        return subscription

    def dispose(self):
        items, self._items = self._items, []
        for item in items:
            item.dispose()

    def __len__(self):
        return len(self._items)


class Signal:
    """
    A simple observer pattern implementation (Synchronous).
    Allows subscribers to connect to this signal and receive notifications.
    Equivalent to Qt's Signal or C#'s event.
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._subscribers: List[Callable] = []

    def connect(self, callback: Callable) -> Subscription:
        """Connect a callback function to this signal and return its handle."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return Subscription(self, callback)

    def disconnect(self, callback: Callable):
        """Disconnect a callback function from this signal."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self, *args, **kwargs):
        """Broadcast arguments to all subscribers synchronously."""
        # Subscribers may disconnect while being notified
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")
