"""
Event System - Synchronous observer signals.

Provides:
- Signal: observer pattern for sync notifications (property and collection changes)
- Subscription: owned unsubscribe handle returned by Signal.connect
- CompositeSubscription: several handles released together

Usage:
    from vmkit.core.events import Signal

    changed = Signal("changed")
    handle = changed.connect(on_changed)
    changed.emit("name", "Alice")
    handle.dispose()
"""
from .observer import Signal, Subscription, CompositeSubscription


__all__ = ["Signal", "Subscription", "CompositeSubscription"]
