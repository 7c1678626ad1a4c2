"""
StaleMonitor - dirty-state tracking for ViewModels.

Captures the values of declared properties and collections of a
ViewModel and reports whether any of them changed since the last capture.
Used to warn the user about pending changes before a form is dismissed.

Nested ViewModels (a property holding a stale-monitored ViewModel, or
such items inside a tracked collection) propagate their staleness upward
through `property_changed("is_stale", value)` notifications.

Usage:
    class ProfileStaleMonitor(StaleMonitor):
        properties = ("name", "email", "address")
        collections = ("phones",)

    vm.stale_monitor = ProfileStaleMonitor(vm)
    vm.stale_monitor.capture()
    vm.name = "Bob"
    vm.stale_monitor.is_stale  # True
"""
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from vmkit.core.equality import enumerable_equal, objects_equal
from vmkit.core.events import CompositeSubscription, Signal, Subscription
from vmkit.mvvm.bindable import BindableBase

IS_STALE = "is_stale"


def monitor_of(value: Any) -> Optional["StaleMonitor"]:
    """Return the StaleMonitor of a stale-monitored ViewModel, else None."""
    if value is None:
        return None
    monitor = getattr(value, "stale_monitor", None)
    return monitor if isinstance(monitor, StaleMonitor) else None


class StaleMonitor(BindableBase):
    """
    Base stale monitor.

    Subclasses declare the tracked attribute names in `properties` and
    `collections`. Names missing on the ViewModel are skipped silently.

    Scalars are compared with `objects_equal` (None and "" are equal),
    collections element by element with `enumerable_equal`.
    """

    properties: Sequence[str] = ()
    collections: Sequence[str] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.properties = tuple(cls.properties or ())
        cls.collections = tuple(cls.collections or ())

    def __init__(self, view_model: BindableBase):
        super().__init__()
        self._view_model = view_model
        self._tracked_properties: List[str] = []
        self._tracked_collections: List[str] = []
        self._property_snapshots: Dict[str, Any] = {}
        self._collection_snapshots: Dict[str, Optional[Tuple[Any, ...]]] = {}
        self._subscriptions: Dict[str, CompositeSubscription] = {}
        self._view_model_subscription: Optional[Subscription] = view_model.property_changed.connect(
            self._on_view_model_property_changed
        )

    @property
    def view_model(self) -> BindableBase:
        return self._view_model

    @property
    def is_disposed(self) -> bool:
        return self._view_model_subscription is None

    @property
    def is_stale(self) -> bool:
        """True if any tracked property or collection changed since its capture."""
        return self.are_properties_stale() or self.are_collections_stale()

    @property
    def tracked_properties(self) -> Tuple[str, ...]:
        return tuple(self._tracked_properties)

    @property
    def tracked_collections(self) -> Tuple[str, ...]:
        return tuple(self._tracked_collections)

    # --- Capture ---

    def capture(self) -> None:
        """Capture all declared properties and collections."""
        self.capture_properties()
        self.capture_collection_properties()

    def capture_properties(self, *names: str) -> None:
        """
        Capture declared scalar properties.

        Args:
            *names: Subset to capture. Without names every declared property
                is tracked and captured. Names not declared are ignored.
        """
        if not self.properties:
            return
        targets = self._select(names, self.properties, self._tracked_properties)
        for name in targets:
            self._capture_property(name)
        logger.debug(f"{self.__class__.__name__}: captured properties {targets}")
        self._notify_stale()

    def capture_collection_properties(self, *names: str) -> None:
        """
        Capture declared collection properties.

        Args:
            *names: Subset to capture. Without names every declared collection
                is tracked and captured. Names not declared are ignored.
        """
        if not self.collections:
            return
        targets = self._select(names, self.collections, self._tracked_collections)
        for name in targets:
            self._capture_collection(name)
        logger.debug(f"{self.__class__.__name__}: captured collections {targets}")
        self._notify_stale()

    def _select(self, names: Tuple[str, ...], declared: Sequence[str], tracked: List[str]) -> List[str]:
        if not names:
            tracked[:] = [name for name in declared if hasattr(self._view_model, name)]
            return list(tracked)

        targets = [
            name for name in dict.fromkeys(names)
            if name in declared and hasattr(self._view_model, name)
        ]
        for name in targets:
            if name not in tracked:
                tracked.append(name)
        return targets

    def _capture_property(self, name: str) -> None:
        value = getattr(self._view_model, name, None)
        self._property_snapshots[name] = value
        self._bind_property(name, value, capture_nested=True)

    def _bind_property(self, name: str, value: Any, capture_nested: bool = False) -> None:
        """Subscribe to the monitor of a nested ViewModel held by `name`."""
        self._release(name)
        nested = monitor_of(value)
        if nested is None:
            return
        if capture_nested:
            nested.capture()
        self._subscribe(name, nested.property_changed)

    def _capture_collection(self, name: str) -> None:
        value = getattr(self._view_model, name, None)
        if value is not None and not isinstance(value, Iterable):
            logger.warning(f"{self.__class__.__name__}: '{name}' is not a collection, no longer tracked")
            self._release(name)
            self._collection_snapshots.pop(name, None)
            if name in self._tracked_collections:
                self._tracked_collections.remove(name)
            return

        self._collection_snapshots[name] = tuple(value) if value is not None else None
        self._bind_collection(name, value, capture_items=True)

    def _bind_collection(self, name: str, collection: Optional[Iterable], capture_items: bool = False) -> None:
        """Subscribe to mutations of `collection` and to the monitors of its items."""
        self._release(name)
        if collection is None or not isinstance(collection, Iterable):
            return

        changed = getattr(collection, "collection_changed", None)
        if isinstance(changed, Signal):
            self._subscribe(name, changed)

        for item in collection:
            nested = monitor_of(item)
            if nested is None:
                continue
            if capture_items:
                nested.capture()
            self._subscribe(name, nested.property_changed)

    # --- Checks ---

    def are_properties_stale(self, *names: str) -> bool:
        """
        Check scalar properties against their captured values.

        Args:
            *names: Subset to check; all tracked properties when empty.
                Names never captured are skipped.
        """
        for name in names or tuple(self._tracked_properties):
            if self._is_property_stale(name):
                return True
        return False

    def are_collections_stale(self, *names: str) -> bool:
        """
        Check collection properties against their captured items.

        Args:
            *names: Subset to check; all tracked collections when empty.
                Names never captured are skipped.
        """
        for name in names or tuple(self._tracked_collections):
            if self._is_collection_stale(name):
                return True
        return False

    def _is_property_stale(self, name: str) -> bool:
        if name not in self._property_snapshots:
            return False

        current = getattr(self._view_model, name, None)
        if not objects_equal(current, self._property_snapshots[name]):
            return True

        nested = monitor_of(current)
        return nested is not None and nested.is_stale

    def _is_collection_stale(self, name: str) -> bool:
        if name not in self._collection_snapshots:
            return False

        current = getattr(self._view_model, name, None)
        if current is not None and not isinstance(current, Iterable):
            return True
        if not enumerable_equal(self._collection_snapshots[name], current):
            return True
        if current is None:
            return False

        for item in current:
            nested = monitor_of(item)
            if nested is not None and nested.is_stale:
                return True
        return False

    # --- Notifications ---

    def _subscribe(self, name: str, signal: Signal) -> None:
        subscriptions = self._subscriptions.setdefault(name, CompositeSubscription())
        subscriptions.add(signal.connect(lambda *_, n=name: self._on_source_changed(n)))

    def _release(self, name: str) -> None:
        subscriptions = self._subscriptions.pop(name, None)
        if subscriptions is not None:
            subscriptions.dispose()

    def _on_view_model_property_changed(self, property_name: str, value: Any = None) -> None:
        current = getattr(self._view_model, property_name, None)
        # The instance may have been replaced; observe the new one
        if property_name in self._collection_snapshots:
            self._bind_collection(property_name, current)
        elif property_name in self._property_snapshots:
            self._bind_property(property_name, current)
        else:
            return
        self._notify_stale()

    def _on_source_changed(self, name: str) -> None:
        logger.debug(f"{self.__class__.__name__}: '{name}' changed")
        self._notify_stale()

    def _notify_stale(self) -> None:
        if self.is_disposed:
            return
        self.notify_property_changed(IS_STALE, self.is_stale)

    # --- Teardown ---

    def dispose(self) -> None:
        """Release every subscription and forget all snapshots."""
        if self.is_disposed:
            return
        self._view_model_subscription.dispose()
        self._view_model_subscription = None
        for subscriptions in self._subscriptions.values():
            subscriptions.dispose()
        self._subscriptions.clear()
        self._property_snapshots.clear()
        self._collection_snapshots.clear()
        self._tracked_properties.clear()
        self._tracked_collections.clear()
        logger.debug(f"{self.__class__.__name__} disposed")
