"""
Bindable properties.

Assigning a BindableProperty raises `property_changed(name, value)` on
its owner, which is what stale monitors, validators and views listen to.

Usage:
    class ProfileViewModel(BindableBase):
        name = BindableProperty(default="")
        phones = BindableProperty(default=None)

    vm.name = "Alice"  # emits property_changed("name", "Alice")
"""
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from vmkit.core.events import Signal

T = TypeVar('T')


def _is_collection(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes))


class BindableProperty(Generic[T]):
    """
    Descriptor storing a per-instance value and emitting `property_changed`
    when it changes.

    Assigning a different collection object always notifies, even when its
    items are equal, so observers can rebind to the new instance.

    Args:
        default: Value returned before the first assignment.
        coerce: Optional callable applied to every assigned value.

    Example:
        class OrderViewModel(BindableBase):
            quantity = BindableProperty(default=1, coerce=lambda x: max(1, int(x)))
    """

    def __init__(self, default: T = None, coerce: Optional[Callable[[Any], T]] = None):
        self.default = default
        self.coerce = coerce
        self._attr_name: str = ""
        self.name: str = ""

    def __set_name__(self, owner: type, name: str) -> None:
        """Called when the descriptor is assigned to a class attribute."""
        self.name = name
        self._attr_name = f"_bindable_{name}"

    def __get__(self, obj: Optional["BindableBase"], objtype: type = None) -> T:
        """Get the property value."""
        if obj is None:
            return self  # type: ignore
        return getattr(obj, self._attr_name, self.default)

    def __set__(self, obj: "BindableBase", value: Any) -> None:
        """Set the property value and notify if different."""
        if self.coerce is not None:
            value = self.coerce(value)

        old_value = getattr(obj, self._attr_name, self.default)

        if old_value is value:
            return
        # A new collection equal to the old one is still a new instance to observe
        if not _is_collection(value) and old_value == value:
            return

        setattr(obj, self._attr_name, value)
        obj.notify_property_changed(self.name, value)


class BindableBase:
    """
    Owner of a `property_changed` signal emitting (property_name, value).

    BindableProperty descriptors notify through it automatically; other
    properties call `notify_property_changed` themselves.
    """

    def __init__(self):
        self.property_changed = Signal(f"{self.__class__.__name__}.property_changed")

    def notify_property_changed(self, property_name: str, value: Any = None) -> None:
        """
        Manually emit a property changed notification.

        Use this for properties not using BindableProperty descriptor.
        """
        self.property_changed.emit(property_name, value)


def bindable_properties(cls: type) -> List[str]:
    """Names of the BindableProperty descriptors declared on cls and its bases."""
    names = []
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, BindableProperty) and name not in names:
                names.append(name)
    return names
