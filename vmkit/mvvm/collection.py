"""
Observable list for view-model collections.

Every mutation emits `collection_changed(action, items, index)` so
observers (stale monitors, views) can react without polling.
"""
from enum import Enum
from typing import Any, Iterable, List, Optional

from vmkit.core.events import Signal


class CollectionAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    RESET = "reset"


class ObservableList(list):
    """
    A list that notifies about mutations.

    Example:
        items = ObservableList(["a", "b"])
        items.collection_changed.connect(lambda action, items, index: ...)
        items.append("c")   # -> (CollectionAction.ADD, ["c"], 2)
    """

    def __init__(self, iterable: Iterable = ()):
        super().__init__(iterable)
        self.collection_changed = Signal("collection_changed")

    def _notify(self, action: CollectionAction, items: List[Any], index: Optional[int] = None):
        self.collection_changed.emit(action, items, index)

    def append(self, item):
        super().append(item)
        self._notify(CollectionAction.ADD, [item], len(self) - 1)

    def extend(self, iterable):
        items = list(iterable)
        if not items:
            return
        start = len(self)
        super().extend(items)
        self._notify(CollectionAction.ADD, items, start)

    def __iadd__(self, iterable):
        self.extend(iterable)
        return self

    def insert(self, index, item):
        size = len(self)
        position = min(index, size) if index >= 0 else max(size + index, 0)
        super().insert(index, item)
        self._notify(CollectionAction.ADD, [item], position)

    def remove(self, item):
        index = self.index(item)
        super().remove(item)
        self._notify(CollectionAction.REMOVE, [item], index)

    def pop(self, index=-1):
        position = index if index >= 0 else len(self) + index
        item = super().pop(index)
        self._notify(CollectionAction.REMOVE, [item], position)
        return item

    def clear(self):
        items = list(self)
        super().clear()
        if items:
            self._notify(CollectionAction.RESET, items)

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            value = list(value)
            super().__setitem__(index, value)
            self._notify(CollectionAction.REPLACE, value, None)
            return
        old = self[index]
        super().__setitem__(index, value)
        if old is not value:
            self._notify(CollectionAction.REPLACE, [value], index)

    def __delitem__(self, index):
        old = self[index]
        super().__delitem__(index)
        items = old if isinstance(index, slice) else [old]
        self._notify(CollectionAction.REMOVE, items, None if isinstance(index, slice) else index)

    def sort(self, *args, **kwargs):
        super().sort(*args, **kwargs)
        self._notify(CollectionAction.MOVE, list(self))

    def reverse(self):
        super().reverse()
        self._notify(CollectionAction.MOVE, list(self))

    def move(self, old_index: int, new_index: int):
        """Move an item to a new position."""
        item = super().pop(old_index)
        super().insert(new_index, item)
        self._notify(CollectionAction.MOVE, [item], new_index)

    def reset(self, iterable: Iterable = ()):
        """Replace the whole content with one notification."""
        super().clear()
        super().extend(iterable)
        self._notify(CollectionAction.RESET, list(self))
