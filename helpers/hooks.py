"""
Extension points.

Each event is an explicit object. Filters pass a value through their
listeners and return the result; actions notify listeners and return nothing.
A filter listener may reject the value by raising RestError.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Tuple

from settings import logger


class _Event:
    def __init__(self, name: str):
        self.name = name
        self._listeners: List[Tuple[int, int, Callable]] = []
        self._counter = 0

    def connect(self, callback: Callable, priority: int = 10) -> Callable:
        """Register a listener. Lower priorities run first, ties in registration order."""
        self._counter += 1
        self._listeners.append((priority, self._counter, callback))
        self._listeners.sort(key=lambda entry: entry[:2])
        return callback

    def disconnect(self, callback: Callable) -> bool:
        before = len(self._listeners)
        self._listeners = [entry for entry in self._listeners if entry[2] is not callback]
        return len(self._listeners) != before

    @contextmanager
    def connected(self, callback: Callable, priority: int = 10) -> Iterator[Callable]:
        """Keep a listener registered only for the duration of the block."""
        self.connect(callback, priority)
        try:
            yield callback
        finally:
            self.disconnect(callback)

    @property
    def listeners(self) -> List[Callable]:
        return [entry[2] for entry in self._listeners]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} listeners={len(self._listeners)}>"


class Filter(_Event):
    """Event whose listeners transform a value."""

    def apply(self, value: Any, *args: Any) -> Any:
        for callback in self.listeners:
            value = callback(value, *args)
        return value


class Action(_Event):
    """Event whose listeners are notified and return nothing."""

    def send(self, *args: Any) -> None:
        if self._listeners:
            logger.debug(f"Dispatching {self.name} to {len(self._listeners)} listeners")
        for callback in self.listeners:
            callback(*args)


# Write payload of a menu item before it reaches storage: (payload, request) -> payload
pre_insert_nav_menu_item = Filter("pre_insert_nav_menu_item")

# Menu item written, before meta and additional fields: (item, request, creating)
insert_nav_menu_item = Action("insert_nav_menu_item")

# Menu item fully written: (item, request, creating)
after_insert_nav_menu_item = Action("after_insert_nav_menu_item")

# Serialized menu item response: (data, item, request) -> data
prepare_nav_menu_item = Filter("prepare_nav_menu_item")

# Menu item deleted or trashed: (item, response_data, request)
delete_nav_menu_item = Action("delete_nav_menu_item")

# Title format for password protected posts: (format, post) -> format
protected_title_format = Filter("protected_title_format")
