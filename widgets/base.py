from typing import Dict, List

from settings import logger


class WidgetType:
    """Registered widget type descriptor."""

    def __init__(self, id_base: str, name: str, description: str = ""):
        self.id_base = id_base
        self.name = name
        self.description = description

    def __repr__(self) -> str:
        return f"WidgetType(id_base={self.id_base!r}, name={self.name!r})"


class WidgetFactory:
    """Process-wide widget type registry, filled once at startup."""

    def __init__(self):
        self._widgets: Dict[str, WidgetType] = {}

    def register(self, widget: WidgetType) -> WidgetType:
        """Register a widget type. A later registration with the same key replaces the earlier one."""
        key = widget.id_base or widget.name
        self._widgets[key] = widget
        logger.debug(f"Widget type registered: {widget.id_base}")
        return widget

    @property
    def widgets(self) -> List[WidgetType]:
        return list(self._widgets.values())

    @classmethod
    def with_core_widgets(cls) -> "WidgetFactory":
        """Factory holding every built-in widget type."""
        from .core import CORE_WIDGET_TYPES

        factory = cls()
        for id_base, name, description in CORE_WIDGET_TYPES:
            factory.register(WidgetType(id_base, name, description))
        return factory
