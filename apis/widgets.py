"""
Widgets API.

Widget types are read from a snapshot of the widget registry taken at startup.
Widget instances have no backing store yet; their routes exist and answer null.
"""

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Optional, Tuple

from fastapi import APIRouter, Depends

from helpers.rest import CONTEXTS, RestError, RestRequest, check_permission
from settings import API_PREFIX, logger
from widgets.base import WidgetType
from widgets.core import CORE_WIDGET_SCHEMAS, TITLED_WIDGET_TYPES


def _thaw(value: Any) -> Any:
    """Plain, mutable copy of a read-only schema table entry."""
    if hasattr(value, "items"):
        return {key: _thaw(item) for key, item in value.items()}
    return deepcopy(value)


class WidgetsController:
    """REST controller for widget types and widget instances."""

    namespace = API_PREFIX.strip("/")
    rest_base = "widgets"

    def __init__(self, widgets: Iterable[WidgetType]):
        self.widgets: Tuple[WidgetType, ...] = tuple(widgets)

    def get_items_permissions_check(self, request: RestRequest) -> bool:
        return True

    def get_item_permissions_check(self, request: RestRequest) -> bool:
        return True

    def create_item_permissions_check(self, request: RestRequest) -> bool:
        return True

    def update_item_permissions_check(self, request: RestRequest) -> bool:
        return True

    def delete_item_permissions_check(self, request: RestRequest) -> bool:
        return True

    def get_item_schema(self) -> Optional[Dict[str, Any]]:
        return None

    def get_collection_params(self) -> Dict[str, Any]:
        return {}

    def get_type_schema(self, id_base: str) -> Optional[Dict[str, Any]]:
        """JSON Schema for one registered widget type, or None if it is not registered."""
        if not any(widget.id_base == id_base for widget in self.widgets):
            return None

        properties: Dict[str, Any] = {
            "id": {
                "description": "Unique identifier for the object.",
                "type": "string",
                "context": ["view", "edit", "embed"],
                "readonly": True,
            },
            "type": {
                "description": "Type of Widget for the object.",
                "type": "string",
                "context": ["view", "edit", "embed"],
                "readonly": True,
            },
        }

        if id_base in TITLED_WIDGET_TYPES:
            properties["title"] = {
                "description": "The title for the object.",
                "type": "string",
            }

        properties.update(_thaw(CORE_WIDGET_SCHEMAS.get(id_base, {})))

        for prop in properties.values():
            prop.setdefault("context", list(CONTEXTS))

        return {
            "$schema": "http://json-schema.org/draft-04/schema#",
            "title": id_base,
            "type": "object",
            "properties": properties,
        }

    def get_types(self, request: RestRequest) -> List[Dict[str, Any]]:
        check_permission(self.get_items_permissions_check, request)
        return [
            self.get_type_schema(widget.id_base)
            for widget in self.widgets
            if widget.id_base
        ]

    def get_type(self, request: RestRequest) -> Dict[str, Any]:
        check_permission(self.get_item_permissions_check, request)
        id_base = request.get("type", "")
        if not id_base:
            raise RestError("rest_widget_missing_type", "Request missing widget type.", 400)

        schema = self.get_type_schema(id_base)
        if schema is None:
            logger.info(f"Unknown widget type requested: {id_base}")
            raise RestError("rest_widget_type_not_found", "Requested widget type was not found.", 404)
        return schema

    # Widget instances are not persisted; these keep the routes answering.

    def get_items(self, request: RestRequest) -> None:
        check_permission(self.get_items_permissions_check, request)
        return None

    def get_item(self, request: RestRequest) -> None:
        check_permission(self.get_item_permissions_check, request)
        return None

    def create_item(self, request: RestRequest) -> None:
        check_permission(self.create_item_permissions_check, request)
        return None

    def update_item(self, request: RestRequest) -> None:
        check_permission(self.update_item_permissions_check, request)
        return None

    def delete_item(self, request: RestRequest) -> None:
        check_permission(self.delete_item_permissions_check, request)
        return None


_controller: Optional[WidgetsController] = None


def setup_widgets_controller(widgets: Iterable[WidgetType]) -> WidgetsController:
    """Install the controller over the widget types registered at startup."""
    global _controller
    _controller = WidgetsController(widgets)
    logger.info(f"Widgets controller ready with {len(_controller.widgets)} widget types")
    return _controller


def get_widgets_controller() -> WidgetsController:
    if _controller is None:
        raise RestError("rest_widgets_unavailable", "Widget types have not been registered.", 503)
    return _controller


router = APIRouter(tags=["widgets"])


@router.get("/widget-types")
async def list_widget_types(
    widgets: WidgetsController = Depends(get_widgets_controller)
) -> List[Dict[str, Any]]:
    """Schemas of every registered widget type."""
    return widgets.get_types(RestRequest("GET", route="/widget-types"))


@router.get("/widgets/types")
async def get_widget_type_missing(
    widgets: WidgetsController = Depends(get_widgets_controller)
) -> Dict[str, Any]:
    return widgets.get_type(RestRequest("GET", {"type": ""}, route="/widgets/types"))


@router.get("/widgets/types/{type}")
async def get_widget_type(
    type: str,
    widgets: WidgetsController = Depends(get_widgets_controller)
) -> Dict[str, Any]:
    """Schema of a single widget type."""
    return widgets.get_type(RestRequest("GET", {"type": type}, route=f"/widgets/types/{type}"))


@router.get("/widgets")
async def list_widgets(
    widgets: WidgetsController = Depends(get_widgets_controller)
) -> None:
    return widgets.get_items(RestRequest("GET", route="/widgets"))


@router.post("/widgets")
async def create_widget(
    widgets: WidgetsController = Depends(get_widgets_controller)
) -> None:
    return widgets.create_item(RestRequest("POST", route="/widgets"))


@router.get("/widgets/{id_base}")
@router.get("/widgets/{id_base}/{number}")
async def get_widget(
    id_base: str,
    number: Optional[int] = None,
    widgets: WidgetsController = Depends(get_widgets_controller)
) -> None:
    params = {"id_base": id_base, "number": number}
    return widgets.get_item(RestRequest("GET", params, route=f"/widgets/{id_base}"))


@router.put("/widgets/{id_base}")
@router.put("/widgets/{id_base}/{number}")
@router.patch("/widgets/{id_base}")
@router.patch("/widgets/{id_base}/{number}")
async def update_widget(
    id_base: str,
    number: Optional[int] = None,
    widgets: WidgetsController = Depends(get_widgets_controller)
) -> None:
    params = {"id_base": id_base, "number": number}
    return widgets.update_item(RestRequest("PUT", params, route=f"/widgets/{id_base}"))


@router.delete("/widgets/{id_base}")
@router.delete("/widgets/{id_base}/{number}")
async def delete_widget(
    id_base: str,
    number: Optional[int] = None,
    widgets: WidgetsController = Depends(get_widgets_controller)
) -> None:
    params = {"id_base": id_base, "number": number}
    return widgets.delete_item(RestRequest("DELETE", params, route=f"/widgets/{id_base}"))
