"""
Shared REST controller behavior.

Controllers compose these helpers instead of inheriting them: error types,
the request parameter bag, response field selection, context filtering and
permission enforcement.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from fastapi import HTTPException

from helpers.sanitize import parse_list

CONTEXTS = ("view", "embed", "edit")


class RestError(HTTPException):
    """Structured API error: machine-readable code, human message and HTTP status."""

    def __init__(self, code: str, message: str, status: int = 400, data: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.data = {"status": status, **(data or {})}
        super().__init__(
            status_code=status,
            detail={"code": code, "message": message, "data": self.data},
        )

    @property
    def status(self) -> int:
        return self.status_code

    def with_status(self, status: int) -> "RestError":
        """Copy of this error carrying a different status."""
        return RestError(self.code, self.message, status, {k: v for k, v in self.data.items() if k != "status"})

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": self.data}


class StoreError(Exception):
    """Failure reported by the storage layer, classified by the calling controller."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class RestRequest:
    """Request parameters merged from the route, the query string and the body."""

    def __init__(self, method: str = "GET", params: Optional[Dict[str, Any]] = None, route: str = ""):
        self.method = method.upper()
        self.route = route
        self._params: Dict[str, Any] = dict(params or {})

    def __getitem__(self, key: str) -> Any:
        return self._params.get(key)

    def __contains__(self, key: str) -> bool:
        # A key explicitly sent as null counts as not supplied
        return self._params.get(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        value = self._params.get(key)
        return default if value is None else value

    def set_param(self, key: str, value: Any) -> None:
        self._params[key] = value

    @property
    def context(self) -> str:
        return self.get("context", "view")


@dataclass
class RestResponse:
    """Controller result: body plus status and headers for the endpoint to apply."""
    data: Any
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


def check_permission(check: Callable[[RestRequest], bool], request: RestRequest) -> None:
    """Run a controller permission hook and turn a refusal into a 403."""
    if not check(request):
        raise RestError("rest_forbidden", "Sorry, you are not allowed to do that.", 403)


def get_public_item_schema(schema: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Schema as published to clients, without server-side argument options."""
    if not schema:
        return schema
    public = deepcopy(schema)
    for prop in public.get("properties", {}).values():
        prop.pop("arg_options", None)
    return public


def get_fields_for_response(schema: Dict[str, Any], request: RestRequest) -> List[str]:
    """Top-level fields to compute for this request, honouring context and _fields."""
    properties = schema.get("properties", {})
    context = request.context
    fields = [
        name for name, prop in properties.items()
        if context in prop.get("context", CONTEXTS)
    ]
    requested = request.get("_fields")
    if not requested:
        return fields
    wanted = {name.split(".", 1)[0] for name in parse_list(requested)}
    return [name for name in fields if name in wanted]


def filter_response_by_context(data: Dict[str, Any], context: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    """Drop every value whose schema does not list the given context."""
    properties = schema.get("properties", {})
    filtered = {}
    for key, value in data.items():
        prop = properties.get(key)
        if prop is None:
            filtered[key] = value
            continue
        if context not in prop.get("context", CONTEXTS):
            continue
        if isinstance(value, dict) and "properties" in prop:
            value = filter_response_by_context(value, context, prop)
        filtered[key] = value
    return filtered


def validate_context(context: str) -> str:
    if context not in CONTEXTS:
        raise RestError(
            "rest_invalid_param",
            "Invalid parameter(s): context",
            400,
            {"params": {"context": f"context is not one of {', '.join(CONTEXTS)}."}},
        )
    return context
