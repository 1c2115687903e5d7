"""
Additional fields registered on REST resources by extensions.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from helpers.rest import RestError, RestRequest


@dataclass
class RestField:
    attribute: str
    get_callback: Optional[Callable] = None
    update_callback: Optional[Callable] = None
    schema: Optional[Dict[str, Any]] = None


_additional_fields: Dict[str, Dict[str, RestField]] = {}


def register_rest_field(
    object_type: str,
    attribute: str,
    get_callback: Optional[Callable] = None,
    update_callback: Optional[Callable] = None,
    schema: Optional[Dict[str, Any]] = None,
) -> RestField:
    """
    Register an extra field on a resource.

    get_callback(obj, attribute, request, object_type) returns the value.
    update_callback(value, obj, attribute, request, object_type) stores it and
    may raise RestError to abort the write.
    """
    rest_field = RestField(attribute, get_callback, update_callback, schema)
    _additional_fields.setdefault(object_type, {})[attribute] = rest_field
    return rest_field


def unregister_rest_field(object_type: str, attribute: str) -> bool:
    return _additional_fields.get(object_type, {}).pop(attribute, None) is not None


def get_additional_fields(object_type: str) -> Dict[str, RestField]:
    return dict(_additional_fields.get(object_type, {}))


def add_additional_fields_schema(object_type: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    for attribute, rest_field in get_additional_fields(object_type).items():
        if rest_field.schema:
            schema.setdefault("properties", {})[attribute] = rest_field.schema
    return schema


def add_additional_fields_to_object(
    object_type: str,
    data: Dict[str, Any],
    obj: Any,
    request: RestRequest,
    requested_fields: List[str],
) -> Dict[str, Any]:
    for attribute, rest_field in get_additional_fields(object_type).items():
        if rest_field.get_callback is None:
            continue
        if rest_field.schema and attribute not in requested_fields:
            continue
        data[attribute] = rest_field.get_callback(obj, attribute, request, object_type)
    return data


def update_additional_fields_for_object(object_type: str, obj: Any, request: RestRequest) -> None:
    """Run update callbacks for every registered field present in the request."""
    for attribute, rest_field in get_additional_fields(object_type).items():
        if rest_field.update_callback is None or attribute not in request:
            continue
        result = rest_field.update_callback(request[attribute], obj, attribute, request, object_type)
        if isinstance(result, RestError):
            raise result
