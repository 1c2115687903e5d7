"""
Registered metadata exposed over REST.

Only keys registered with show_in_rest are read or written; anything else in a
request's meta object is ignored.
"""

from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from helpers.rest import RestError, RestRequest
from helpers.sanitize import sanitize_value_from_schema, validate_value_from_schema
from helpers.storage import add_post_meta, delete_post_meta, get_post_meta, update_post_meta
from settings import logger

_registered_meta: Dict[Tuple[str, str], Dict[str, Dict[str, Any]]] = {}


def register_meta(
    object_type: str,
    meta_key: str,
    meta_type: str = "string",
    description: str = "",
    single: bool = True,
    default: Any = None,
    show_in_rest: bool = True,
    object_subtype: str = "",
) -> None:
    """Register a meta key for an object type, or for one subtype of it."""
    _registered_meta.setdefault((object_type, object_subtype), {})[meta_key] = {
        "type": meta_type,
        "description": description,
        "single": single,
        "default": default,
        "show_in_rest": show_in_rest,
    }


def unregister_meta(object_type: str, meta_key: str, object_subtype: str = "") -> bool:
    keys = _registered_meta.get((object_type, object_subtype), {})
    return keys.pop(meta_key, None) is not None


def get_registered_meta(object_type: str, object_subtype: str = "") -> Dict[str, Dict[str, Any]]:
    registered = dict(_registered_meta.get((object_type, ""), {}))
    if object_subtype:
        registered.update(_registered_meta.get((object_type, object_subtype), {}))
    return registered


class MetaFields:
    """Reads and writes the meta object of a REST resource."""

    def __init__(self, object_type: str = "post", object_subtype: str = ""):
        self.object_type = object_type
        self.object_subtype = object_subtype

    def get_registered_fields(self) -> Dict[str, Dict[str, Any]]:
        return {
            key: args for key, args in get_registered_meta(self.object_type, self.object_subtype).items()
            if args["show_in_rest"]
        }

    def _field_schema(self, args: Dict[str, Any]) -> Dict[str, Any]:
        schema = {
            "type": args["type"],
            "description": args["description"],
            "default": args["default"],
            "context": ["view", "edit"],
        }
        if not args["single"]:
            schema = {
                "type": "array",
                "description": args["description"],
                "items": {"type": args["type"]},
                "default": [],
                "context": ["view", "edit"],
            }
        return schema

    def get_field_schema(self) -> Dict[str, Any]:
        return {
            "description": "Meta fields.",
            "type": "object",
            "context": ["view", "edit"],
            "properties": {
                key: self._field_schema(args) for key, args in self.get_registered_fields().items()
            },
            "arg_options": {
                "sanitize_callback": None,
                "validate_callback": None,
            },
        }

    def get_value(self, session: Session, object_id: int, request: Optional[RestRequest] = None) -> Dict[str, Any]:
        values = {}
        for key, args in self.get_registered_fields().items():
            stored = get_post_meta(session, object_id, key)
            schema = self._field_schema(args)
            if args["single"]:
                value = stored[0] if stored else args["default"]
                values[key] = sanitize_value_from_schema(value, schema)
            else:
                values[key] = [sanitize_value_from_schema(value, schema["items"]) for value in stored]
        return values

    def update_value(self, session: Session, meta: Dict[str, Any], object_id: int) -> None:
        """Apply a request's meta object. A null value removes the key."""
        if not isinstance(meta, dict):
            raise RestError("rest_invalid_param", "Invalid parameter(s): meta", 400,
                            {"params": {"meta": "meta is not of type object."}})

        fields = self.get_registered_fields()
        for key, value in meta.items():
            args = fields.get(key)
            if args is None:
                continue
            schema = self._field_schema(args)
            if value is not None:
                error = validate_value_from_schema(value, schema, f"meta.{key}")
                if error:
                    raise RestError("rest_invalid_param", "Invalid parameter(s): meta", 400,
                                    {"params": {"meta": error}})

        try:
            for key, value in meta.items():
                args = fields.get(key)
                if args is None:
                    continue
                if value is None:
                    delete_post_meta(session, object_id, key)
                elif args["single"]:
                    update_post_meta(session, object_id, key, sanitize_value_from_schema(value, self._field_schema(args)))
                else:
                    delete_post_meta(session, object_id, key)
                    for item in sanitize_value_from_schema(value, self._field_schema(args)):
                        add_post_meta(session, object_id, key, item)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Meta update failed for post {object_id}: {e}")
            raise RestError("rest_meta_database_error", "Could not update the meta value in the database.", 500)
