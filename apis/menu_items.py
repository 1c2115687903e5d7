"""
Navigation menu items API.

Menu items are nav_menu_item posts. Reads build a menu item view from the post
and its meta; writes translate API field names to the storage payload and hand
it to update_nav_menu_item().
"""

from math import ceil
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlmodel import Session

from database import get_session
from helpers.fields import (
    add_additional_fields_schema, add_additional_fields_to_object, update_additional_fields_for_object,
)
from helpers.hooks import (
    after_insert_nav_menu_item, delete_nav_menu_item as delete_nav_menu_item_action, insert_nav_menu_item,
    pre_insert_nav_menu_item, prepare_nav_menu_item, protected_title_format,
)
from helpers.meta import MetaFields
from helpers.nav_menus import (
    NAV_MENU_ITEM_DEFAULTS, NAV_MENU_ITEM_POST_TYPE, MenuItemType, NavMenuItem, delete_nav_menu_item,
    get_nav_menu_item_menu_id, get_nav_menu_item_title, setup_nav_menu_item, trash_nav_menu_item,
    update_nav_menu_item,
)
from helpers.query import query_posts
from helpers.registry import get_post_statuses, get_post_type, get_taxonomy
from helpers.rest import (
    RestError, RestRequest, RestResponse, StoreError, check_permission, filter_response_by_context,
    get_fields_for_response, get_public_item_schema, validate_context,
)
from helpers.sanitize import (
    absint, parse_list, sanitize_boolean, sanitize_html_class, sanitize_value_from_schema,
    validate_value_from_schema,
)
from helpers.storage import get_post, get_term
from settings import API_PREFIX, logger, rest_url
from .schemas.menu_items import MenuItemRequest

# Storage payload key -> API field
FIELD_MAPPING = {
    "menu-item-db-id": "db_id",
    "menu-item-object-id": "object_id",
    "menu-item-object": "object",
    "menu-item-parent-id": "menu_item_parent",
    "menu-item-position": "menu_order",
    "menu-item-type": "type",
    "menu-item-url": "url",
    "menu-item-description": "description",
    "menu-item-attr-title": "attr_title",
    "menu-item-target": "target",
    "menu-item-classes": "classes",
    "menu-item-xfn": "xfn",
    "menu-item-status": "status",
}

# API sort key -> storage sort key; anything else is passed through
ORDERBY_MAPPINGS = {
    "id": "ID",
    "include": "post__in",
    "slug": "post_name",
    "include_slugs": "post_name__in",
    "menu_order": "menu_order",
}

ORDERBY_VALUES = [
    "author", "date", "id", "include", "modified", "parent", "relevance",
    "slug", "include_slugs", "title", "menu_order",
]


class MenuItemsController:
    """REST controller for navigation menu items."""

    namespace = API_PREFIX.strip("/")
    rest_base = "menu-items"
    post_type = NAV_MENU_ITEM_POST_TYPE

    def __init__(self):
        self.meta = MetaFields("post", self.post_type)

    # Permission hooks. Capability checks belong to the host application.

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

    def protected_title_format(self, title_format: str, post: Any = None) -> str:
        """Show protected titles without their prefix."""
        return "%s"

    # Schema

    def get_item_schema(self) -> Dict[str, Any]:
        """JSON Schema of a menu item. The status enum follows the live status registry."""
        schema: Dict[str, Any] = {
            "$schema": "http://json-schema.org/draft-04/schema#",
            "title": self.post_type,
            "type": "object",
            "properties": {},
        }
        properties = schema["properties"]

        properties["title"] = {
            "description": "The title for the object.",
            "type": "object",
            "context": ["view", "edit", "embed"],
            "arg_options": {
                # Sanitized and validated in prepare_item_for_database()
                "sanitize_callback": None,
                "validate_callback": None,
            },
            "properties": {
                "raw": {
                    "description": "Title for the object, as it exists in the database.",
                    "type": "string",
                    "context": ["edit"],
                },
                "rendered": {
                    "description": "HTML title for the object, transformed for display.",
                    "type": "string",
                    "context": ["view", "edit", "embed"],
                    "readonly": True,
                },
            },
        }
        properties["id"] = {
            "description": "Unique identifier for the object.",
            "type": "integer",
            "default": 0,
            "context": ["view", "edit", "embed"],
            "readonly": True,
        }
        properties["menu_id"] = {
            "description": "Unique identifier for the menu.",
            "type": "integer",
            "context": ["edit"],
            "default": 0,
        }
        properties["type"] = {
            "description": "Type of menu item",
            "type": "string",
            "enum": [item_type.value for item_type in MenuItemType],
            "context": ["view", "edit", "embed"],
        }
        properties["status"] = {
            "description": "A named status for the object.",
            "type": "string",
            "enum": get_post_statuses(internal=False),
            "context": ["view", "edit"],
        }
        properties["link"] = {
            "description": "URL to the object.",
            "type": "string",
            "format": "uri",
            "context": ["view", "edit", "embed"],
            "readonly": True,
        }
        properties["parent"] = {
            "description": "The ID for the parent of the object.",
            "type": "integer",
            "context": ["view", "edit"],
        }
        properties["attr_title"] = {
            "description": "The title attribute of the link element for this menu item.",
            "context": ["view", "edit"],
            "type": "string",
        }
        properties["classes"] = {
            "description": "The array of class attribute values for the link element of this menu item.",
            "context": ["view", "edit"],
            "type": "array",
            "items": {"type": "string"},
        }
        properties["db_id"] = {
            "description": "The DB ID of this item as a nav_menu_item object, if it exists (0 if it doesn't exist).",
            "context": ["view", "edit"],
            "type": "integer",
        }
        properties["description"] = {
            "description": "The description of this menu item.",
            "context": ["view", "edit"],
            "type": "string",
        }
        properties["menu_item_parent"] = {
            "description": "The DB ID of the nav_menu_item that is this item's menu parent, if any. 0 otherwise.",
            "context": ["view", "edit"],
            "type": "integer",
        }
        properties["menu_order"] = {
            "description": "The position of this item within its menu.",
            "context": ["view", "edit"],
            "type": "integer",
        }
        properties["object"] = {
            "description": 'The type of object originally represented, such as "category", "post", or "attachment".',
            "context": ["view", "edit"],
        }
        properties["object_id"] = {
            "description": "The DB ID of the original object this menu item represents, e.g. ID for posts and term_id for categories.",
            "context": ["view", "edit"],
            "type": "integer",
        }
        properties["target"] = {
            "description": "The target attribute of the link element for this menu item.",
            "context": ["view", "edit"],
            "type": "string",
        }
        properties["type_label"] = {
            "description": "The singular label used to describe this type of menu item.",
            "context": ["view"],
            "type": "string",
            "readonly": True,
        }
        properties["url"] = {
            "description": "The URL to which this menu item points.",
            "type": "string",
            "format": "uri",
            "context": ["view", "edit"],
        }
        properties["xfn"] = {
            "description": "The XFN relationship expressed in the link of this menu item.",
            "context": ["view", "edit"],
            "type": "array",
            "items": {"type": "string"},
        }
        properties["_invalid"] = {
            "description": "Whether the menu item represents an object that no longer exists.",
            "context": ["view", "edit"],
            "type": "boolean",
            "readonly": True,
        }
        properties["meta"] = self.meta.get_field_schema()

        schema["links"] = [{
            "rel": "object",
            "title": "Get linked object.",
            "href": rest_url(f"{self.rest_base}/{{id}}"),
            "targetSchema": {
                "type": "object",
                "properties": {"object": {"type": "integer"}},
            },
        }]

        return add_additional_fields_schema(self.post_type, schema)

    def get_collection_params(self) -> Dict[str, Any]:
        return {
            "context": {
                "description": "Scope under which the request is made; determines fields present in response.",
                "type": "string",
                "enum": ["view", "embed", "edit"],
                "default": "view",
            },
            "page": {"description": "Current page of the collection.", "type": "integer", "default": 1, "minimum": 1},
            "per_page": {
                "description": "Maximum number of items to be returned in result set.",
                "type": "integer",
                "default": 10,
                "minimum": 1,
                "maximum": 100,
            },
            "search": {"description": "Limit results to those matching a string.", "type": "string"},
            "offset": {"description": "Offset the result set by a specific number of items.", "type": "integer"},
            "include": {
                "description": "Limit result set to specific IDs.",
                "type": "array", "items": {"type": "integer"}, "default": [],
            },
            "exclude": {
                "description": "Ensure result set excludes specific IDs.",
                "type": "array", "items": {"type": "integer"}, "default": [],
            },
            "parent": {
                "description": "Limit result set to items with particular parent IDs.",
                "type": "array", "items": {"type": "integer"}, "default": [],
            },
            "slug": {
                "description": "Limit result set to posts with one or more specific slugs.",
                "type": "array", "items": {"type": "string"},
            },
            "status": {
                "description": "Limit result set to posts assigned one or more statuses.",
                "type": "array",
                "items": {"type": "string", "enum": get_post_statuses(internal=False) + ["any"]},
                "default": ["publish"],
            },
            "menu_order": {
                "description": "Limit result set to posts with a specific menu_order value.",
                "type": "integer",
            },
            "order": {
                "description": "Order sort attribute ascending or descending.",
                "type": "string",
                "default": "asc",
                "enum": ["asc", "desc"],
            },
            "orderby": {
                "description": "Sort collection by object attribute.",
                "type": "string",
                "default": "menu_order",
                "enum": list(ORDERBY_VALUES),
            },
        }

    def validate_args(self, request: RestRequest, args_schema: Dict[str, Any]) -> None:
        """Check request values against their declared schema before any work is done."""
        errors = {}
        for name, arg in args_schema.items():
            if arg.get("readonly") or name not in request:
                continue
            if "arg_options" in arg or name == "meta":
                continue
            error = validate_value_from_schema(request[name], arg, name)
            if error:
                errors[name] = error
        if errors:
            raise RestError(
                "rest_invalid_param",
                f"Invalid parameter(s): {', '.join(errors)}",
                400,
                {"params": errors},
            )

    # Reading

    def get_nav_menu_item(self, db_session: Session, item_id: Any) -> NavMenuItem:
        post = get_post(db_session, item_id)
        if post is None or post.post_type != self.post_type:
            raise RestError("rest_post_invalid_id", "Invalid post ID.", 404)
        return setup_nav_menu_item(db_session, post)

    def prepare_links(self, item: NavMenuItem) -> Dict[str, List[Dict[str, Any]]]:
        links = {
            "self": [{"href": rest_url(f"{self.rest_base}/{item.id}")}],
            "collection": [{"href": rest_url(self.rest_base)}],
            "about": [{"href": rest_url(f"types/{self.post_type}")}],
        }

        if item.type == MenuItemType.POST_TYPE.value and item.object_id:
            post_type = get_post_type(item.object)
            if post_type is not None and post_type.show_in_rest:
                rest_base = post_type.rest_base or post_type.name
                links["object"] = [{
                    "href": rest_url(f"{rest_base}/{item.object_id}"),
                    "post_type": item.type,
                    "embeddable": True,
                }]
        elif item.type == MenuItemType.TAXONOMY.value and item.object_id:
            taxonomy = get_taxonomy(item.object)
            if taxonomy is not None and taxonomy.show_in_rest:
                rest_base = taxonomy.rest_base or taxonomy.name
                links["object"] = [{
                    "href": rest_url(f"{rest_base}/{item.object_id}"),
                    "taxonomy": item.type,
                    "embeddable": True,
                }]

        return links

    def prepare_item_for_response(self, db_session: Session, item: NavMenuItem, request: RestRequest) -> Dict[str, Any]:
        """Serialize a menu item, computing only the fields the request selects."""
        schema = self.get_item_schema()
        fields = get_fields_for_response(schema, request)
        data: Dict[str, Any] = {}

        if "id" in fields:
            data["id"] = item.id

        if "title" in fields:
            with protected_title_format.connected(self.protected_title_format):
                data["title"] = {
                    "raw": item.post_title,
                    "rendered": get_nav_menu_item_title(item),
                }

        if "menu_id" in fields:
            data["menu_id"] = get_nav_menu_item_menu_id(db_session, item.id)
        if "status" in fields:
            data["status"] = item.post_status
        if "link" in fields:
            data["link"] = item.url
        if "url" in fields:
            data["url"] = item.url
        if "attr_title" in fields:
            # Same as post_excerpt
            data["attr_title"] = item.attr_title
        if "description" in fields:
            # Same as post_content
            data["description"] = item.description
        if "type" in fields:
            data["type"] = item.type
        if "type_label" in fields:
            data["type_label"] = item.type_label
        if "object" in fields:
            data["object"] = item.object
        if "object_id" in fields:
            data["object_id"] = absint(item.object_id)
        if "db_id" in fields:
            data["db_id"] = absint(item.db_id)
        if "parent" in fields:
            data["parent"] = absint(item.post_parent)
        if "menu_item_parent" in fields:
            data["menu_item_parent"] = absint(item.menu_item_parent)
        if "menu_order" in fields:
            data["menu_order"] = absint(item.menu_order)
        if "target" in fields:
            data["target"] = item.target
        if "classes" in fields:
            data["classes"] = list(item.classes)
        if "xfn" in fields:
            data["xfn"] = list(item.xfn)
        if "_invalid" in fields:
            data["_invalid"] = item.invalid
        if "meta" in fields:
            data["meta"] = self.meta.get_value(db_session, item.id, request)

        data = add_additional_fields_to_object(self.post_type, data, item, request, fields)
        data = filter_response_by_context(data, request.context, schema)

        requested = request.get("_fields")
        if not requested or "_links" in parse_list(requested):
            data["_links"] = self.prepare_links(item)

        return prepare_nav_menu_item.apply(data, item, request)

    def prepare_items_query(self, request: RestRequest) -> Dict[str, Any]:
        """Translate collection parameters to the storage query vocabulary."""
        statuses = parse_list(request.get("status", ["publish"]))
        if "any" in statuses:
            statuses = get_post_statuses(internal=False)

        query_args: Dict[str, Any] = {
            "post_type": self.post_type,
            "post_status": statuses,
            "posts_per_page": int(request.get("per_page", 10)),
            "paged": int(request.get("page", 1)),
            "order": request.get("order", "asc"),
            "orderby": request.get("orderby", "menu_order"),
        }
        if "offset" in request:
            query_args["offset"] = absint(request["offset"])
        if "search" in request:
            query_args["s"] = request["search"]
        if parse_list(request.get("include")):
            query_args["post__in"] = [absint(value) for value in parse_list(request["include"])]
        if parse_list(request.get("exclude")):
            query_args["post__not_in"] = [absint(value) for value in parse_list(request["exclude"])]
        if parse_list(request.get("parent")):
            query_args["post_parent__in"] = [absint(value) for value in parse_list(request["parent"])]
        if parse_list(request.get("slug")):
            query_args["post_name__in"] = [str(value) for value in parse_list(request["slug"])]
        if "menu_order" in request:
            query_args["menu_order"] = int(request["menu_order"])

        # Map to the storage layer's sort keys
        if "orderby" in request:
            query_args["orderby"] = ORDERBY_MAPPINGS.get(request["orderby"], request["orderby"])

        return query_args

    def get_items(self, db_session: Session, request: RestRequest) -> RestResponse:
        check_permission(self.get_items_permissions_check, request)
        self.validate_args(request, self.get_collection_params())

        if request.get("orderby") == "relevance" and not request.get("search"):
            raise RestError(
                "rest_no_search_term_defined",
                "You need to define a search term to order by relevance.",
                400,
            )
        if request.get("orderby") == "include" and not parse_list(request.get("include")):
            raise RestError(
                "rest_orderby_include_missing_include",
                "You need to define an include parameter to order by include.",
                400,
            )

        query_args = self.prepare_items_query(request)
        posts, total = query_posts(db_session, query_args)

        per_page = query_args["posts_per_page"]
        page = query_args["paged"]
        max_pages = ceil(total / per_page) if per_page else 0
        if page > max_pages and total > 0:
            raise RestError(
                "rest_post_invalid_page_number",
                "The page number requested is larger than the number of pages available.",
                400,
            )

        data = [
            self.prepare_item_for_response(db_session, setup_nav_menu_item(db_session, post), request)
            for post in posts
        ]
        return RestResponse(
            data=data,
            headers={"X-WP-Total": str(total), "X-WP-TotalPages": str(max_pages)},
        )

    def get_item(self, db_session: Session, request: RestRequest) -> RestResponse:
        check_permission(self.get_item_permissions_check, request)
        item = self.get_nav_menu_item(db_session, request["id"])
        return RestResponse(data=self.prepare_item_for_response(db_session, item, request))

    # Writing

    def prepare_item_for_database(self, db_session: Session, request: RestRequest) -> Dict[str, Any]:
        """Build the storage payload for a create or update from the request alone."""
        prepared = dict(NAV_MENU_ITEM_DEFAULTS)
        properties = self.get_item_schema()["properties"]

        for original, api_field in FIELD_MAPPING.items():
            if properties.get(api_field) and api_field in request:
                prepared[original] = sanitize_value_from_schema(request[api_field], properties[api_field])

        # Nav menu title
        if properties.get("title") and "title" in request:
            title = request["title"]
            if isinstance(title, str):
                prepared["menu-item-title"] = title
            elif isinstance(title, dict) and title.get("raw"):
                prepared["menu-item-title"] = title["raw"]

        if not prepared["menu-item-object"] and prepared["menu-item-object-id"]:
            if prepared["menu-item-type"] == MenuItemType.TAXONOMY.value:
                term = get_term(db_session, prepared["menu-item-object-id"])
                if term is None:
                    raise RestError("rest_term_invalid_id", "Invalid term ID.", 400)
                prepared["menu-item-object"] = term.taxonomy
            elif prepared["menu-item-type"] == MenuItemType.POST_TYPE.value:
                post = get_post(db_session, prepared["menu-item-object-id"])
                if post is None:
                    raise RestError("rest_post_invalid_id", "Invalid post ID.", 400)
                prepared["menu-item-object"] = post.post_type

        prepared["menu-item-classes"] = " ".join(
            filter(None, (sanitize_html_class(value) for value in parse_list(prepared["menu-item-classes"])))
        )
        prepared["menu-item-xfn"] = " ".join(
            filter(None, (sanitize_html_class(value) for value in parse_list(prepared["menu-item-xfn"])))
        )

        return pre_insert_nav_menu_item.apply(prepared, request)

    def _save_item(self, db_session: Session, request: RestRequest, item_id: int) -> NavMenuItem:
        """Shared create/update pipeline. The first failure aborts the rest."""
        creating = not item_id
        prepared = self.prepare_item_for_database(db_session, request)
        menu_id = absint(request.get("menu_id", 0))

        try:
            nav_menu_item_id = update_nav_menu_item(db_session, menu_id, item_id, prepared)
        except StoreError as e:
            internal_error = "db_insert_error" if creating else "db_update_error"
            status = 500 if e.code == internal_error else 400
            logger.warning(f"Menu item {item_id} write rejected: {e.code} ({status})")
            raise RestError(e.code, e.message, status)

        try:
            item = self.get_nav_menu_item(db_session, nav_menu_item_id)
        except RestError as e:
            raise e.with_status(404)

        insert_nav_menu_item.send(item, request, creating)

        schema = self.get_item_schema()
        if schema["properties"].get("meta") and "meta" in request:
            self.meta.update_value(db_session, request["meta"], nav_menu_item_id)

        item = self.get_nav_menu_item(db_session, nav_menu_item_id)
        update_additional_fields_for_object(self.post_type, item, request)

        request.set_param("context", "edit")
        after_insert_nav_menu_item.send(item, request, creating)
        return item

    def create_item(self, db_session: Session, request: RestRequest) -> RestResponse:
        check_permission(self.create_item_permissions_check, request)
        if request.get("id"):
            raise RestError("rest_post_exists", "Cannot create existing post.", 400)
        self.validate_args(request, self.get_item_schema()["properties"])

        item = self._save_item(db_session, request, 0)
        data = self.prepare_item_for_response(db_session, item, request)
        return RestResponse(
            data=data,
            status=201,
            headers={"Location": rest_url(f"{self.rest_base}/{item.id}")},
        )

    def update_item(self, db_session: Session, request: RestRequest) -> RestResponse:
        check_permission(self.update_item_permissions_check, request)
        valid_check = self.get_nav_menu_item(db_session, request["id"])
        self.validate_args(request, self.get_item_schema()["properties"])

        item = self._save_item(db_session, request, valid_check.id)
        return RestResponse(data=self.prepare_item_for_response(db_session, item, request))

    def delete_item(self, db_session: Session, request: RestRequest) -> RestResponse:
        check_permission(self.delete_item_permissions_check, request)
        item = self.get_nav_menu_item(db_session, request["id"])
        force = sanitize_boolean(request.get("force", False))
        request.set_param("context", "edit")

        if force:
            previous = self.prepare_item_for_response(db_session, item, request)
            delete_nav_menu_item(db_session, item.post)
            data = {"deleted": True, "previous": previous}
        else:
            if item.post_status == "trash":
                raise RestError("rest_already_trashed", "The post has already been deleted.", 410)
            trash_nav_menu_item(db_session, item.post)
            item = self.get_nav_menu_item(db_session, item.id)
            data = self.prepare_item_for_response(db_session, item, request)

        delete_nav_menu_item_action.send(item, data, request)
        return RestResponse(data=data)


controller = MenuItemsController()

router = APIRouter(prefix="/menu-items", tags=["menu-items"])


def get_menu_items_controller() -> MenuItemsController:
    return controller


def _send(response: Response, result: RestResponse) -> Any:
    response.status_code = result.status
    for name, value in result.headers.items():
        response.headers[name] = value
    return result.data


@router.options("")
async def menu_items_schema(
    menu_items: MenuItemsController = Depends(get_menu_items_controller)
) -> Dict[str, Any]:
    """Describe the menu items endpoint and its item schema."""
    return {
        "namespace": menu_items.namespace,
        "methods": ["GET", "POST"],
        "args": menu_items.get_collection_params(),
        "schema": get_public_item_schema(menu_items.get_item_schema()),
    }


@router.get("")
async def list_menu_items(
    response: Response,
    context: str = Query(default="view", description="view, embed or edit"),
    page: int = Query(default=1, description="Current page of the collection"),
    per_page: int = Query(default=10, description="Items per page"),
    search: Optional[str] = Query(default=None, description="Limit results to those matching a string"),
    offset: Optional[int] = Query(default=None, description="Offset the result set"),
    include: Optional[List[int]] = Query(default=None, description="Limit result set to specific IDs"),
    exclude: Optional[List[int]] = Query(default=None, description="Exclude specific IDs"),
    parent: Optional[List[int]] = Query(default=None, description="Limit result set to parent IDs"),
    slug: Optional[List[str]] = Query(default=None, description="Limit result set to slugs"),
    status: Optional[List[str]] = Query(default=None, description="Limit result set to statuses"),
    order: str = Query(default="asc", description="asc or desc"),
    orderby: str = Query(default="menu_order", description="Sort collection by object attribute"),
    menu_order: Optional[int] = Query(default=None, description="Limit result set to a menu_order value"),
    fields: Optional[str] = Query(default=None, alias="_fields", description="Fields to include"),
    menu_items: MenuItemsController = Depends(get_menu_items_controller),
    db_session: Session = Depends(get_session)
) -> List[Dict[str, Any]]:
    """List menu items."""
    params = {
        "context": validate_context(context),
        "page": page,
        "per_page": per_page,
        "search": search,
        "offset": offset,
        "include": include,
        "exclude": exclude,
        "parent": parent,
        "slug": slug,
        "status": status,
        "order": order,
        "orderby": orderby,
        "menu_order": menu_order,
        "_fields": fields,
    }
    request = RestRequest("GET", params, route=f"/{menu_items.rest_base}")
    return _send(response, menu_items.get_items(db_session, request))


@router.post("")
async def create_menu_item(
    item_data: MenuItemRequest,
    response: Response,
    menu_items: MenuItemsController = Depends(get_menu_items_controller),
    db_session: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Create a menu item."""
    request = RestRequest("POST", item_data.to_params(), route=f"/{menu_items.rest_base}")
    return _send(response, menu_items.create_item(db_session, request))


@router.get("/{item_id}")
async def get_menu_item(
    item_id: int,
    response: Response,
    context: str = Query(default="view", description="view, embed or edit"),
    fields: Optional[str] = Query(default=None, alias="_fields", description="Fields to include"),
    menu_items: MenuItemsController = Depends(get_menu_items_controller),
    db_session: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Get a single menu item."""
    params = {"id": item_id, "context": validate_context(context), "_fields": fields}
    request = RestRequest("GET", params, route=f"/{menu_items.rest_base}/{item_id}")
    return _send(response, menu_items.get_item(db_session, request))


@router.put("/{item_id}")
@router.patch("/{item_id}")
async def update_menu_item(
    item_id: int,
    response: Response,
    item_data: Optional[MenuItemRequest] = None,
    menu_items: MenuItemsController = Depends(get_menu_items_controller),
    db_session: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Update a menu item."""
    params = item_data.to_params() if item_data is not None else {}
    params["id"] = item_id
    request = RestRequest("PUT", params, route=f"/{menu_items.rest_base}/{item_id}")
    return _send(response, menu_items.update_item(db_session, request))


@router.delete("/{item_id}")
async def delete_menu_item(
    item_id: int,
    response: Response,
    force: bool = Query(default=False, description="Bypass trash and delete permanently"),
    menu_items: MenuItemsController = Depends(get_menu_items_controller),
    db_session: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Trash or permanently delete a menu item."""
    params = {"id": item_id, "force": force}
    request = RestRequest("DELETE", params, route=f"/{menu_items.rest_base}/{item_id}")
    return _send(response, menu_items.delete_item(db_session, request))
