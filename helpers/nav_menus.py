"""
Navigation menu item storage.

A menu item is a post of type nav_menu_item plus a set of _menu_item_* meta
values, attached to its menu (a nav_menu term) through a term relationship.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from helpers.hooks import protected_title_format
from helpers.links import get_permalink, get_post_type_archive_link, get_term_link
from helpers.registry import PostType, get_post_type, get_taxonomy
from helpers.rest import StoreError
from helpers.sanitize import absint, esc_url_raw, parse_list
from helpers.storage import (
    delete_object_terms, delete_post_meta, get_object_terms, get_post, get_single_post_meta,
    get_term, set_object_term, update_post_meta,
)
from models.posts import Post
from models.terms import Term, TermRelationship
from settings import logger

NAV_MENU_ITEM_POST_TYPE = "nav_menu_item"
NAV_MENU_TAXONOMY = "nav_menu"


class MenuItemType(str, Enum):
    """What a menu item points at."""
    TAXONOMY = "taxonomy"
    POST_TYPE = "post_type"
    POST_TYPE_ARCHIVE = "post_type_archive"
    CUSTOM = "custom"


NAV_MENU_ITEM_DEFAULTS: Dict[str, Any] = {
    "menu-item-db-id": 0,
    "menu-item-object-id": 0,
    "menu-item-object": "",
    "menu-item-parent-id": 0,
    "menu-item-position": 0,
    "menu-item-type": MenuItemType.CUSTOM.value,
    "menu-item-title": "",
    "menu-item-url": "",
    "menu-item-description": "",
    "menu-item-attr-title": "",
    "menu-item-target": "",
    "menu-item-classes": "",
    "menu-item-xfn": "",
    "menu-item-status": "publish",
}


@dataclass
class NavMenuItem:
    """Read view of a menu item, derived from its post and meta on every request."""
    post: Post
    db_id: int
    menu_item_parent: int
    object_id: int
    object: str
    type: str
    type_label: str
    url: str
    target: str
    attr_title: str
    description: str
    classes: List[str] = field(default_factory=list)
    xfn: List[str] = field(default_factory=list)
    invalid: bool = False
    original: Optional[Union[Post, Term, PostType]] = None

    @property
    def id(self) -> int:
        return self.post.id

    @property
    def post_title(self) -> str:
        return self.post.post_title

    @property
    def post_status(self) -> str:
        return self.post.post_status

    @property
    def post_parent(self) -> int:
        return self.post.post_parent

    @property
    def menu_order(self) -> int:
        return self.post.menu_order


def the_title(title: str, post: Optional[Post] = None) -> str:
    """Display form of a post title."""
    if post is not None and post.post_password:
        title_format = protected_title_format.apply("Protected: %s", post)
        title = title_format.replace("%s", title)
    return title.strip()


def get_nav_menu_item_title(item: NavMenuItem) -> str:
    """Rendered title: the item's own title, falling back to the referenced object's."""
    if item.post_title:
        return the_title(item.post_title, item.post)

    original = item.original
    if isinstance(original, Post):
        title = the_title(original.post_title, original)
        return title or f"#{original.id} (no title)"
    if isinstance(original, Term):
        return original.name
    if isinstance(original, PostType):
        return original.archive_label or original.singular_label
    return ""


def setup_nav_menu_item(session: Session, post: Post) -> NavMenuItem:
    """Build the menu item view of a nav_menu_item post."""
    item_type = get_single_post_meta(session, post.id, "_menu_item_type", MenuItemType.CUSTOM.value)
    object_name = get_single_post_meta(session, post.id, "_menu_item_object", "")
    object_id = absint(get_single_post_meta(session, post.id, "_menu_item_object_id", 0))

    invalid = False
    original = None
    type_label = ""
    url = ""

    if item_type == MenuItemType.POST_TYPE.value:
        post_type = get_post_type(object_name)
        if post_type is not None:
            type_label = post_type.singular_label
        else:
            type_label = object_name
            invalid = True
        original = get_post(session, object_id)
        if original is None or original.post_status == "trash":
            invalid = True
        if original is not None:
            url = get_permalink(original)

    elif item_type == MenuItemType.POST_TYPE_ARCHIVE.value:
        original = get_post_type(object_name)
        type_label = "Post Type Archive"
        if original is not None:
            url = get_post_type_archive_link(original.name)
        else:
            invalid = True

    elif item_type == MenuItemType.TAXONOMY.value:
        taxonomy = get_taxonomy(object_name)
        if taxonomy is not None:
            type_label = taxonomy.singular_label
        else:
            type_label = object_name
            invalid = True
        original = get_term(session, object_id, object_name)
        if original is not None:
            url = get_term_link(original)
        else:
            invalid = True

    else:
        type_label = "Custom Link"
        url = get_single_post_meta(session, post.id, "_menu_item_url", "")

    return NavMenuItem(
        post=post,
        db_id=post.id,
        menu_item_parent=absint(get_single_post_meta(session, post.id, "_menu_item_menu_item_parent", 0)),
        object_id=object_id,
        object=object_name,
        type=item_type,
        type_label=type_label,
        url=url,
        target=get_single_post_meta(session, post.id, "_menu_item_target", ""),
        attr_title=post.post_excerpt,
        description=post.post_content,
        classes=parse_list(get_single_post_meta(session, post.id, "_menu_item_classes", "")),
        xfn=parse_list(get_single_post_meta(session, post.id, "_menu_item_xfn", "")),
        invalid=invalid,
        original=original,
    )


def get_nav_menu_items(session: Session, menu: Term, statuses=("publish", "draft")) -> List[Post]:
    statement = (
        select(Post)
        .join(TermRelationship, TermRelationship.object_id == Post.id)
        .where(TermRelationship.term_id == menu.term_id)
        .where(Post.post_type == NAV_MENU_ITEM_POST_TYPE)
        .where(Post.post_status.in_(statuses))
        .order_by(Post.menu_order, Post.id)
    )
    return list(session.exec(statement).all())


def get_nav_menu_item_menu_id(session: Session, item_id: int) -> int:
    menus = get_object_terms(session, item_id, NAV_MENU_TAXONOMY)
    return menus[0].term_id if menus else 0


def update_nav_menu_item(session: Session, menu_id: int, item_id: int, data: Dict[str, Any]) -> int:
    """
    Create (item_id 0) or update a menu item and return its id.

    Raises StoreError: invalid_menu_id, update_nav_menu_item_failed,
    db_insert_error or db_update_error.
    """
    creating = not item_id

    menu = None
    if menu_id:
        menu = get_term(session, menu_id, NAV_MENU_TAXONOMY)
        if menu is None:
            raise StoreError("invalid_menu_id", "Invalid menu ID.")

    existing = None
    if not creating:
        existing = get_post(session, item_id)
        if existing is None or existing.post_type != NAV_MENU_ITEM_POST_TYPE:
            raise StoreError("update_nav_menu_item_failed", "The given object ID is not that of a menu item.")

    args = {**NAV_MENU_ITEM_DEFAULTS, **data}
    args["menu-item-object-id"] = absint(args["menu-item-object-id"])
    args["menu-item-parent-id"] = absint(args["menu-item-parent-id"])
    args["menu-item-position"] = absint(args["menu-item-position"])

    if args["menu-item-type"] == MenuItemType.CUSTOM.value:
        args["menu-item-object"] = "custom"
        args["menu-item-object-id"] = item_id

    if item_id and args["menu-item-parent-id"] == item_id:
        args["menu-item-parent-id"] = 0

    # Position 0 appends the item after the last one in its menu
    if args["menu-item-position"] == 0 and menu is not None:
        menu_items = [post for post in get_nav_menu_items(session, menu) if post.id != item_id]
        args["menu-item-position"] = menu_items[-1].menu_order + 1 if menu_items else 0

    try:
        if existing is None:
            post = Post(post_type=NAV_MENU_ITEM_POST_TYPE)
        else:
            post = existing
            post.post_modified = datetime.now(timezone.utc)
        post.post_title = args["menu-item-title"]
        post.post_content = args["menu-item-description"]
        post.post_excerpt = args["menu-item-attr-title"]
        post.post_status = args["menu-item-status"]
        post.menu_order = args["menu-item-position"]
        session.add(post)
        session.flush()

        if not post.post_name:
            post.post_name = str(post.id)
        if args["menu-item-type"] == MenuItemType.CUSTOM.value:
            args["menu-item-object-id"] = post.id

        update_post_meta(session, post.id, "_menu_item_type", args["menu-item-type"])
        update_post_meta(session, post.id, "_menu_item_menu_item_parent", args["menu-item-parent-id"])
        update_post_meta(session, post.id, "_menu_item_object_id", args["menu-item-object-id"])
        update_post_meta(session, post.id, "_menu_item_object", args["menu-item-object"])
        update_post_meta(session, post.id, "_menu_item_target", args["menu-item-target"])
        update_post_meta(session, post.id, "_menu_item_classes", args["menu-item-classes"])
        update_post_meta(session, post.id, "_menu_item_xfn", args["menu-item-xfn"])
        update_post_meta(session, post.id, "_menu_item_url", esc_url_raw(args["menu-item-url"]))

        if menu is not None:
            set_object_term(session, post.id, menu)

        session.commit()
        session.refresh(post)
    except SQLAlchemyError as e:
        session.rollback()
        code = "db_insert_error" if creating else "db_update_error"
        logger.error(f"Menu item write failed (item {item_id}, menu {menu_id}): {e}")
        if creating:
            raise StoreError(code, "Could not insert post into the database.")
        raise StoreError(code, "Could not update post in the database.")

    logger.info(f"Menu item {post.id} {'created' if creating else 'updated'} in menu {menu_id}")
    return post.id


def trash_nav_menu_item(session: Session, post: Post) -> Post:
    update_post_meta(session, post.id, "_trash_meta_status", post.post_status)
    post.post_status = "trash"
    post.post_modified = datetime.now(timezone.utc)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post


def delete_nav_menu_item(session: Session, post: Post) -> None:
    """Remove the item together with its meta and menu relationship."""
    item_id = post.id
    delete_post_meta(session, item_id)
    delete_object_terms(session, item_id)
    session.delete(post)
    session.commit()
    logger.info(f"Menu item {item_id} deleted")
