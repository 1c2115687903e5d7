from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class PostType:
    """Registered post type."""
    name: str
    singular_label: str
    archive_label: str = ""
    rest_base: str = ""
    show_in_rest: bool = False
    has_archive: bool = False


@dataclass
class Taxonomy:
    """Registered taxonomy."""
    name: str
    singular_label: str
    rest_base: str = ""
    show_in_rest: bool = False


@dataclass
class PostStatus:
    """Registered post status. Internal statuses are never offered to clients."""
    name: str
    label: str
    internal: bool = False


_post_types: Dict[str, PostType] = {}
_taxonomies: Dict[str, Taxonomy] = {}
_post_statuses: Dict[str, PostStatus] = {}


def register_post_type(post_type: PostType) -> PostType:
    _post_types[post_type.name] = post_type
    return post_type


def get_post_type(name: str) -> Optional[PostType]:
    return _post_types.get(name)


def register_taxonomy(taxonomy: Taxonomy) -> Taxonomy:
    _taxonomies[taxonomy.name] = taxonomy
    return taxonomy


def get_taxonomy(name: str) -> Optional[Taxonomy]:
    return _taxonomies.get(name)


def register_post_status(status: PostStatus) -> PostStatus:
    _post_statuses[status.name] = status
    return status


def unregister_post_status(name: str) -> None:
    _post_statuses.pop(name, None)


def get_post_statuses(internal: Optional[bool] = None) -> List[str]:
    """Registered status names, optionally restricted by their internal flag."""
    return [
        status.name for status in _post_statuses.values()
        if internal is None or status.internal == internal
    ]


def register_defaults() -> None:
    """Built-in post types, taxonomies and statuses."""
    register_post_type(PostType("post", "Post", "Posts", rest_base="posts", show_in_rest=True, has_archive=True))
    register_post_type(PostType("page", "Page", "Pages", rest_base="pages", show_in_rest=True))
    register_post_type(PostType("attachment", "Media", "Media", rest_base="media", show_in_rest=True))
    register_post_type(PostType("nav_menu_item", "Navigation Menu Item", "Navigation Menu Items"))

    register_taxonomy(Taxonomy("category", "Category", rest_base="categories", show_in_rest=True))
    register_taxonomy(Taxonomy("post_tag", "Tag", rest_base="tags", show_in_rest=True))
    register_taxonomy(Taxonomy("nav_menu", "Navigation Menu"))

    register_post_status(PostStatus("publish", "Published"))
    register_post_status(PostStatus("future", "Scheduled"))
    register_post_status(PostStatus("draft", "Draft"))
    register_post_status(PostStatus("pending", "Pending"))
    register_post_status(PostStatus("private", "Private"))
    register_post_status(PostStatus("trash", "Trash", internal=True))
    register_post_status(PostStatus("auto-draft", "Auto Draft", internal=True))
    register_post_status(PostStatus("inherit", "Inherit", internal=True))


register_defaults()
