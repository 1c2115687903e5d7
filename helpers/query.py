"""
Post queries expressed with the storage layer's own argument vocabulary.
"""

from typing import Any, Dict, List, Tuple

from sqlalchemy import asc, case, desc, func, or_
from sqlmodel import Session, select

from models.posts import Post
from settings import logger

ORDERBY_COLUMNS = {
    "ID": Post.id,
    "date": Post.post_date,
    "modified": Post.post_modified,
    "title": Post.post_title,
    "post_name": Post.post_name,
    "parent": Post.post_parent,
    "author": Post.post_author,
    "menu_order": Post.menu_order,
}


def _position_order(column, values: List[Any]):
    """Order rows by the position of their value in an explicit list."""
    if not values:
        return Post.id
    return case({value: index for index, value in enumerate(values)}, value=column, else_=len(values))


def query_posts(session: Session, args: Dict[str, Any]) -> Tuple[List[Post], int]:
    """
    Run a post query and return one page of posts plus the total match count.

    Understood args: post_type, post_status, s, post__in, post__not_in,
    post_parent__in, post_name__in, menu_order, orderby, order,
    posts_per_page, paged, offset.
    """
    statement = select(Post)

    if args.get("post_type"):
        statement = statement.where(Post.post_type == args["post_type"])

    statuses = args.get("post_status")
    if statuses:
        if isinstance(statuses, str):
            statuses = [statuses]
        statement = statement.where(Post.post_status.in_(statuses))

    search = args.get("s")
    if search:
        pattern = f"%{search}%"
        statement = statement.where(or_(
            Post.post_title.ilike(pattern),
            Post.post_content.ilike(pattern),
            Post.post_excerpt.ilike(pattern),
        ))

    if args.get("post__in"):
        statement = statement.where(Post.id.in_(args["post__in"]))
    if args.get("post__not_in"):
        statement = statement.where(Post.id.not_in(args["post__not_in"]))
    if args.get("post_parent__in"):
        statement = statement.where(Post.post_parent.in_(args["post_parent__in"]))
    if args.get("post_name__in"):
        statement = statement.where(Post.post_name.in_(args["post_name__in"]))
    if args.get("menu_order") is not None:
        statement = statement.where(Post.menu_order == args["menu_order"])

    total = session.exec(select(func.count()).select_from(statement.subquery())).one()

    orderby = args.get("orderby", "date")
    direction = desc if str(args.get("order", "desc")).lower() == "desc" else asc

    if orderby == "post__in":
        statement = statement.order_by(_position_order(Post.id, args.get("post__in", [])))
    elif orderby == "post_name__in":
        statement = statement.order_by(_position_order(Post.post_name, args.get("post_name__in", [])))
    elif orderby == "relevance" and search:
        statement = statement.order_by(
            case((Post.post_title.ilike(f"%{search}%"), 0), else_=1),
            desc(Post.post_date),
        )
    else:
        column = ORDERBY_COLUMNS.get(orderby, Post.post_date)
        statement = statement.order_by(direction(column), direction(Post.id))

    per_page = int(args.get("posts_per_page", 10))
    offset = args.get("offset")
    if offset is None:
        offset = (int(args.get("paged", 1)) - 1) * per_page
    statement = statement.offset(int(offset)).limit(per_page)

    posts = list(session.exec(statement).all())
    logger.debug(f"Post query by {orderby}: {len(posts)} of {total} returned")
    return posts, total
