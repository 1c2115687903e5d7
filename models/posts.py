from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON
from typing import Optional, Any
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Post(SQLModel, table=True):
    """Generic content entry. Navigation menu items are posts of type nav_menu_item."""
    id: Optional[int] = Field(default=None, primary_key=True)
    post_type: str = Field(default="post", index=True)
    post_title: str = Field(default="")
    post_name: str = Field(default="", index=True)
    post_content: str = Field(default="")
    post_excerpt: str = Field(default="")
    post_status: str = Field(default="publish", index=True)
    post_parent: int = Field(default=0, index=True)
    menu_order: int = Field(default=0, index=True)
    post_password: str = Field(default="")
    post_author: int = Field(default=0, index=True)
    post_date: datetime = Field(default_factory=_now, index=True)
    post_modified: datetime = Field(default_factory=_now)


class PostMeta(SQLModel, table=True):
    """Key/value metadata attached to a post."""
    meta_id: Optional[int] = Field(default=None, primary_key=True)
    post_id: int = Field(foreign_key="post.id", index=True)
    meta_key: str = Field(index=True)
    meta_value: Any = Field(default=None, sa_column=Column(JSON))
