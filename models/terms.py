from sqlmodel import SQLModel, Field
from typing import Optional


class Term(SQLModel, table=True):
    """Taxonomy term. Navigation menus are terms of the nav_menu taxonomy."""
    term_id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    slug: str = Field(default="", index=True)
    taxonomy: str = Field(index=True)
    description: str = Field(default="")
    parent: int = Field(default=0)


class TermRelationship(SQLModel, table=True):
    """Links a post to a term."""
    object_id: int = Field(foreign_key="post.id", primary_key=True)
    term_id: int = Field(foreign_key="term.term_id", primary_key=True)
