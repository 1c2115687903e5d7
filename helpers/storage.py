"""
Post, meta and term access used by the REST controllers.
"""

from typing import Any, List, Optional

from sqlmodel import Session, select

from models.posts import Post, PostMeta
from models.terms import Term, TermRelationship


def get_post(session: Session, post_id: Any) -> Optional[Post]:
    try:
        post_id = int(post_id)
    except (TypeError, ValueError):
        return None
    if post_id <= 0:
        return None
    return session.get(Post, post_id)


def get_term(session: Session, term_id: Any, taxonomy: Optional[str] = None) -> Optional[Term]:
    try:
        term_id = int(term_id)
    except (TypeError, ValueError):
        return None
    if term_id <= 0:
        return None
    term = session.get(Term, term_id)
    if term is None or (taxonomy is not None and term.taxonomy != taxonomy):
        return None
    return term


def get_post_meta(session: Session, post_id: int, key: str) -> List[Any]:
    """All stored values for a meta key, oldest first."""
    statement = (
        select(PostMeta)
        .where(PostMeta.post_id == post_id)
        .where(PostMeta.meta_key == key)
        .order_by(PostMeta.meta_id)
    )
    return [row.meta_value for row in session.exec(statement).all()]


def get_single_post_meta(session: Session, post_id: int, key: str, default: Any = "") -> Any:
    values = get_post_meta(session, post_id, key)
    return values[0] if values else default


def update_post_meta(session: Session, post_id: int, key: str, value: Any) -> None:
    """Replace every stored value of the key with a single value. Does not commit."""
    statement = select(PostMeta).where(PostMeta.post_id == post_id).where(PostMeta.meta_key == key)
    rows = session.exec(statement).all()
    if rows:
        rows[0].meta_value = value
        session.add(rows[0])
        for row in rows[1:]:
            session.delete(row)
    else:
        session.add(PostMeta(post_id=post_id, meta_key=key, meta_value=value))


def add_post_meta(session: Session, post_id: int, key: str, value: Any) -> None:
    session.add(PostMeta(post_id=post_id, meta_key=key, meta_value=value))


def delete_post_meta(session: Session, post_id: int, key: Optional[str] = None) -> None:
    statement = select(PostMeta).where(PostMeta.post_id == post_id)
    if key is not None:
        statement = statement.where(PostMeta.meta_key == key)
    for row in session.exec(statement).all():
        session.delete(row)


def get_object_terms(session: Session, object_id: int, taxonomy: str) -> List[Term]:
    statement = (
        select(Term)
        .join(TermRelationship, TermRelationship.term_id == Term.term_id)
        .where(TermRelationship.object_id == object_id)
        .where(Term.taxonomy == taxonomy)
        .order_by(Term.term_id)
    )
    return list(session.exec(statement).all())


def set_object_term(session: Session, object_id: int, term: Term) -> None:
    """Make the term the only one of its taxonomy attached to the object. Does not commit."""
    attached = False
    for existing in get_object_terms(session, object_id, term.taxonomy):
        if existing.term_id == term.term_id:
            attached = True
            continue
        relationship = session.get(TermRelationship, (object_id, existing.term_id))
        if relationship is not None:
            session.delete(relationship)
    if not attached:
        session.add(TermRelationship(object_id=object_id, term_id=term.term_id))


def delete_object_terms(session: Session, object_id: int) -> None:
    statement = select(TermRelationship).where(TermRelationship.object_id == object_id)
    for row in session.exec(statement).all():
        session.delete(row)
