from models.posts import Post
from models.terms import Term
from settings import SITE_URL


def get_permalink(post: Post) -> str:
    """Public URL of a post, using query-string permalinks."""
    if post.post_type == "page":
        return f"{SITE_URL}/?page_id={post.id}"
    if post.post_type == "post":
        return f"{SITE_URL}/?p={post.id}"
    return f"{SITE_URL}/?post_type={post.post_type}&p={post.id}"


def get_term_link(term: Term) -> str:
    if term.taxonomy == "category":
        return f"{SITE_URL}/?cat={term.term_id}"
    if term.taxonomy == "post_tag":
        return f"{SITE_URL}/?tag={term.slug}"
    return f"{SITE_URL}/?{term.taxonomy}={term.slug}"


def get_post_type_archive_link(post_type: str) -> str:
    if post_type == "post":
        return f"{SITE_URL}/"
    return f"{SITE_URL}/?post_type={post_type}"
