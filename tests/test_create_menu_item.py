"""
Feature: Create a navigation menu item
  As an API client
  I want to add items to a navigation menu
  So that the site navigation links to the right places

Scenario: Create a custom link in a menu
  Given a navigation menu exists
  When I POST /menu-items with a title, a url and the menu id
  Then the system returns 201 with a Location header
  And the item is a custom link pointing at itself

Scenario: Items appended to a menu get increasing positions
  Given a navigation menu already holds an item
  When I create another item without a position
  Then it is placed after the last item

Scenario: Create an item referencing a term or a post
  When I create an item with a type and an object id but no object
  Then the object is resolved from the referenced term or post

Scenario: Reject invalid requests
  When I send an id, an unknown type, a missing object or an unknown menu
  Then the system returns a 400 error with a specific code

Scenario: Storage fails while saving
  When the database rejects the write
  Then the system returns 500 Internal Server Error with db_insert_error
  And the failure is logged with its cause
  When the stored item cannot be read back
  Then the system returns 404 Not Found error
"""

import logging

import pytest
from fastapi import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import create_engine, Session, SQLModel, select
from models.posts import Post
from models.terms import Term
import apis.menu_items
import helpers.nav_menus
from apis.menu_items import controller, create_menu_item
from apis.schemas.menu_items import MenuItemRequest
from helpers.rest import RestError
from settings import SITE_URL, rest_url


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="menu")
def menu_fixture(session: Session):
    menu = Term(name="Main", slug="main", taxonomy="nav_menu")
    session.add(menu)
    session.commit()
    session.refresh(menu)
    return menu


async def create(session, response=None, **fields):
    return await create_menu_item(
        item_data=MenuItemRequest(**fields),
        response=response or Response(),
        menu_items=controller,
        db_session=session
    )


@pytest.mark.asyncio
async def test_create_custom_link(session, menu):
    # Given a navigation menu exists
    response = Response()

    # When I create a custom link in it
    data = await create(session, response, title="Home", url="http://example.com", menu_id=menu.term_id)

    # Then the system returns 201 with a Location header
    assert response.status_code == 201
    assert response.headers["Location"] == rest_url(f"menu-items/{data['id']}")

    # And the item is a custom link pointing at itself
    assert data["title"] == {"raw": "Home", "rendered": "Home"}
    assert data["type"] == "custom"
    assert data["object"] == "custom"
    assert data["object_id"] == data["id"]
    assert data["db_id"] == data["id"]
    assert data["url"] == "http://example.com"
    assert data["link"] == "http://example.com"
    assert data["status"] == "publish"
    assert data["menu_id"] == menu.term_id
    assert data["menu_order"] == 0
    assert data["_invalid"] is False

    # Responses to writes are rendered in the edit context
    assert "type_label" not in data
    assert data["_links"]["self"][0]["href"] == rest_url(f"menu-items/{data['id']}")


@pytest.mark.asyncio
async def test_create_appends_to_menu(session, menu):
    first = await create(session, title="Home", url="http://example.com/", menu_id=menu.term_id)
    second = await create(session, title="About", url="http://example.com/about", menu_id=menu.term_id)

    assert first["menu_order"] == 0
    assert second["menu_order"] == 1


@pytest.mark.asyncio
async def test_create_keeps_explicit_position(session, menu):
    data = await create(session, title="Blog", url="/blog", menu_id=menu.term_id, menu_order=7)

    assert data["menu_order"] == 7
    assert data["url"] == "/blog"


@pytest.mark.asyncio
async def test_create_sanitizes_classes_and_xfn(session, menu):
    data = await create(
        session,
        title="Home",
        url="http://example.com",
        menu_id=menu.term_id,
        classes=["nav-home", "bad class!"],
        xfn="friend, met",
    )

    assert data["classes"] == ["nav-home", "badclass"]
    assert data["xfn"] == ["friend", "met"]


@pytest.mark.asyncio
async def test_create_drops_disallowed_url_protocol(session, menu):
    data = await create(session, title="Evil", url="javascript:alert(1)", menu_id=menu.term_id)

    assert data["url"] == ""


@pytest.mark.asyncio
async def test_create_taxonomy_item_resolves_object(session, menu):
    category = Term(name="News", slug="news", taxonomy="category")
    session.add(category)
    session.commit()
    session.refresh(category)

    data = await create(session, type="taxonomy", object_id=category.term_id, menu_id=menu.term_id)

    assert data["object"] == "category"
    assert data["object_id"] == category.term_id
    assert data["url"] == f"{SITE_URL}/?cat={category.term_id}"
    # Empty title falls back to the term name
    assert data["title"]["rendered"] == "News"
    assert data["_links"]["object"][0]["href"] == rest_url(f"categories/{category.term_id}")
    assert data["_links"]["object"][0]["taxonomy"] == "taxonomy"


@pytest.mark.asyncio
async def test_create_post_type_item_resolves_object(session, menu):
    page = Post(post_type="page", post_title="About us", post_name="about-us")
    session.add(page)
    session.commit()
    session.refresh(page)

    data = await create(session, type="post_type", object_id=page.id, menu_id=menu.term_id)

    assert data["object"] == "page"
    assert data["link"] == f"{SITE_URL}/?page_id={page.id}"
    assert data["title"]["rendered"] == "About us"
    assert data["_links"]["object"][0]["href"] == rest_url(f"pages/{page.id}")


@pytest.mark.asyncio
async def test_create_with_id_is_rejected(session, menu):
    with pytest.raises(RestError) as exc_info:
        await create(session, id=5, title="Home")

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "rest_post_exists"
    assert session.exec(select(Post)).all() == []


@pytest.mark.asyncio
async def test_create_with_unknown_type_is_rejected(session, menu):
    with pytest.raises(RestError) as exc_info:
        await create(session, title="Home", type="bogus")

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "rest_invalid_param"
    assert "type" in exc_info.value.data["params"]


@pytest.mark.asyncio
async def test_create_with_internal_status_is_rejected(session, menu):
    with pytest.raises(RestError) as exc_info:
        await create(session, title="Home", status="trash")

    assert exc_info.value.code == "rest_invalid_param"


@pytest.mark.asyncio
async def test_create_with_missing_term_is_rejected(session, menu):
    with pytest.raises(RestError) as exc_info:
        await create(session, type="taxonomy", object_id=999, menu_id=menu.term_id)

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "rest_term_invalid_id"
    assert session.exec(select(Post)).all() == []


@pytest.mark.asyncio
async def test_create_with_missing_post_is_rejected(session, menu):
    with pytest.raises(RestError) as exc_info:
        await create(session, type="post_type", object_id=999, menu_id=menu.term_id)

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "rest_post_invalid_id"
    assert session.exec(select(Post)).all() == []


@pytest.mark.asyncio
async def test_create_in_unknown_menu_is_rejected(session, menu):
    with pytest.raises(RestError) as exc_info:
        await create(session, title="Home", url="http://example.com", menu_id=999)

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "invalid_menu_id"


@pytest.mark.asyncio
async def test_create_insert_failure_is_server_error(session, menu, monkeypatch, caplog):
    def failing_update_post_meta(*args, **kwargs):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(helpers.nav_menus, "update_post_meta", failing_update_post_meta)

    with caplog.at_level(logging.ERROR, logger="cms_api"):
        with pytest.raises(RestError) as exc_info:
            await create(session, title="Home", url="http://example.com", menu_id=menu.term_id)

    assert exc_info.value.status_code == 500
    assert exc_info.value.code == "db_insert_error"
    assert exc_info.value.message == "Could not insert post into the database."
    assert session.exec(select(Post)).all() == []
    assert any("disk full" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_create_missing_after_write_is_not_found(session, menu, monkeypatch):
    monkeypatch.setattr(apis.menu_items, "get_post", lambda db_session, post_id: None)

    with pytest.raises(RestError) as exc_info:
        await create(session, title="Home", url="http://example.com", menu_id=menu.term_id)

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "rest_post_invalid_id"
