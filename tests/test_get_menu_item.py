"""
Feature: Get a single navigation menu item
  As an API client
  I want to read one menu item
  So that I can render or edit it

Scenario: Read an item in the view context
  Given a menu item exists
  When I GET /menu-items/{id}
  Then the response holds the display fields but not edit-only ones

Scenario: Read an item in the edit context
  When I GET /menu-items/{id}?context=edit
  Then the raw title and menu id are included

Scenario: Select fields
  When I GET /menu-items/{id}?_fields=id,title
  Then only the selected fields are computed and returned

Scenario: Read a missing item
  When I GET /menu-items/{id} for an unknown id or a post that is not a menu item
  Then the system returns 404 Not Found error

Scenario: Referenced object was deleted
  Given a menu item points at a post that no longer exists
  When I read the item
  Then it is flagged as invalid
"""

import pytest
from fastapi import Response
from sqlmodel import create_engine, Session, SQLModel
from models.posts import Post
from models.terms import Term
from apis.menu_items import controller, get_menu_item
from helpers.hooks import protected_title_format
from helpers.nav_menus import the_title, update_nav_menu_item
from helpers.rest import RestError
from settings import rest_url


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


@pytest.fixture(name="item_id")
def item_id_fixture(session: Session, menu: Term):
    return update_nav_menu_item(session, menu.term_id, 0, {
        "menu-item-title": "Home",
        "menu-item-url": "http://example.com/",
        "menu-item-attr-title": "Go home",
        "menu-item-description": "The front page",
        "menu-item-target": "_blank",
    })


async def get(session, item_id, context="view", fields=None):
    return await get_menu_item(
        item_id=item_id,
        response=Response(),
        context=context,
        fields=fields,
        menu_items=controller,
        db_session=session
    )


@pytest.mark.asyncio
async def test_get_menu_item_view_context(session, item_id):
    data = await get(session, item_id)

    assert data["id"] == item_id
    assert data["title"] == {"rendered": "Home"}
    assert data["type_label"] == "Custom Link"
    assert data["attr_title"] == "Go home"
    assert data["description"] == "The front page"
    assert data["target"] == "_blank"
    assert data["url"] == "http://example.com/"
    assert "menu_id" not in data
    assert data["_links"]["collection"][0]["href"] == rest_url("menu-items")
    assert data["_links"]["about"][0]["href"] == rest_url("types/nav_menu_item")
    assert "object" not in data["_links"]


@pytest.mark.asyncio
async def test_get_menu_item_edit_context(session, menu, item_id):
    data = await get(session, item_id, context="edit")

    assert data["title"] == {"raw": "Home", "rendered": "Home"}
    assert data["menu_id"] == menu.term_id
    assert "type_label" not in data


@pytest.mark.asyncio
async def test_get_menu_item_embed_context(session, item_id):
    data = await get(session, item_id, context="embed")

    assert set(data) == {"id", "title", "type", "link", "_links"}


@pytest.mark.asyncio
async def test_get_menu_item_selected_fields(session, item_id):
    data = await get(session, item_id, fields="id,title")

    assert data == {"id": item_id, "title": {"rendered": "Home"}}


@pytest.mark.asyncio
async def test_get_menu_item_selected_fields_with_links(session, item_id):
    data = await get(session, item_id, fields="id,_links")

    assert set(data) == {"id", "_links"}


@pytest.mark.asyncio
async def test_get_menu_item_not_found(session, item_id):
    with pytest.raises(RestError) as exc_info:
        await get(session, 9999)

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "rest_post_invalid_id"


@pytest.mark.asyncio
async def test_get_menu_item_wrong_post_type(session):
    page = Post(post_type="page", post_title="About")
    session.add(page)
    session.commit()
    session.refresh(page)

    with pytest.raises(RestError) as exc_info:
        await get(session, page.id)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_get_menu_item_with_deleted_object_is_invalid(session, menu):
    page = Post(post_type="page", post_title="Gone")
    session.add(page)
    session.commit()
    session.refresh(page)
    item_id = update_nav_menu_item(session, menu.term_id, 0, {
        "menu-item-type": "post_type",
        "menu-item-object": "page",
        "menu-item-object-id": page.id,
    })
    session.delete(page)
    session.commit()

    data = await get(session, item_id)

    assert data["_invalid"] is True
    assert data["type_label"] == "Page"


@pytest.mark.asyncio
async def test_get_menu_item_shows_protected_title_plainly(session, menu):
    page = Post(post_type="page", post_title="Members", post_password="secret")
    session.add(page)
    session.commit()
    session.refresh(page)
    item_id = update_nav_menu_item(session, menu.term_id, 0, {
        "menu-item-type": "post_type",
        "menu-item-object": "page",
        "menu-item-object-id": page.id,
    })

    data = await get(session, item_id)

    assert data["title"]["rendered"] == "Members"
    # The plain format only applies while the response is built
    assert protected_title_format.listeners == []
    assert the_title("Members", page) == "Protected: Members"
