"""
Feature: Extend navigation menu items
  As an extension author
  I want to hook into menu item writes and responses
  So that I can add data and rules without changing the API

Scenario: Filter the write payload
  Given a listener is connected to the pre-insert filter
  When a menu item is created
  Then the listener may change the payload or reject the write

Scenario: Observe writes and responses
  Given listeners are connected to the insert actions and the response filter
  When a menu item is created
  Then the listeners are notified and may change the response

Scenario: Registered meta round trip
  Given a meta key is registered for menu items
  When a menu item is created with a value for it
  Then the value is stored and returned

Scenario: Additional fields round trip
  Given an additional field is registered for menu items
  When a menu item is created with a value for it
  Then the update callback stores it and the get callback returns it
"""

import pytest
from fastapi import Response
from sqlmodel import create_engine, Session, SQLModel, select
from models.posts import Post
from models.terms import Term
from apis.menu_items import controller, create_menu_item
from apis.schemas.menu_items import MenuItemRequest
from helpers.fields import register_rest_field, unregister_rest_field
from helpers.hooks import (
    after_insert_nav_menu_item, insert_nav_menu_item, pre_insert_nav_menu_item, prepare_nav_menu_item,
)
from helpers.meta import register_meta, unregister_meta
from helpers.rest import RestError


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


@pytest.fixture(name="highlight_meta")
def highlight_meta_fixture():
    register_meta("post", "highlight", meta_type="boolean", default=False, object_subtype="nav_menu_item")
    yield "highlight"
    unregister_meta("post", "highlight", object_subtype="nav_menu_item")


@pytest.fixture(name="badge_field")
def badge_field_fixture():
    badges = {}

    def get_badge(item, attribute, request, object_type):
        return badges.get(item.id, "")

    def update_badge(value, item, attribute, request, object_type):
        if value == "forbidden":
            return RestError("rest_badge_invalid", "Badge not allowed.", 400)
        badges[item.id] = value

    register_rest_field(
        "nav_menu_item", "badge",
        get_callback=get_badge,
        update_callback=update_badge,
        schema={"description": "Badge text.", "type": "string", "context": ["view", "edit"]},
    )
    yield badges
    unregister_rest_field("nav_menu_item", "badge")


async def create(session, **fields):
    return await create_menu_item(
        item_data=MenuItemRequest(**fields),
        response=Response(),
        menu_items=controller,
        db_session=session
    )


@pytest.mark.asyncio
async def test_pre_insert_filter_changes_payload(session, menu):
    def shout(prepared, request):
        prepared["menu-item-title"] = prepared["menu-item-title"].upper()
        return prepared

    with pre_insert_nav_menu_item.connected(shout):
        data = await create(session, title="Home", url="http://example.com", menu_id=menu.term_id)

    assert data["title"]["raw"] == "HOME"


@pytest.mark.asyncio
async def test_pre_insert_filter_rejects_write(session, menu):
    def reject(prepared, request):
        raise RestError("rest_menu_locked", "Menu is locked.", 403)

    with pre_insert_nav_menu_item.connected(reject):
        with pytest.raises(RestError) as exc_info:
            await create(session, title="Home", url="http://example.com", menu_id=menu.term_id)

    assert exc_info.value.status_code == 403
    assert exc_info.value.code == "rest_menu_locked"
    assert session.exec(select(Post).where(Post.post_type == "nav_menu_item")).all() == []


@pytest.mark.asyncio
async def test_insert_actions_are_notified(session, menu):
    calls = []

    def on_insert(item, request, creating):
        calls.append(("insert", item.post_title, creating))

    def on_after_insert(item, request, creating):
        calls.append(("after_insert", request.context, creating))

    with insert_nav_menu_item.connected(on_insert), after_insert_nav_menu_item.connected(on_after_insert):
        await create(session, title="Home", url="http://example.com", menu_id=menu.term_id)

    assert calls == [("insert", "Home", True), ("after_insert", "edit", True)]


@pytest.mark.asyncio
async def test_response_filter_changes_response(session, menu):
    def add_flag(data, item, request):
        data["featured"] = item.menu_order == 0
        return data

    with prepare_nav_menu_item.connected(add_flag):
        data = await create(session, title="Home", url="http://example.com", menu_id=menu.term_id)

    assert data["featured"] is True


@pytest.mark.asyncio
async def test_registered_meta_round_trip(session, menu, highlight_meta):
    data = await create(session, title="Home", url="http://example.com", menu_id=menu.term_id,
                        meta={"highlight": True, "unregistered": "ignored"})

    assert data["meta"] == {"highlight": True}


@pytest.mark.asyncio
async def test_registered_meta_default(session, menu, highlight_meta):
    data = await create(session, title="Home", url="http://example.com", menu_id=menu.term_id)

    assert data["meta"] == {"highlight": False}


@pytest.mark.asyncio
async def test_registered_meta_invalid_value(session, menu, highlight_meta):
    with pytest.raises(RestError) as exc_info:
        await create(session, title="Home", url="http://example.com", menu_id=menu.term_id,
                     meta={"highlight": "very"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "rest_invalid_param"


@pytest.mark.asyncio
async def test_registered_meta_in_schema(highlight_meta):
    schema = controller.get_item_schema()

    assert schema["properties"]["meta"]["properties"]["highlight"]["type"] == "boolean"


@pytest.mark.asyncio
async def test_additional_field_round_trip(session, menu, badge_field):
    data = await create(session, title="Home", url="http://example.com", menu_id=menu.term_id, badge="new")

    assert data["badge"] == "new"
    assert badge_field[data["id"]] == "new"
    assert controller.get_item_schema()["properties"]["badge"]["type"] == "string"


@pytest.mark.asyncio
async def test_additional_field_update_error(session, menu, badge_field):
    with pytest.raises(RestError) as exc_info:
        await create(session, title="Home", url="http://example.com", menu_id=menu.term_id, badge="forbidden")

    assert exc_info.value.code == "rest_badge_invalid"


@pytest.mark.asyncio
async def test_denied_permission(session, menu, monkeypatch):
    monkeypatch.setattr(controller, "create_item_permissions_check", lambda request: False)

    with pytest.raises(RestError) as exc_info:
        await create(session, title="Home", url="http://example.com", menu_id=menu.term_id)

    assert exc_info.value.status_code == 403
    assert exc_info.value.code == "rest_forbidden"
