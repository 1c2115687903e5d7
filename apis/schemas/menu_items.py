from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union


class MenuItemTitle(BaseModel):
    """Title sent as an object."""
    raw: Optional[str] = Field(default=None, description="Title for the object, as it exists in the database")


class MenuItemRequest(BaseModel):
    """Schema for creating or updating a menu item.

    Only the keys a client actually sends are forwarded. Unknown keys are kept
    so registered additional fields can be written.
    """
    id: Optional[int] = Field(default=None, description="Must be absent when creating")
    title: Optional[Union[str, MenuItemTitle]] = Field(default=None, description="Title as a string or as {raw}")
    menu_id: Optional[int] = Field(default=None, description="Menu the item belongs to")
    type: Optional[str] = Field(default=None, description="taxonomy, post_type, post_type_archive or custom")
    status: Optional[str] = Field(default=None, description="Post status")
    parent: Optional[int] = Field(default=None, description="Parent post ID")
    attr_title: Optional[str] = Field(default=None, description="Title attribute of the link")
    classes: Optional[Union[List[str], str]] = Field(default=None, description="CSS classes of the link")
    db_id: Optional[int] = Field(default=None, description="ID of the menu item post")
    description: Optional[str] = Field(default=None, description="Item description")
    menu_item_parent: Optional[int] = Field(default=None, description="ID of the parent menu item")
    menu_order: Optional[int] = Field(default=None, description="Position within the menu")
    object: Optional[str] = Field(default=None, description="Referenced object type, resolved when omitted")
    object_id: Optional[int] = Field(default=None, description="Referenced object ID")
    target: Optional[str] = Field(default=None, description="Target attribute of the link")
    url: Optional[str] = Field(default=None, description="URL the item points to")
    xfn: Optional[Union[List[str], str]] = Field(default=None, description="XFN relationships of the link")
    meta: Optional[Dict[str, Any]] = Field(default=None, description="Registered meta values")

    model_config = {"extra": "allow"}

    def to_params(self) -> Dict[str, Any]:
        """Request parameters as sent by the client."""
        return self.model_dump(exclude_unset=True)
