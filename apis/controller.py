from typing import Any, Dict, Optional, Protocol, runtime_checkable

from helpers.rest import RestRequest


@runtime_checkable
class ResourceController(Protocol):
    """
    Capabilities every REST resource controller offers.

    Controllers satisfy this structurally. Shared behavior (public schema,
    field selection, context filtering, permission enforcement) comes from
    helpers.rest rather than from a base class.
    """

    namespace: str
    rest_base: str

    def get_item_schema(self) -> Optional[Dict[str, Any]]:
        ...

    def get_collection_params(self) -> Dict[str, Any]:
        ...

    def get_items_permissions_check(self, request: RestRequest) -> bool:
        ...

    def get_item_permissions_check(self, request: RestRequest) -> bool:
        ...

    def create_item_permissions_check(self, request: RestRequest) -> bool:
        ...

    def update_item_permissions_check(self, request: RestRequest) -> bool:
        ...

    def delete_item_permissions_check(self, request: RestRequest) -> bool:
        ...
