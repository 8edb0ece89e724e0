"""
Resource configuration for contract testing
Centralized definition of the User resource endpoints and observed conventions
"""

from typing import Dict, FrozenSet, Tuple
from dataclasses import dataclass


# Status the remote API returns for GET of an id that does not exist.
# REST convention would be 404; the API answers 400 (PARAMS_NOT_VALID).
GET_NOT_FOUND_STATUS = 400

# DELETE of an id that does not exist answers 404 (RESOURCE_NOT_FOUND).
DELETE_NOT_FOUND_STATUS = 404

EMAIL_ALREADY_USED = "Email already used"


@dataclass(frozen=True)
class ResourceConfig:
    """Configuration for a testable resource"""
    name: str
    list_endpoint: str
    create_endpoint: str
    item_endpoint: str
    list_item_keys: FrozenSet[str]
    default_page: int = 0
    default_limit: int = 20
    cleanup_ok_statuses: Tuple[int, ...] = (200, DELETE_NOT_FOUND_STATUS)
    get_not_found_status: int = GET_NOT_FOUND_STATUS
    delete_not_found_status: int = DELETE_NOT_FOUND_STATUS

    def item(self, resource_id: str) -> str:
        return self.item_endpoint.format(id=resource_id)


RESOURCE_CONFIGS: Dict[str, ResourceConfig] = {
    "user": ResourceConfig(
        name="user",
        list_endpoint="/user",
        create_endpoint="/user/create",
        item_endpoint="/user/{id}",
        list_item_keys=frozenset({"id", "title", "firstName", "lastName", "picture"}),
    ),
}


def get_resource_config(resource_name: str = "user") -> ResourceConfig:
    """Get configuration for a specific resource"""
    if resource_name not in RESOURCE_CONFIGS:
        raise ValueError(f"Unknown resource: {resource_name}")
    return RESOURCE_CONFIGS[resource_name]
