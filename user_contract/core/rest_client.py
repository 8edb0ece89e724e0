"""
Lightweight app-id authenticated REST client for contract testing
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from user_contract.config import TestConfig, get_config
from user_contract.errors import UnexpectedStatusError
from user_contract.resources import ResourceConfig, get_resource_config

logger = logging.getLogger(__name__)


@dataclass
class ApiResponse:
    """Structured result of a single HTTP call"""
    method: str
    url: str
    status_code: int
    body: Any
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300

    def json_field(self, name: str, default: Any = None) -> Any:
        if isinstance(self.body, dict):
            return self.body.get(name, default)
        return default


class RestClient:
    """Stateless REST client that sends the app-id header on every call"""

    def __init__(self, config: Optional[TestConfig] = None, transport: Optional[httpx.AsyncBaseTransport] = None,
                 resource: Optional[ResourceConfig] = None):
        self.config = config or get_config()
        self.resource = resource or get_resource_config("user")
        # Injected in offline tests; None means the real network
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "app-id": self.config.app_id,
        }

    async def request(self, method: str, endpoint: str, data: Optional[Dict] = None, params: Optional[Dict] = None,
                      fail_on_status_code: bool = True) -> ApiResponse:
        """Make REST request; non-2xx raises unless fail_on_status_code is False"""
        method = method.upper()
        if method not in ("GET", "POST", "PUT", "DELETE"):
            raise ValueError(f"Unsupported method: {method}")

        url = f"{self.config.api_base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        start_time = time.time()

        async with httpx.AsyncClient(timeout=self.config.request_timeout, transport=self._transport) as client:
            response = await client.request(method, url, headers=self._headers(), json=data, params=params)

        duration = time.time() - start_time

        # Parse response
        try:
            body = response.json()
        except ValueError:
            body = {"raw_response": response.text}

        result = ApiResponse(method, url, response.status_code, body, duration)
        logger.debug("%s %s -> %s (%.3fs)", method, url, response.status_code, duration)

        if fail_on_status_code and not result.success:
            raise UnexpectedStatusError(method, url, response.status_code, body)

        return result

    async def list_users(self, page: Optional[int] = None, limit: Optional[int] = None,
                         fail_on_status_code: bool = True) -> ApiResponse:
        params = {}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return await self.request("GET", self.resource.list_endpoint, params=params or None,
                                  fail_on_status_code=fail_on_status_code)

    async def get_user(self, user_id: str, fail_on_status_code: bool = True) -> ApiResponse:
        return await self.request("GET", self.resource.item(user_id), fail_on_status_code=fail_on_status_code)

    async def create_user(self, data: Dict[str, Any], fail_on_status_code: bool = True) -> ApiResponse:
        return await self.request("POST", self.resource.create_endpoint, data=data,
                                  fail_on_status_code=fail_on_status_code)

    async def update_user(self, user_id: str, data: Dict[str, Any], fail_on_status_code: bool = True) -> ApiResponse:
        return await self.request("PUT", self.resource.item(user_id), data=data,
                                  fail_on_status_code=fail_on_status_code)

    async def delete_user(self, user_id: str, fail_on_status_code: bool = True) -> ApiResponse:
        return await self.request("DELETE", self.resource.item(user_id), fail_on_status_code=fail_on_status_code)
