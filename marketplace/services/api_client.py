"""REST Client - thin JSON wrapper over httpx for the marketplace API.

Every call either returns the decoded JSON body or raises ApiError.
No retries: a failed call is reported once and the caller decides.
"""
from typing import Any, Optional

import httpx

from marketplace.config import Settings, get_settings
from marketplace.errors import ERROR_NETWORK, ApiError, ApiValidationError
from marketplace.logging import get_logger

logger = get_logger(__name__)

VALIDATION_STATUS_CODES = {400, 422}


class ApiClient:
    """Async REST client shared by the cart store, checkout and screens."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        # Test hook: httpx.MockTransport
        self._transport = transport

        # HTTP client (lazy init)
        self._http_client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ApiClient":
        settings = settings or get_settings()
        return cls(settings.api_url, token=settings.api_token, timeout=settings.http_timeout)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                transport=self._transport,
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ==================== HTTP VERBS ====================

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict] = None,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method
            path: Path relative to the API base URL ("/carts/1" or "carts/1")
            json: JSON body
            params: Query string parameters

        Returns:
            Decoded JSON body, or None when the body is empty

        Raises:
            ApiValidationError: Backend rejected the submitted fields
            ApiError: Transport failure or error status
        """
        url = "/" + path.lstrip("/")
        client = await self._get_http_client()

        try:
            response = await client.request(method, url, json=json, params=params)
        except httpx.TransportError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(f"{ERROR_NETWORK}: {e}", method=method, path=url) from e

        data = self._decode(response)

        if response.status_code >= 400:
            logger.warning(f"{method} {url} returned HTTP {response.status_code}")
            errors = data.get("errors") if isinstance(data, dict) else None
            if response.status_code == 422 and not isinstance(errors, dict):
                # Rails-style 422 bodies are the field errors themselves
                errors = data if isinstance(data, dict) else {}
            if response.status_code in VALIDATION_STATUS_CODES and isinstance(errors, dict):
                raise ApiValidationError(
                    errors,
                    status_code=response.status_code,
                    method=method,
                    path=url,
                    payload=data,
                )
            raise ApiError(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                method=method,
                path=url,
                payload=data,
            )

        # Some endpoints answer 200 with an errors object instead of 422
        if isinstance(data, dict) and isinstance(data.get("errors"), dict) and data["errors"]:
            raise ApiValidationError(
                data["errors"],
                status_code=response.status_code,
                method=method,
                path=url,
                payload=data,
            )

        return data

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return {"detail": response.text[:200]}
