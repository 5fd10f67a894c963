"""Tests for the REST client over httpx.MockTransport"""
import json

import httpx
import pytest

from marketplace.cart import CartSyncAdapter
from marketplace.config import Settings
from marketplace.errors import ApiError, ApiValidationError, CartSyncError
from marketplace.services.api_client import ApiClient


@pytest.mark.asyncio
async def test_get_decodes_json_and_sends_token(make_transport_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[{"id": 1, "name": "Coffee", "price_in_cents": 500}])

    client = make_transport_client(handler)
    data = await client.get("products")
    await client.aclose()

    assert data == [{"id": 1, "name": "Coffee", "price_in_cents": 500}]
    assert seen["url"] == "https://api.test/products"
    assert seen["auth"] == "Bearer test_token"


@pytest.mark.asyncio
async def test_no_auth_header_without_token(make_transport_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(204)

    client = make_transport_client(handler, token=None)
    assert await client.delete("/carts/1") is None
    await client.aclose()

    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_query_params(make_transport_client):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["order_id"] == "7"
        return httpx.Response(200, json=[])

    async with make_transport_client(handler) as client:
        assert await client.get("/order_items", params={"order_id": 7}) == []


@pytest.mark.asyncio
async def test_error_status_raises_api_error(make_transport_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    async with make_transport_client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.patch("/cart_items/1", json={"quantity": 2})

    assert exc_info.value.status_code == 500
    assert exc_info.value.method == "PATCH"
    assert exc_info.value.path == "/cart_items/1"
    assert not isinstance(exc_info.value, ApiValidationError)


@pytest.mark.asyncio
async def test_422_with_errors_raises_validation_error(make_transport_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"errors": {"name": ["can't be blank"]}})

    async with make_transport_client(handler) as client:
        with pytest.raises(ApiValidationError) as exc_info:
            await client.post("/products", json={"name": ""})

    assert exc_info.value.field_errors() == {"name": "can't be blank"}


@pytest.mark.asyncio
async def test_422_with_bare_field_errors_raises_validation_error(make_transport_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"name": ["can't be blank"], "price_in_cents": ["is not a number"]})

    async with make_transport_client(handler) as client:
        with pytest.raises(ApiValidationError) as exc_info:
            await client.post("/products", json={"name": ""})

    assert exc_info.value.status_code == 422
    assert exc_info.value.field_errors() == {
        "name": "can't be blank",
        "price_in_cents": "is not a number",
    }


@pytest.mark.asyncio
async def test_422_without_body_raises_validation_error(make_transport_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422)

    async with make_transport_client(handler) as client:
        with pytest.raises(ApiValidationError) as exc_info:
            await client.put("/products/3", json={"name": ""})

    assert exc_info.value.field_errors() == {}


@pytest.mark.asyncio
async def test_200_with_errors_raises_validation_error(make_transport_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"errors": {"price_in_cents": ["is not a number"]}})

    async with make_transport_client(handler) as client:
        with pytest.raises(ApiValidationError) as exc_info:
            await client.put("/products/3", json={"price_in_cents": "x"})

    assert exc_info.value.status_code == 200


@pytest.mark.asyncio
async def test_transport_error_raises_api_error(make_transport_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_transport_client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.get("/products")

    assert exc_info.value.is_transport_error


@pytest.mark.asyncio
async def test_sync_adapter_over_real_client(make_transport_client, sample_remote_cart):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append((request.method, request.url.path, request.content))
        if request.method == "GET":
            return httpx.Response(200, json=sample_remote_cart)
        if request.url.path == "/cart_items/902":
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json={"id": 901, "quantity": 5})

    async with make_transport_client(handler) as client:
        sync = CartSyncAdapter(client)
        cart = await sync.fetch_cart(42)
        await sync.patch_quantity(901, 5)
        with pytest.raises(CartSyncError) as exc_info:
            await sync.patch_quantity(902, 2)

    assert cart.cart_id == 42
    assert cart.total_price_cents == 1250
    assert requests[1][0] == "PATCH"
    assert json.loads(requests[1][2]) == {"quantity": 5}
    assert exc_info.value.remote_id == 902
    assert exc_info.value.quantity == 2


@pytest.mark.asyncio
async def test_patch_quantity_rejects_zero(mock_api_client):
    sync = CartSyncAdapter(mock_api_client)

    with pytest.raises(ValueError):
        await sync.patch_quantity(1, 0)
    mock_api_client.patch.assert_not_called()


def test_from_settings():
    client = ApiClient.from_settings(Settings(api_url="https://shop.example/", api_token="abc", http_timeout=3.0))

    assert client.base_url == "https://shop.example"
    assert client.token == "abc"
    assert client.timeout == 3.0
