"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import AsyncMock, Mock

import httpx

# Set test environment variables
os.environ.setdefault("MARKETPLACE_API_URL", "https://api.test")
os.environ.setdefault("MARKETPLACE_API_TOKEN", "test_token")

from marketplace.cart import CartStore, CartSyncAdapter  # noqa: E402
from marketplace.checkout import CheckoutService  # noqa: E402
from marketplace.services.api_client import ApiClient  # noqa: E402
from marketplace.services.models import Product  # noqa: E402
from marketplace.services.notifications import NotificationService  # noqa: E402


@pytest.fixture
def mock_api_client():
    """ApiClient double with async verb methods."""
    client = Mock(spec=ApiClient)
    client.get = AsyncMock(return_value=None)
    client.post = AsyncMock(return_value=None)
    client.put = AsyncMock(return_value=None)
    client.patch = AsyncMock(return_value={})
    client.delete = AsyncMock(return_value=None)
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def store(mock_api_client):
    """Cart store wired to the mocked client."""
    return CartStore(CartSyncAdapter(mock_api_client))


@pytest.fixture
def checkout(mock_api_client, store):
    return CheckoutService(mock_api_client, store)


@pytest.fixture
def notifier():
    return NotificationService()


@pytest.fixture
def sample_product():
    """Sample product data"""
    return Product(id=1, name="Coffee Beans", price_in_cents=500, market_place_name="Roastery")


@pytest.fixture
def other_product():
    return Product(id=2, name="Filter Paper", price_in_cents=250)


@pytest.fixture
def sample_remote_cart():
    """GET /carts/:id response"""
    return {
        "id": 42,
        "total": 12.5,
        "price_in_cents": 1250,
        "total_items": 3,
        "cart_items": [
            {"id": 901, "product_id": 1, "product_name": "Coffee Beans", "product_price_in_cents": 500, "quantity": 2},
            {"id": 902, "product_id": 2, "product_name": "Filter Paper", "product_price_in_cents": 250, "quantity": 1},
        ],
    }


@pytest.fixture
def make_transport_client():
    """Build a real ApiClient over httpx.MockTransport with the given handler."""
    def _make(handler, token="test_token"):
        return ApiClient("https://api.test", token=token, transport=httpx.MockTransport(handler))

    return _make
