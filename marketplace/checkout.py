"""
Checkout Service

Two steps, mirroring the API:
1. start_checkout: POST the local cart to /cart_items, which creates a remote
   cart; the store then switches to that cart (lines now carry remote ids).
2. place_order: POST /order_items for the remote cart; on success the local
   cart is cleared.

Failures are logged and raised as CheckoutError; the aggregate is left as it
was and nothing is retried automatically. If the cart was created but could
not be loaded, calling start_checkout again loads that cart instead of
POSTing a second one.
"""
from typing import Any, List

from marketplace.cart import CartStore, CartSyncAdapter
from marketplace.errors import (
    ApiError,
    CheckoutError,
    ERROR_CART_EMPTY,
    ERROR_CHECKOUT_FAILED,
    ERROR_NO_REMOTE_CART,
    ERROR_ORDER_FAILED,
)
from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.services.api_client import ApiClient
from marketplace.services.models import OrderItem

logger = get_logger(__name__)


class CheckoutService:
    """Submits the store's cart and turns it into an order."""

    def __init__(self, client: ApiClient, store: CartStore):
        self.client = client
        self.store = store
        self.sync = store.sync or CartSyncAdapter(client)
        # Remote cart created by start_checkout but not loaded yet
        self.pending_cart_id: Any = None

    def build_cart_payload(self) -> dict:
        """Body for POST /cart_items."""
        return {
            "items": {
                "cart_items": [
                    {
                        "product_id": item.product_id,
                        "quantity": item.quantity,
                        "product_price_in_cents": item.unit_price_cents,
                    }
                    for item in self.store.cart.line_items
                ]
            }
        }

    def build_order_payload(self, cart_id: Any) -> dict:
        """Body for POST /order_items."""
        return {
            "order_items": {
                "cart_id": cart_id,
                "cart_items": [
                    {
                        "quantity": item.quantity,
                        "cart_item_id": item.remote_id,
                        "product_price_in_cents": item.unit_price_cents,
                    }
                    for item in self.store.cart.line_items
                ],
            }
        }

    async def start_checkout(self) -> Any:
        """
        Create the remote cart from the local one.

        Returns:
            The new cart id

        Raises:
            CheckoutError: Empty cart, or the API call failed
        """
        if self.pending_cart_id is not None:
            cart_id = self.pending_cart_id
            logger.info(f"Resuming checkout with remote cart {sanitize_id_for_logging(cart_id)}")
            await self.load_cart(cart_id)
            return cart_id

        if self.store.cart.is_empty:
            raise CheckoutError(ERROR_CART_EMPTY)

        try:
            response = await self.client.post("/cart_items", json=self.build_cart_payload())
        except ApiError as e:
            logger.error(f"Cart submission failed: {e}")
            raise CheckoutError(ERROR_CHECKOUT_FAILED) from e

        cart_id = response.get("id") if isinstance(response, dict) else None
        if cart_id is None:
            logger.error(f"Cart submission returned no cart id: {response!r}")
            raise CheckoutError(ERROR_CHECKOUT_FAILED)

        logger.info(f"Created remote cart {sanitize_id_for_logging(cart_id)}")
        self.pending_cart_id = cart_id
        await self.load_cart(cart_id)
        return cart_id

    async def load_cart(self, cart_id: Any) -> None:
        """Replace the local cart with the remote cart `cart_id`."""
        try:
            cart = await self.sync.fetch_cart(cart_id)
        except ApiError as e:
            logger.error(f"Failed to load cart {sanitize_id_for_logging(cart_id)}: {e}")
            raise CheckoutError(ERROR_CHECKOUT_FAILED) from e
        self.store.replace(cart)
        if cart_id == self.pending_cart_id:
            self.pending_cart_id = None

    async def place_order(self) -> Any:
        """
        Order everything in the current remote cart.

        Raises:
            CheckoutError: No remote cart, empty cart, or the API call failed
        """
        cart_id = self.store.cart_id
        if cart_id is None:
            raise CheckoutError(ERROR_NO_REMOTE_CART)
        if self.store.cart.is_empty:
            raise CheckoutError(ERROR_CART_EMPTY)

        try:
            response = await self.client.post("/order_items", json=self.build_order_payload(cart_id))
        except ApiError as e:
            logger.error(f"Order creation for cart {sanitize_id_for_logging(cart_id)} failed: {e}")
            raise CheckoutError(ERROR_ORDER_FAILED) from e

        logger.info(f"Order created from cart {sanitize_id_for_logging(cart_id)}")
        self.store.clear()
        return response

    async def fetch_order_items(self, order_id: Any) -> List[OrderItem]:
        """GET /order_items?order_id=..."""
        data = await self.client.get("/order_items", params={"order_id": order_id})
        return [OrderItem.model_validate(row) for row in data or []]
