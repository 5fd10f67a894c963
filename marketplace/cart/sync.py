"""Remote side of the cart: mirrors local changes to the cart REST resources."""
from typing import Any

from marketplace.errors import ApiError, CartSyncError, ERROR_QUANTITY_UPDATE_FAILED
from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.services.api_client import ApiClient
from .models import CartAggregate

logger = get_logger(__name__)


class CartSyncAdapter:
    """
    Translates local cart changes into REST calls.

    patch_quantity either succeeds or raises CartSyncError; the store applies
    its local mutation only after a successful return.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    async def patch_quantity(self, remote_id: Any, new_quantity: int) -> Any:
        """PATCH /cart_items/:id with the new quantity."""
        if new_quantity < 1:
            raise ValueError("new_quantity must be at least 1, delete the item instead")

        try:
            return await self.client.patch(f"/cart_items/{remote_id}", json={"quantity": new_quantity})
        except ApiError as e:
            logger.error(
                f"Failed to update quantity of cart item {sanitize_id_for_logging(remote_id)} "
                f"to {new_quantity}: {e}"
            )
            raise CartSyncError(ERROR_QUANTITY_UPDATE_FAILED, remote_id=remote_id, quantity=new_quantity) from e

    async def delete_item(self, remote_id: Any) -> None:
        """DELETE /cart_items/:id."""
        await self.client.delete(f"/cart_items/{remote_id}")
        logger.info(f"Deleted cart item {sanitize_id_for_logging(remote_id)}")

    async def delete_cart(self, cart_id: Any) -> None:
        """DELETE /carts/:cart_id."""
        await self.client.delete(f"/carts/{cart_id}")
        logger.info(f"Deleted cart {sanitize_id_for_logging(cart_id)}")

    async def fetch_cart(self, cart_id: Any) -> CartAggregate:
        """GET /carts/:cart_id as an aggregate."""
        data = await self.client.get(f"/carts/{cart_id}")
        return CartAggregate.from_dict(data or {}, cart_id=cart_id)
