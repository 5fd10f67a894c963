"""Cart screen: review the remote cart, change quantities and place the order."""
from dataclasses import dataclass
from typing import Any, Optional

from marketplace.cart import CartStore, LineItem
from marketplace.checkout import CheckoutService
from marketplace.config import DEFAULT_CURRENCY
from marketplace.errors import ApiError, CartSyncError, CheckoutError, ERROR_SOMETHING_WENT_WRONG
from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.services.money import format_money, from_cents
from marketplace.services.notifications import NotificationService

logger = get_logger(__name__)


@dataclass
class PendingDelete:
    """Line the user is being asked to confirm removing."""
    item: LineItem
    index: int


class CartScreen:
    """
    Controller for the cart screen.

    Decreasing a line at quantity 1 does not remove it directly: it opens a
    confirmation (`pending_delete`), and only `confirm_delete` deletes the
    line on the server. Deleting the last line deletes the whole cart.
    """

    def __init__(
        self,
        store: CartStore,
        checkout: CheckoutService,
        notifier: NotificationService,
        cart_id: Any,
        currency: str = DEFAULT_CURRENCY,
    ):
        self.store = store
        self.checkout = checkout
        self.sync = checkout.sync
        self.notifier = notifier
        self.cart_id = cart_id
        self.currency = currency
        self.loading = True
        self.pending_delete: Optional[PendingDelete] = None
        self.closed = False  # Set once the cart is gone and the screen should leave

    @property
    def total_label(self) -> str:
        return format_money(self.store.cart.total_money, self.currency)

    def line_total_label(self, item: LineItem) -> str:
        """Price x quantity shown on each cart row."""
        return format_money(from_cents(item.total_price_cents), self.currency)

    async def refresh(self) -> None:
        try:
            await self.checkout.load_cart(self.cart_id)
        except CheckoutError as e:
            logger.error(f"Cart {sanitize_id_for_logging(self.cart_id)} refresh failed: {e}")
            self.notifier.error(ERROR_SOMETHING_WENT_WRONG)
        finally:
            self.loading = False

    async def increase(self, item: LineItem) -> None:
        index = self.store.find_index_by_product_id(item.product_id)
        try:
            await self.store.increment(index)
        except CartSyncError as e:
            self.notifier.error(str(e))

    async def decrease(self, item: LineItem) -> bool:
        """
        Decrease a line's quantity.

        Returns:
            True when a delete confirmation was opened instead
        """
        index = self.store.find_index_by_product_id(item.product_id)
        line = self.store.find_line_item(item.product_id)
        if line is None:
            return False
        if line.quantity == 1:
            self.pending_delete = PendingDelete(item=line, index=index)
            return True
        try:
            await self.store.decrement(index)
        except CartSyncError as e:
            self.notifier.error(str(e))
        return False

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> None:
        pending = self.pending_delete
        if pending is None:
            return

        if len(self.store.cart.line_items) == 1:
            await self.delete_cart()
            return

        try:
            if pending.item.is_remote:
                await self.sync.delete_item(pending.item.remote_id)
        except ApiError as e:
            logger.error(f"Failed to delete cart item: {e}")
            self.notifier.error(ERROR_SOMETHING_WENT_WRONG)
            return

        # Index may have shifted while the DELETE was in flight
        index = self.store.find_index_by_product_id(pending.item.product_id)
        if index != -1:
            self.store.remove_item(index)
        self.pending_delete = None

    async def delete_cart(self) -> None:
        try:
            await self.sync.delete_cart(self.cart_id)
        except ApiError as e:
            logger.error(f"Failed to delete cart {sanitize_id_for_logging(self.cart_id)}: {e}")
            self.notifier.error(ERROR_SOMETHING_WENT_WRONG)
            return
        self.store.clear()
        self.pending_delete = None
        self.closed = True

    async def create_order(self) -> bool:
        """Place the order; the cart is kept when this fails."""
        self.loading = True
        try:
            await self.checkout.place_order()
        except CheckoutError as e:
            self.notifier.error(str(e))
            return False
        finally:
            self.loading = False
        self.closed = True
        return True
