"""Cart store: the single owner of the session's cart aggregate."""
import asyncio
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional

from marketplace.errors import (
    CartError,
    LineItemNotFoundError,
    ERROR_CART_ITEM_NOT_FOUND,
    ERROR_CART_ITEM_PERSISTED,
)
from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.services.money import parse_cents
from .models import CartAggregate, LineItem
from .sync import CartSyncAdapter

logger = get_logger(__name__)

CartListener = Callable[[CartAggregate], None]


class CartStore:
    """
    Holds one CartAggregate and the only code allowed to change it.

    - add/remove/clear are local and synchronous
    - increment/decrement on a persisted line PATCH the server first and
      touch local state only once the PATCH succeeded
    - updates to the same product are serialized, so a second tap waits for
      the first one's response instead of reading a stale quantity

    Usage:
        store = CartStore(CartSyncAdapter(client))
        store.add_item(product)
        await store.increment(store.find_index_by_product_id(product.id))
    """

    def __init__(self, sync: Optional[CartSyncAdapter] = None):
        self.sync = sync
        self._cart = CartAggregate.empty()
        self._locks: Dict[Any, asyncio.Lock] = {}
        self._listeners: List[CartListener] = []

    @property
    def cart(self) -> CartAggregate:
        """Current aggregate (read-only for callers)."""
        return self._cart

    @property
    def cart_id(self) -> Optional[Any]:
        return self._cart.cart_id

    # ==================== LISTENERS ====================

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register a callback run after every change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._cart)
            except Exception as e:
                logger.warning(f"Cart listener {listener!r} failed: {e}")

    # ==================== LOOKUPS ====================

    def find_index_by_product_id(self, product_id: Any) -> int:
        """Index of the line for product_id, or -1."""
        return self._cart.index_of(product_id)

    def find_line_item(self, product_id: Any) -> Optional[LineItem]:
        """Line for product_id, or None."""
        return self._cart.get(product_id)

    def quantity_of(self, product_id: Any) -> int:
        item = self._cart.get(product_id)
        return item.quantity if item else 0

    def _line_at(self, index: int) -> LineItem:
        items = self._cart.line_items
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(items):
            raise LineItemNotFoundError(f"{ERROR_CART_ITEM_NOT_FOUND}: index {index!r}")
        return items[index]

    def _line_for(self, product_id: Any) -> LineItem:
        item = self._cart.get(product_id)
        if item is None:
            raise LineItemNotFoundError(
                f"{ERROR_CART_ITEM_NOT_FOUND}: product {sanitize_id_for_logging(product_id)}"
            )
        return item

    def _lock_for(self, product_id: Any) -> asyncio.Lock:
        lock = self._locks.get(product_id)
        if lock is None:
            lock = self._locks[product_id] = asyncio.Lock()
        return lock

    def _release_lock(self, product_id: Any) -> None:
        """Forget the lock of a product that left the cart, unless it is held."""
        lock = self._locks.get(product_id)
        if lock is not None and not lock.locked() and self._cart.get(product_id) is None:
            del self._locks[product_id]

    # ==================== LOCAL MUTATIONS ====================

    @staticmethod
    def _product_snapshot(product: Any) -> tuple:
        """(id, name, price_in_cents) from a Product model or a plain mapping."""
        if isinstance(product, Mapping):
            return product["id"], product.get("name") or "", product.get("price_in_cents")
        return product.id, getattr(product, "name", "") or "", getattr(product, "price_in_cents", None)

    def add_item(self, product: Any, quantity: int = 1) -> LineItem:
        """
        Add a product to the cart.

        A new line snapshots the product's current name and price. Adding a
        product already in the cart merges the quantity into its line, which
        is only allowed while that line is local.

        Raises:
            ValueError: Negative/non-integer price or non-positive quantity
            CartError: The product's line is already persisted remotely
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError("quantity must be a positive integer")

        product_id, name, price = self._product_snapshot(product)
        price_cents = parse_cents(price)

        existing = self._cart.get(product_id)
        if existing is not None:
            if existing.is_remote:
                raise CartError(ERROR_CART_ITEM_PERSISTED)
            existing.quantity += quantity
            item = existing
        else:
            item = LineItem(
                product_id=product_id,
                product_name=name,
                unit_price_cents=price_cents,
                quantity=quantity,
            )
            self._cart.line_items.append(item)

        logger.debug(f"Added {quantity} x product {sanitize_id_for_logging(product_id)}")
        self._notify()
        return item

    def remove_item(self, index: int) -> LineItem:
        """
        Remove the line at index with its whole contribution.

        Raises:
            LineItemNotFoundError: index out of range
        """
        item = self._line_at(index)
        del self._cart.line_items[index]
        self._release_lock(item.product_id)
        logger.debug(f"Removed product {sanitize_id_for_logging(item.product_id)} from cart")
        self._notify()
        return item

    def clear(self) -> None:
        """Reset to the empty cart (after checkout or cart deletion)."""
        self._cart = CartAggregate.empty()
        self._locks = {key: lock for key, lock in self._locks.items() if lock.locked()}
        self._notify()

    def replace(self, cart: CartAggregate) -> None:
        """Install an aggregate loaded from the server."""
        self._cart = cart
        self._notify()

    # ==================== SYNCED MUTATIONS ====================

    async def _patch_remote(self, item: LineItem, new_quantity: int) -> None:
        if not item.is_remote:
            return
        if self.sync is None:
            raise CartError("Cart line is persisted remotely but no sync adapter is configured")
        await self.sync.patch_quantity(item.remote_id, new_quantity)

    def _still_current(self, item: LineItem) -> bool:
        # clear()/replace() may have swapped the aggregate during the await
        if self._cart.get(item.product_id) is item:
            return True
        logger.warning(
            f"Cart changed while updating product {sanitize_id_for_logging(item.product_id)}, "
            "dropping local update"
        )
        return False

    async def increment(self, index: int) -> Optional[LineItem]:
        """
        Add one unit to the line at index.

        Raises:
            LineItemNotFoundError: index out of range
            CartSyncError: remote update failed (local state unchanged)
        """
        product_id = self._line_at(index).product_id

        async with self._lock_for(product_id):
            item = self._line_for(product_id)
            new_quantity = item.quantity + 1
            await self._patch_remote(item, new_quantity)
            if not self._still_current(item):
                return None
            item.quantity = new_quantity

        self._notify()
        return item

    async def decrement(self, index: int) -> Optional[LineItem]:
        """
        Remove one unit from the line at index.

        A line at quantity 1 is removed instead (never patched to zero) and
        None is returned.

        Raises:
            LineItemNotFoundError: index out of range
            CartSyncError: remote update failed (local state unchanged)
        """
        product_id = self._line_at(index).product_id

        async with self._lock_for(product_id):
            item = self._line_for(product_id)
            if item.quantity == 1:
                self.remove_item(self._cart.index_of(product_id))
                removed = True
            else:
                new_quantity = item.quantity - 1
                await self._patch_remote(item, new_quantity)
                if not self._still_current(item):
                    return None
                item.quantity = new_quantity
                removed = False

        if removed:
            # remove_item ran while the lock was held
            self._release_lock(product_id)
            return None
        self._notify()
        return item
