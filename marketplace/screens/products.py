"""Product list screen: browse products and fill the cart."""
from typing import List

from marketplace.cart import CartStore
from marketplace.config import DEFAULT_CURRENCY
from marketplace.errors import ApiError, CartSyncError, ERROR_SOMETHING_WENT_WRONG
from marketplace.logging import get_logger
from marketplace.services.api_client import ApiClient
from marketplace.services.models import Product
from marketplace.services.money import format_money
from marketplace.services.notifications import NotificationService

logger = get_logger(__name__)


class ProductsScreen:
    """Controller behind the product list with +/- quantity buttons."""

    def __init__(
        self,
        client: ApiClient,
        store: CartStore,
        notifier: NotificationService,
        currency: str = DEFAULT_CURRENCY,
    ):
        self.client = client
        self.store = store
        self.notifier = notifier
        self.currency = currency
        self.products: List[Product] = []

    async def refresh(self) -> List[Product]:
        """Reload GET /products; keeps the previous list on failure."""
        try:
            data = await self.client.get("/products")
        except ApiError as e:
            logger.error(f"Failed to load products: {e}")
            self.notifier.error(ERROR_SOMETHING_WENT_WRONG)
            return self.products
        self.products = [Product.model_validate(row) for row in data or []]
        return self.products

    def quantity_for(self, product: Product) -> int:
        return self.store.quantity_of(product.id)

    def in_cart(self, product: Product) -> bool:
        return self.store.find_line_item(product.id) is not None

    @property
    def checkout_visible(self) -> bool:
        """Checkout button shows once the cart has a non-zero total."""
        return self.store.cart.total_price_cents > 0

    @property
    def total_label(self) -> str:
        """Cart total on the checkout button, e.g. "R$ 12.50"."""
        return format_money(self.store.cart.total_money, self.currency)

    def price_label(self, product: Product) -> str:
        return format_money(product.price, self.currency)

    async def increase(self, product: Product) -> None:
        index = self.store.find_index_by_product_id(product.id)
        if index == -1:
            self.store.add_item(product)
            return
        try:
            await self.store.increment(index)
        except CartSyncError as e:
            self.notifier.error(str(e))

    async def decrease(self, product: Product) -> None:
        index = self.store.find_index_by_product_id(product.id)
        if index == -1:
            return
        try:
            await self.store.decrement(index)
        except CartSyncError as e:
            self.notifier.error(str(e))

    def remove(self, product: Product) -> None:
        """Long-press removal, after the user confirmed."""
        index = self.store.find_index_by_product_id(product.id)
        if index != -1:
            self.store.remove_item(index)
