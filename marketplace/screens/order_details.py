"""Finished order details."""
from typing import List

from marketplace.checkout import CheckoutService
from marketplace.config import DEFAULT_CURRENCY
from marketplace.errors import ApiError
from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.services.models import Order, OrderItem
from marketplace.services.money import format_money

logger = get_logger(__name__)


class OrderDetailsScreen:
    def __init__(self, checkout: CheckoutService, order: Order, currency: str = DEFAULT_CURRENCY):
        self.checkout = checkout
        self.order = order
        self.currency = currency
        self.items: List[OrderItem] = []
        self.loading = True

    async def refresh(self) -> List[OrderItem]:
        try:
            self.items = await self.checkout.fetch_order_items(self.order.id)
        except ApiError as e:
            logger.error(f"Failed to load items of order {sanitize_id_for_logging(self.order.id)}: {e}")
        finally:
            self.loading = False
        return self.items

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_label(self) -> str:
        return format_money(self.order.total, self.currency)

    def item_total_label(self, item: OrderItem) -> str:
        return format_money(item.total, self.currency)
