"""Cart models with integer-cent pricing and totals derived on read."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional

from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.services.money import from_cents, parse_cents, to_float, to_decimal

logger = get_logger(__name__)


@dataclass
class LineItem:
    """Single product line in the cart."""
    product_id: Any
    product_name: str
    unit_price_cents: int  # Snapshot taken when the product was added
    quantity: int = 1
    remote_id: Optional[Any] = None  # Set once the line is persisted server-side

    def __post_init__(self):
        self.unit_price_cents = parse_cents(self.unit_price_cents)
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("quantity must be a positive integer")

    @property
    def total_price_cents(self) -> int:
        """Contribution of this line to the cart total."""
        return self.unit_price_cents * self.quantity

    @property
    def is_remote(self) -> bool:
        return self.remote_id is not None

    def to_dict(self) -> dict:
        """Convert to the API's cart_item shape."""
        data = {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "product_price_in_cents": self.unit_price_cents,
            "quantity": self.quantity,
        }
        if self.remote_id is not None:
            data["id"] = self.remote_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Create from an API cart_item."""
        return cls(
            product_id=data["product_id"],
            product_name=data.get("product_name") or "",
            unit_price_cents=data["product_price_in_cents"],
            quantity=int(data["quantity"]),
            remote_id=data.get("id"),
        )


@dataclass
class CartAggregate:
    """Shopping cart: ordered line items plus the remote cart it mirrors."""
    line_items: List[LineItem] = field(default_factory=list)
    cart_id: Optional[Any] = None

    @classmethod
    def empty(cls) -> "CartAggregate":
        return cls()

    @property
    def total_price_cents(self) -> int:
        """Sum of unit price * quantity over all lines."""
        return sum(item.total_price_cents for item in self.line_items)

    @property
    def total_item_count(self) -> int:
        """Total number of units in cart."""
        return sum(item.quantity for item in self.line_items)

    @property
    def total_money(self) -> Decimal:
        """Total in major units, exact (cents / 100)."""
        return from_cents(self.total_price_cents)

    @property
    def is_empty(self) -> bool:
        return not self.line_items

    def index_of(self, product_id: Any) -> int:
        for index, item in enumerate(self.line_items):
            if item.product_id == product_id:
                return index
        return -1

    def get(self, product_id: Any) -> Optional[LineItem]:
        return next((item for item in self.line_items if item.product_id == product_id), None)

    def to_dict(self) -> dict:
        """Convert to the GET /carts/:id response shape."""
        return {
            "total": to_float(self.total_money),
            "price_in_cents": self.total_price_cents,
            "total_items": self.total_item_count,
            "cart_items": [item.to_dict() for item in self.line_items],
        }

    @classmethod
    def from_dict(cls, data: dict, cart_id: Optional[Any] = None) -> "CartAggregate":
        """
        Create from a GET /carts/:id response.

        Server totals are not trusted: they are recomputed from cart_items and a
        mismatch is only logged.
        """
        items: List[LineItem] = []
        for raw in data.get("cart_items") or []:
            item = LineItem.from_dict(raw)
            existing = next((i for i in items if i.product_id == item.product_id), None)
            if existing is not None:
                # Duplicate product lines would break lookups by product id
                logger.warning(
                    f"Duplicate cart line for product {sanitize_id_for_logging(item.product_id)}, merging"
                )
                existing.quantity += item.quantity
                continue
            items.append(item)

        cart = cls(line_items=items, cart_id=cart_id if cart_id is not None else data.get("id"))

        reported_cents = data.get("price_in_cents")
        if reported_cents is not None and int(reported_cents) != cart.total_price_cents:
            logger.warning(
                f"Cart {sanitize_id_for_logging(cart.cart_id)} reported price_in_cents={reported_cents}, "
                f"recomputed {cart.total_price_cents}"
            )
        reported_items = data.get("total_items")
        if reported_items is not None and int(reported_items) != cart.total_item_count:
            logger.warning(
                f"Cart {sanitize_id_for_logging(cart.cart_id)} reported total_items={reported_items}, "
                f"recomputed {cart.total_item_count}"
            )
        reported_total = data.get("total")
        if reported_total is not None and to_decimal(reported_total) != cart.total_money:
            logger.debug(f"Cart total {reported_total} differs from recomputed {cart.total_money}")

        return cart
