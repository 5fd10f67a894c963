"""REST Models - Pydantic models for payloads returned by the marketplace API."""
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from marketplace.services.money import from_cents, parse_cents

RemoteId = Union[int, str]


class Product(BaseModel):
    """Product as listed by GET /products."""
    model_config = ConfigDict(extra="ignore")

    id: RemoteId
    name: str
    price_in_cents: int
    market_place_name: Optional[str] = None
    market_place_partner_id: Optional[RemoteId] = None

    @field_validator("price_in_cents", mode="before")
    @classmethod
    def validate_price(cls, v):
        return parse_cents(v)

    @property
    def price(self) -> Decimal:
        return from_cents(self.price_in_cents)


class OrderCartItem(BaseModel):
    """Snapshot of the cart item an order line was created from."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[RemoteId] = None
    product_id: Optional[RemoteId] = None
    product_name: Optional[str] = None
    product_price_in_cents: int = 0
    quantity: int = 0


class OrderItem(BaseModel):
    """Row of GET /order_items?order_id=..."""
    model_config = ConfigDict(extra="ignore")

    id: RemoteId
    order_id: Optional[RemoteId] = None
    cart_item: Optional[OrderCartItem] = None

    @property
    def quantity(self) -> int:
        return self.cart_item.quantity if self.cart_item else 0

    @property
    def total_price_cents(self) -> int:
        if not self.cart_item:
            return 0
        return self.cart_item.product_price_in_cents * self.cart_item.quantity

    @property
    def total(self) -> Decimal:
        return from_cents(self.total_price_cents)


class Order(BaseModel):
    """Finished order summary shown on the order details screen."""
    model_config = ConfigDict(extra="ignore")

    id: RemoteId
    total: Decimal = Decimal("0")
    price_in_cents: int = 0


class MarketPlacePartner(BaseModel):
    """Seller profile."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[RemoteId] = None
    name: str = ""
    email: str = ""
    cnpj: str = ""
    logo: Optional[str] = None
    status: Optional[int] = None
    user_id: Optional[RemoteId] = None


class User(BaseModel):
    """Signed-in user as handed over by the session collaborator."""
    model_config = ConfigDict(extra="ignore")

    id: RemoteId
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    logo: Optional[str] = None
    market_place_partner: Optional[MarketPlacePartner] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Address(BaseModel):
    """Address attached to a user or seller."""
    model_config = ConfigDict(extra="allow")

    id: Optional[RemoteId] = None
    street: Optional[str] = None
    number: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
