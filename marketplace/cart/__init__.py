"""Cart package: models, remote sync and the cart store."""
from .models import LineItem, CartAggregate
from .sync import CartSyncAdapter
from .service import CartStore

__all__ = [
    "LineItem",
    "CartAggregate",
    "CartSyncAdapter",
    "CartStore",
]
