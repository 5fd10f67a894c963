"""Headless screen controllers: the state and event handlers behind each screen."""
from .products import ProductsScreen
from .cart import CartScreen, PendingDelete
from .order_details import OrderDetailsScreen
from .product_form import ProductFormScreen
from .profile import UserProfileScreen, SellerProfileScreen

__all__ = [
    "ProductsScreen",
    "CartScreen",
    "PendingDelete",
    "OrderDetailsScreen",
    "ProductFormScreen",
    "UserProfileScreen",
    "SellerProfileScreen",
]
