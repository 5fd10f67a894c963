"""
Marketplace client

This package contains the client-side state and orchestration:
- cart: cart aggregate, remote sync adapter and the cart store
- checkout: cart submission and order creation
- services: REST client, pydantic models, money helpers, notifications
- screens: headless controllers behind each screen

Note: Top-level names are resolved lazily, so `import marketplace` alone
stays cheap. `marketplace.cart`, and every module importing it, loads the
REST client and with it httpx.
"""

__version__ = "1.0.0"

__all__ = [
    "ApiClient",
    "CartStore",
    "CartSyncAdapter",
    "CheckoutService",
    "create_session",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "ApiClient":
        from marketplace.services.api_client import ApiClient
        return ApiClient
    elif name == "CartStore":
        from marketplace.cart import CartStore
        return CartStore
    elif name == "CartSyncAdapter":
        from marketplace.cart import CartSyncAdapter
        return CartSyncAdapter
    elif name == "CheckoutService":
        from marketplace.checkout import CheckoutService
        return CheckoutService
    elif name == "create_session":
        from marketplace.session import create_session
        return create_session
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
