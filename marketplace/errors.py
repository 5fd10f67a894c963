"""
Error constants and exception hierarchy.

Message constants are shared by the store, the checkout service and the
screen controllers so the same wording reaches logs and toasts.
"""
from typing import Any, Optional

# Cart errors
ERROR_CART_ITEM_NOT_FOUND = "Cart item not found"
ERROR_CART_ITEM_PERSISTED = "Cart item is already saved remotely, use increment instead"
ERROR_CART_EMPTY = "Cart is empty"
ERROR_QUANTITY_UPDATE_FAILED = "Could not update quantity."

# Checkout / order errors
ERROR_CHECKOUT_FAILED = "Could not submit the cart."
ERROR_ORDER_FAILED = "Could not create the order."
ERROR_NO_REMOTE_CART = "No remote cart to order from"

# Profile errors
ERROR_SELLER_FIELDS_EMPTY = "Your e-mail address cannot be empty"

# Generic
ERROR_SOMETHING_WENT_WRONG = "Something went wrong."
ERROR_NETWORK = "Network error"


class MarketplaceError(Exception):
    """Base class for every error raised by this package."""


class ApiError(MarketplaceError):
    """REST call failed at the transport level or with an error status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.path = path
        self.payload = payload

    @property
    def is_transport_error(self) -> bool:
        return self.status_code is None


class ApiValidationError(ApiError):
    """Backend rejected the submitted fields (e.g. product form)."""

    def __init__(self, errors: dict, **kwargs: Any) -> None:
        super().__init__("Validation failed", **kwargs)
        self.errors = errors

    def field_errors(self) -> dict[str, str]:
        """Flatten backend errors to one message per field."""
        flat: dict[str, str] = {}
        for field, messages in (self.errors or {}).items():
            if isinstance(messages, (list, tuple)):
                flat[field] = ", ".join(str(m) for m in messages)
            else:
                flat[field] = str(messages)
        return flat


class CartError(MarketplaceError):
    """Invalid cart operation."""


class LineItemNotFoundError(CartError, IndexError):
    """Index or product id does not point at a line item."""


class CartSyncError(CartError):
    """Remote quantity update failed; local state was left untouched."""

    def __init__(
        self,
        message: str = ERROR_QUANTITY_UPDATE_FAILED,
        remote_id: Any = None,
        quantity: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.remote_id = remote_id
        self.quantity = quantity


class CheckoutError(MarketplaceError):
    """Cart submission or order creation failed; aggregate left intact."""
