"""Create/edit product form."""
from typing import Any, Dict, Optional

from marketplace.errors import ApiValidationError
from marketplace.logging import get_logger
from marketplace.services.api_client import ApiClient
from marketplace.services.models import Product

logger = get_logger(__name__)

DEFAULT_MARKET_PLACE_PARTNER_ID = 1


class ProductFormScreen:
    """
    Form state for a product.

    With `product_id` the form edits (PUT /products/:id), otherwise it
    creates (POST /products). Backend validation errors end up in `errors`,
    keyed by field, for display next to the offending input.
    """

    def __init__(
        self,
        client: ApiClient,
        product_id: Optional[Any] = None,
        market_place_partner_id: Any = DEFAULT_MARKET_PLACE_PARTNER_ID,
    ):
        self.client = client
        self.product_id = product_id
        self.market_place_partner_id = market_place_partner_id
        self.name = ""
        self.price_in_cents = ""
        self.errors: Dict[str, str] = {}

    @property
    def is_edit(self) -> bool:
        return self.product_id is not None

    def reset(self) -> None:
        self.name = ""
        self.price_in_cents = ""

    async def load(self) -> None:
        if not self.is_edit:
            self.reset()
            return
        data = await self.client.get(f"/products/{self.product_id}")
        product = Product.model_validate(data)
        self.name = product.name
        self.price_in_cents = str(product.price_in_cents)

    async def submit(self, name: str, price_in_cents: str) -> bool:
        """
        Save the product.

        Returns:
            True when saved, False when the backend rejected a field

        Raises:
            ApiError: Transport or server failure
        """
        self.name = name
        self.price_in_cents = price_in_cents
        payload = {
            "name": name,
            "price_in_cents": price_in_cents,
            "market_place_partner_id": self.market_place_partner_id,
        }

        try:
            if self.is_edit:
                await self.client.put(f"/products/{self.product_id}", json=payload)
            else:
                await self.client.post("/products", json=payload)
        except ApiValidationError as e:
            self.errors = e.field_errors()
            logger.info(f"Product form rejected: {sorted(self.errors)}")
            return False

        self.errors = {}
        self.reset()
        return True
