"""User and seller profile screens."""
from typing import Any, List, Optional

from marketplace.errors import ApiError, ERROR_SELLER_FIELDS_EMPTY, ERROR_SOMETHING_WENT_WRONG
from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.services.api_client import ApiClient
from marketplace.services.models import Address, MarketPlacePartner, User
from marketplace.services.notifications import NotificationService

logger = get_logger(__name__)

SELLER_STATUS_ACTIVE = 1


class UserProfileScreen:
    """Edit the signed-in user's name and e-mail."""

    def __init__(self, client: ApiClient, user: User, notifier: NotificationService):
        self.client = client
        self.user = user
        self.notifier = notifier

    async def save(self, email: str, first_name: str, last_name: str) -> bool:
        payload = {"user": {"email": email, "first_name": first_name, "last_name": last_name}}
        try:
            response = await self.client.put("/user", json=payload)
        except ApiError as e:
            logger.error(f"Profile update failed: {e}")
            self.notifier.error(ERROR_SOMETHING_WENT_WRONG)
            return False

        self.notifier.success("Profile updated successfully.")
        updated = (response or {}).get("user") if isinstance(response, dict) else None
        self.user = User.model_validate(updated) if updated else self.user.model_copy(update=payload["user"])
        return True


class SellerProfileScreen:
    """
    Create or update the user's marketplace partner (seller) profile.

    Logo upload is handled elsewhere; a signed blob id can be passed to `save`.
    """

    def __init__(self, client: ApiClient, user: User, notifier: NotificationService):
        self.client = client
        self.user = user
        self.notifier = notifier
        self.partner = user.market_place_partner or MarketPlacePartner()
        self.addresses: List[Address] = []

    async def save(
        self,
        name: str,
        email: str,
        cnpj: str,
        logo: Optional[str] = None,
    ) -> bool:
        if not (name.strip() or email.strip() or cnpj.strip()):
            self.notifier.error(ERROR_SELLER_FIELDS_EMPTY)
            return False

        fields: dict[str, Any] = {"name": name, "email": email, "cnpj": cnpj}
        if logo is not None:
            fields["logo"] = logo
        try:
            if self.partner.id is not None:
                response = await self.client.put(
                    f"/market_place_partners/{self.partner.id}",
                    json={"market_place_partner": {"id": self.partner.id, **fields}},
                )
                message = "Seller updated successfully."
            else:
                response = await self.client.post(
                    "/market_place_partners",
                    json={
                        "market_place_partner": {
                            **fields,
                            "status": SELLER_STATUS_ACTIVE,
                            "user_id": self.user.id,
                        }
                    },
                )
                message = "Seller saved successfully."
        except ApiError as e:
            logger.error(f"Seller save failed for user {sanitize_id_for_logging(self.user.id)}: {e}")
            self.notifier.error(ERROR_SOMETHING_WENT_WRONG)
            return False

        self.notifier.success(message)
        if isinstance(response, dict):
            self.partner = MarketPlacePartner.model_validate(response)
        else:
            self.partner = self.partner.model_copy(update=fields)
        self.user = self.user.model_copy(
            update={"market_place_partner": self.partner, "logo": logo or self.user.logo}
        )
        return True

    async def load_addresses(self) -> List[Address]:
        params: dict[str, Any] = {"user": self.user.id, "type": "MarketPlacePartner"}
        try:
            data = await self.client.get("/addresses", params=params)
        except ApiError as e:
            logger.warning(f"Failed to load seller addresses: {e}")
            return self.addresses
        self.addresses = [Address.model_validate(row) for row in data or []]
        return self.addresses
