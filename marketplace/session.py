"""
Session wiring.

One Session per signed-in app session; screens receive it (or its parts)
explicitly instead of reaching for module-level singletons.
"""
from dataclasses import dataclass, field
from typing import Optional

from marketplace.cart import CartStore, CartSyncAdapter
from marketplace.checkout import CheckoutService
from marketplace.config import DEFAULT_CURRENCY, Settings, get_settings
from marketplace.services.api_client import ApiClient
from marketplace.services.notifications import NotificationService


@dataclass
class Session:
    client: ApiClient
    store: CartStore
    checkout: CheckoutService
    notifier: NotificationService = field(default_factory=NotificationService)
    currency: str = DEFAULT_CURRENCY

    async def close(self) -> None:
        await self.client.aclose()


def create_session(
    settings: Optional[Settings] = None,
    client: Optional[ApiClient] = None,
    notifier: Optional[NotificationService] = None,
) -> Session:
    """Build the client, cart store and checkout service for one session."""
    settings = settings or get_settings()
    client = client or ApiClient.from_settings(settings)
    store = CartStore(CartSyncAdapter(client))
    return Session(
        client=client,
        store=store,
        checkout=CheckoutService(client, store),
        notifier=notifier or NotificationService(),
        currency=settings.currency,
    )
