"""
Creem Client

Entry point bundling the API resources and the webhook handler. Explicit
arguments override values loaded from the environment.
"""

from typing import Optional

import httpx

from creem.config import Settings, get_settings
from creem.resources.subscriptions import SubscriptionsResource
from creem.resources.webhooks import WebhooksResource
from creem.services.transport import CreemTransport


class Creem:
    """
    Creem API client.

    Example:
        >>> async with Creem(api_key="ck_...", webhook_secret="whsec_...") as creem:
        ...     subscription = await creem.subscriptions.get("sub_123")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        webhook_secret: Optional[str] = None,
        test_mode: Optional[bool] = None,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        overrides = {
            "api_key": api_key,
            "webhook_secret": webhook_secret,
            "test_mode": test_mode,
        }
        self.settings = (settings or get_settings()).model_copy(
            update={k: v for k, v in overrides.items() if v is not None}
        )

        self.api_key = self.settings.api_key
        self.test_mode = self.settings.test_mode
        self.base_url = self.settings.base_url

        self.transport = CreemTransport(
            api_key=self.api_key or "",
            base_url=self.base_url,
            timeout=self.settings.request_timeout,
            user_agent=self.settings.user_agent,
            client=http_client,
        )

        self.subscriptions = SubscriptionsResource(self.transport)
        self.webhooks = WebhooksResource(self.settings.webhook_secret)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "Creem":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def create_creem(
    api_key: Optional[str] = None,
    webhook_secret: Optional[str] = None,
    test_mode: Optional[bool] = None,
    **kwargs,
) -> Creem:
    """Functional alias for Creem(...)"""
    return Creem(
        api_key=api_key,
        webhook_secret=webhook_secret,
        test_mode=test_mode,
        **kwargs,
    )
