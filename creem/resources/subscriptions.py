"""
Subscriptions Resource

Retrieve, cancel, update and upgrade subscriptions.
"""

from typing import Any, Dict, List, Optional

from creem.services.transport import CreemTransport
from creem.utils.casing import to_snake_case
from creem.utils.validate import (
    is_array,
    is_mapping,
    is_number,
    is_string,
    one_of,
    required,
)

UPDATE_BEHAVIORS = (
    "proration-charge-immediately",
    "proration-charge",
    "proration-none",
)


class SubscriptionsResource:
    """Creem /v1/subscriptions endpoints"""

    def __init__(self, transport: CreemTransport):
        self.transport = transport

    async def get(self, subscription_id: str) -> Dict[str, Any]:
        required(subscription_id, "subscription_id")
        is_string(subscription_id, "subscription_id")

        return await self.transport.request(
            "GET",
            "/v1/subscriptions",
            query_params={"subscription_id": subscription_id},
        )

    async def cancel(
        self,
        subscription_id: str,
        mode: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Cancel a subscription.

        Args:
            subscription_id: Subscription to cancel
            mode: "immediate" or "scheduled" (cancel at period end)
        """
        required(subscription_id, "subscription_id")
        is_string(subscription_id, "subscription_id")
        is_string(mode, "mode")

        return await self.transport.request(
            "POST",
            f"/v1/subscriptions/{subscription_id}/cancel",
            {"mode": mode} if mode is not None else None,
        )

    async def update(
        self,
        subscription_id: str,
        items: Optional[List[Dict[str, Any]]] = None,
        update_behavior: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Update subscription items.

        Args:
            subscription_id: Subscription to update
            items: Items with id, productId/product_id, priceId/price_id, units
            update_behavior: One of UPDATE_BEHAVIORS
        """
        required(subscription_id, "subscription_id")
        is_string(subscription_id, "subscription_id")
        is_array(items, "items")
        is_string(update_behavior, "update_behavior")
        one_of(update_behavior, UPDATE_BEHAVIORS, "update_behavior")

        body: Dict[str, Any] = {}
        if items is not None:
            for item in items:
                required(item, "items[]")
                is_mapping(item, "items[]")
                is_number(item.get("units"), "units")
            body["items"] = [to_snake_case(dict(item)) for item in items]
        if update_behavior is not None:
            body["update_behavior"] = update_behavior

        return await self.transport.request(
            "POST", f"/v1/subscriptions/{subscription_id}", body
        )

    async def upgrade(
        self,
        subscription_id: str,
        product_id: str,
        update_behavior: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Move a subscription to another product"""
        required(subscription_id, "subscription_id")
        is_string(subscription_id, "subscription_id")
        required(product_id, "product_id")
        is_string(product_id, "product_id")
        is_string(update_behavior, "update_behavior")
        one_of(update_behavior, UPDATE_BEHAVIORS, "update_behavior")

        body: Dict[str, Any] = {"product_id": product_id}
        if update_behavior is not None:
            body["update_behavior"] = update_behavior

        return await self.transport.request(
            "POST", f"/v1/subscriptions/{subscription_id}/upgrade", body
        )
