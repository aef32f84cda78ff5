"""
Pytest Configuration and Fixtures

Provides common fixtures and webhook payload factories for SDK tests.
"""

import json
from typing import Any, Callable, Dict, Tuple

import pytest

from creem.resources.webhooks import WebhooksResource
from creem.webhooks.signature import generate_signature


@pytest.fixture
def webhook_secret() -> str:
    """Creem webhook secret for testing"""
    return "whsec_test_secret"


@pytest.fixture
def webhooks(webhook_secret) -> WebhooksResource:
    return WebhooksResource(webhook_secret)


@pytest.fixture
def subscription_object() -> Dict[str, Any]:
    """Subscription entity as delivered by Creem (snake_case, relations expanded)"""
    return {
        "id": "sub_test123",
        "object": "subscription",
        "mode": "test",
        "status": "active",
        "collection_method": "charge_automatically",
        "last_transaction_id": "tran_test123",
        "current_period_start_date": "2024-01-01T00:00:00.000Z",
        "current_period_end_date": "2024-02-01T00:00:00.000Z",
        "canceled_at": None,
        "created_at": "2024-01-01T00:00:00.000Z",
        "updated_at": "2024-01-01T00:00:00.000Z",
        "product": {
            "id": "prod_test123",
            "object": "product",
            "name": "Pro Plan",
            "price": 2999,
            "currency": "USD",
            "billing_type": "recurring",
            "billing_period": "every-month",
        },
        "customer": {
            "id": "cust_test123",
            "object": "customer",
            "email": "test@example.com",
            "name": "Test Customer",
            "country": "US",
        },
        "items": [
            {
                "id": "sitem_test123",
                "object": "subscription_item",
                "product_id": "prod_test123",
                "price_id": "pprice_test123",
                "units": 1,
            }
        ],
        "metadata": {"reference_id": "user_42"},
    }


@pytest.fixture
def checkout_object() -> Dict[str, Any]:
    """Checkout entity as delivered by Creem"""
    return {
        "id": "ch_test123",
        "object": "checkout",
        "mode": "test",
        "status": "completed",
        "request_id": "req_42",
        "units": 1,
        "product": {
            "id": "prod_test123",
            "object": "product",
            "name": "Pro Plan",
            "billing_type": "onetime",
        },
        "customer": {
            "id": "cust_test123",
            "object": "customer",
            "email": "test@example.com",
        },
        "order": {
            "id": "ord_test123",
            "object": "order",
            "amount_paid": 2999,
        },
        "success_url": "https://example.com/thanks",
        "metadata": {"reference_id": "user_42"},
    }


@pytest.fixture
def make_event() -> Callable[..., Dict[str, Any]]:
    """Factory for webhook envelopes"""

    def _event(
        event_type: str,
        entity: Dict[str, Any],
        event_id: str = "evt_1",
        created_at: int = 1700000000,
    ) -> Dict[str, Any]:
        return {
            "id": event_id,
            "eventType": event_type,
            "created_at": created_at,
            "object": entity,
        }

    return _event


@pytest.fixture
def sign(webhook_secret) -> Callable[[Dict[str, Any]], Tuple[str, str]]:
    """Serialize an event and sign it, returning (payload, signature)"""

    def _sign(event: Dict[str, Any]) -> Tuple[str, str]:
        payload = json.dumps(event, separators=(",", ":"))
        return payload, generate_signature(payload, webhook_secret)

    return _sign
