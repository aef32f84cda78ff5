"""
Test Webhook Entry Point

End-to-end scenarios for WebhooksResource.handle_events.
"""

import json
from unittest.mock import AsyncMock

import pytest

from creem.handlers.registry import WebhookHandlers
from creem.models.webhook_events import CheckoutCompletedEvent
from creem.resources.webhooks import WebhooksResource
from creem.utils.exceptions import (
    ConfigurationException,
    MalformedPayloadException,
    WebhookSignatureException,
)
from creem.webhooks.signature import generate_signature


@pytest.mark.asyncio
async def test_checkout_completed_scenario(webhooks, make_event, sign, checkout_object):
    on_checkout_completed = AsyncMock()
    payload, signature = sign(make_event("checkout.completed", checkout_object))

    result = await webhooks.handle_events(
        payload, signature, WebhookHandlers(on_checkout_completed=on_checkout_completed)
    )

    on_checkout_completed.assert_awaited_once()
    event = on_checkout_completed.await_args.args[0]
    assert isinstance(event, CheckoutCompletedEvent)
    assert event.webhookEventType == "checkout.completed"
    assert event.webhookId == "evt_1"
    assert event.webhookCreatedAt == 1700000000
    assert event.id == "ch_test123"
    assert event.requestId == "req_42"
    assert event.successUrl == "https://example.com/thanks"
    assert event.product.billingType == "onetime"
    assert event.order == {"id": "ord_test123", "object": "order", "amountPaid": 2999}
    assert event.metadata == {"referenceId": "user_42"}
    assert result.handlers == ["on_checkout_completed"]


@pytest.mark.asyncio
async def test_bytes_payload(webhooks, make_event, sign, checkout_object):
    callback = AsyncMock()
    payload, signature = sign(make_event("checkout.completed", checkout_object))

    await webhooks.handle_events(
        payload.encode("utf-8"), signature, {"onCheckoutCompleted": callback}
    )

    callback.assert_awaited_once()


@pytest.mark.asyncio
async def test_refund_and_dispute_events(webhooks, make_event, sign):
    on_refund, on_dispute = AsyncMock(), AsyncMock()
    handlers = WebhookHandlers(on_refund_created=on_refund, on_dispute_created=on_dispute)
    transaction = {"id": "tran_1", "object": "transaction", "amount_paid": 2999}

    refund = {
        "id": "ref_1",
        "object": "refund",
        "refund_amount": 2999,
        "refund_currency": "USD",
        "reason": "requested_by_customer",
        "transaction": transaction,
    }
    dispute = {
        "id": "disp_1",
        "object": "dispute",
        "amount": 2999,
        "currency": "USD",
        "transaction": transaction,
    }

    await webhooks.handle_events(*sign(make_event("refund.created", refund)), handlers)
    await webhooks.handle_events(
        *sign(make_event("dispute.created", dispute, event_id="evt_2")), handlers
    )

    refund_event = on_refund.await_args.args[0]
    assert refund_event.refundAmount == 2999
    assert refund_event.reason == "requested_by_customer"
    assert refund_event.transaction.amountPaid == 2999

    dispute_event = on_dispute.await_args.args[0]
    assert dispute_event.webhookId == "evt_2"
    assert dispute_event.transaction.id == "tran_1"


@pytest.mark.asyncio
async def test_grant_access_before_subscription_active(
    webhooks, make_event, sign, subscription_object
):
    order = []
    on_grant_access = AsyncMock(side_effect=lambda ctx: order.append("grant"))
    on_subscription_active = AsyncMock(side_effect=lambda event: order.append("active"))
    payload, signature = sign(make_event("subscription.active", subscription_object))

    await webhooks.handle_events(
        payload,
        signature,
        WebhookHandlers(
            on_grant_access=on_grant_access,
            on_subscription_active=on_subscription_active,
        ),
    )

    assert order == ["grant", "active"]
    assert on_grant_access.await_args.args[0].reason == "subscription_active"
    assert on_subscription_active.await_args.args[0].webhookEventType == "subscription.active"


@pytest.mark.asyncio
async def test_grant_access_only(webhooks, make_event, sign, subscription_object):
    on_grant_access = AsyncMock()
    payload, signature = sign(make_event("subscription.active", subscription_object))

    result = await webhooks.handle_events(
        payload, signature, WebhookHandlers(on_grant_access=on_grant_access)
    )

    on_grant_access.assert_awaited_once()
    assert result.handlers == ["on_grant_access"]


@pytest.mark.asyncio
async def test_grant_access_failure_propagates_unchanged(
    webhooks, make_event, sign, subscription_object
):
    error = ValueError("cannot grant")
    on_subscription_active = AsyncMock()
    payload, signature = sign(make_event("subscription.active", subscription_object))

    with pytest.raises(ValueError) as exc_info:
        await webhooks.handle_events(
            payload,
            signature,
            WebhookHandlers(
                on_grant_access=AsyncMock(side_effect=error),
                on_subscription_active=on_subscription_active,
            ),
        )

    assert exc_info.value is error
    on_subscription_active.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_discriminator_invokes_no_handlers(webhooks, make_event, sign, checkout_object):
    callback = AsyncMock()
    del checkout_object["object"]
    payload, signature = sign(make_event("checkout.completed", checkout_object))

    with pytest.raises(MalformedPayloadException) as exc_info:
        await webhooks.handle_events(
            payload, signature, WebhookHandlers(on_checkout_completed=callback)
        )

    assert exc_info.value.message == "Invalid webhook event structure"
    callback.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_event_type_completes(webhooks, make_event, sign, checkout_object):
    callback = AsyncMock()
    payload, signature = sign(make_event("future.event", checkout_object))

    result = await webhooks.handle_events(
        payload, signature, WebhookHandlers(on_checkout_completed=callback)
    )

    assert result.status == "ignored"
    callback.assert_not_awaited()


@pytest.mark.asyncio
async def test_invalid_signature_invokes_no_handlers(webhooks, make_event, sign, checkout_object):
    callback = AsyncMock()
    payload, _ = sign(make_event("checkout.completed", checkout_object))

    with pytest.raises(WebhookSignatureException) as exc_info:
        await webhooks.handle_events(
            payload, "0" * 64, WebhookHandlers(on_checkout_completed=callback)
        )

    assert exc_info.value.message == "Invalid webhook signature"
    callback.assert_not_awaited()


@pytest.mark.asyncio
async def test_reserialized_payload_fails_verification(webhooks, make_event, sign, checkout_object):
    payload, signature = sign(make_event("checkout.completed", checkout_object))
    reserialized = json.dumps(json.loads(payload), indent=2)

    with pytest.raises(WebhookSignatureException):
        await webhooks.handle_events(reserialized, signature, None)


@pytest.mark.asyncio
async def test_missing_signature(webhooks, make_event, sign, checkout_object):
    payload, _ = sign(make_event("checkout.completed", checkout_object))

    with pytest.raises(WebhookSignatureException):
        await webhooks.handle_events(payload, None, None)


@pytest.mark.asyncio
@pytest.mark.parametrize("secret", [None, ""])
async def test_missing_secret_is_a_configuration_error(secret):
    webhooks = WebhooksResource(secret)
    payload = "{}"

    with pytest.raises(ConfigurationException):
        await webhooks.handle_events(payload, generate_signature(payload, "x"), None)


@pytest.mark.asyncio
async def test_signed_garbage_is_malformed(webhooks, webhook_secret):
    payload = "definitely not json"

    with pytest.raises(MalformedPayloadException):
        await webhooks.handle_events(
            payload, generate_signature(payload, webhook_secret), None
        )


@pytest.mark.asyncio
async def test_unknown_handler_name_is_rejected(webhooks, make_event, sign, checkout_object):
    payload, signature = sign(make_event("checkout.completed", checkout_object))

    with pytest.raises(ConfigurationException):
        await webhooks.handle_events(payload, signature, {"onCheckoutExploded": AsyncMock()})
