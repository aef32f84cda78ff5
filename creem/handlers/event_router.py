"""
Event Router

Routes verified Creem webhook events to the registered handlers based on
event type.

Access control:
- subscription.active / trialing / paid fire on_grant_access first
- subscription.paused / expired fire on_revoke_access first
The access-control callback is awaited to completion before the
event-specific callback starts.

Handlers run strictly one at a time. The first handler failure stops the
sequence and propagates unchanged, so a redelivered event may replay both
steps: handlers must be idempotent.
"""

import inspect
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Type, Union

from creem.handlers.registry import WebhookCallback, WebhookHandlers
from creem.models.webhook_events import (
    CheckoutCompletedEvent,
    CreemEntity,
    DispatchResult,
    DisputeCreatedEvent,
    GrantAccessContext,
    GrantAccessReason,
    RefundCreatedEvent,
    RevokeAccessContext,
    RevokeAccessReason,
    SubscriptionEvent,
    UnknownEventType,
    WebhookEnvelope,
    WebhookEventType,
)
from creem.utils.logging_config import get_logger, webhook_event_context

logger = get_logger(__name__)


class AccessControlStep(NamedTuple):
    """Synthetic grant/revoke callback fired ahead of a subscription event"""

    handler: str
    context_model: Type[CreemEntity]
    reason: Union[GrantAccessReason, RevokeAccessReason]


class EventRoute(NamedTuple):
    handler: str
    event_model: Type[CreemEntity]
    access_control: Optional[AccessControlStep] = None


def _grant(reason: GrantAccessReason) -> AccessControlStep:
    return AccessControlStep("on_grant_access", GrantAccessContext, reason)


def _revoke(reason: RevokeAccessReason) -> AccessControlStep:
    return AccessControlStep("on_revoke_access", RevokeAccessContext, reason)


# Event type to route mapping
EVENT_ROUTES: Dict[WebhookEventType, EventRoute] = {
    # One-off events
    WebhookEventType.CHECKOUT_COMPLETED: EventRoute(
        "on_checkout_completed", CheckoutCompletedEvent
    ),
    WebhookEventType.REFUND_CREATED: EventRoute(
        "on_refund_created", RefundCreatedEvent
    ),
    WebhookEventType.DISPUTE_CREATED: EventRoute(
        "on_dispute_created", DisputeCreatedEvent
    ),

    # Subscription events that grant access
    WebhookEventType.SUBSCRIPTION_ACTIVE: EventRoute(
        "on_subscription_active",
        SubscriptionEvent,
        _grant(GrantAccessReason.SUBSCRIPTION_ACTIVE),
    ),
    WebhookEventType.SUBSCRIPTION_TRIALING: EventRoute(
        "on_subscription_trialing",
        SubscriptionEvent,
        _grant(GrantAccessReason.SUBSCRIPTION_TRIALING),
    ),
    WebhookEventType.SUBSCRIPTION_PAID: EventRoute(
        "on_subscription_paid",
        SubscriptionEvent,
        _grant(GrantAccessReason.SUBSCRIPTION_PAID),
    ),

    # Subscription events that revoke access
    WebhookEventType.SUBSCRIPTION_PAUSED: EventRoute(
        "on_subscription_paused",
        SubscriptionEvent,
        _revoke(RevokeAccessReason.SUBSCRIPTION_PAUSED),
    ),
    WebhookEventType.SUBSCRIPTION_EXPIRED: EventRoute(
        "on_subscription_expired",
        SubscriptionEvent,
        _revoke(RevokeAccessReason.SUBSCRIPTION_EXPIRED),
    ),

    # Remaining subscription lifecycle events
    WebhookEventType.SUBSCRIPTION_CANCELED: EventRoute(
        "on_subscription_canceled", SubscriptionEvent
    ),
    WebhookEventType.SUBSCRIPTION_UNPAID: EventRoute(
        "on_subscription_unpaid", SubscriptionEvent
    ),
    WebhookEventType.SUBSCRIPTION_UPDATE: EventRoute(
        "on_subscription_update", SubscriptionEvent
    ),
    WebhookEventType.SUBSCRIPTION_PAST_DUE: EventRoute(
        "on_subscription_past_due", SubscriptionEvent
    ),
    WebhookEventType.SUBSCRIPTION_SCHEDULED_CANCEL: EventRoute(
        "on_subscription_scheduled_cancel", SubscriptionEvent
    ),
}


class WebhookEventRouter:
    """
    Routes webhook events to handler callbacks.

    Stateless: every dispatch call is a function of the event type and the
    handler registry it is given.
    """

    async def dispatch(
        self,
        envelope: WebhookEnvelope,
        normalized_object: Dict[str, Any],
        handlers: WebhookHandlers,
    ) -> DispatchResult:
        """
        Invoke the handlers registered for the envelope's event type.

        Processing flow:
        1. Resolve the event type; unknown types are logged and ignored
        2. Build the flat payload(s) for the route from the normalized entity
        3. Await the access-control callback, if the route has one
        4. Await the event-specific callback

        Args:
            envelope: Parsed webhook envelope
            normalized_object: The envelope's entity with camelCase keys
            handlers: Registry of optional callbacks (never mutated)

        Returns:
            DispatchResult naming the handlers that ran, in order

        Raises:
            Exception: Whatever a handler raises, unchanged
        """
        event_type = envelope.resolved_event_type

        if isinstance(event_type, UnknownEventType):
            logger.warning(
                f"Unknown webhook event type: {event_type.raw}",
                extra={"event_id": envelope.id, "event_type": event_type.raw},
            )
            return DispatchResult(
                status="ignored",
                event_id=envelope.id,
                event_type=event_type.raw,
            )

        route = EVENT_ROUTES[event_type]
        calls = self._build_calls(route, envelope, normalized_object)

        logger.info(
            f"Routing webhook event: {envelope.event_type} ({envelope.id})",
            extra={"event_id": envelope.id, "event_type": envelope.event_type},
        )

        invoked: List[str] = []
        with webhook_event_context(envelope.id, envelope.event_type):
            for handler_name, payload in calls:
                callback = handlers.get(handler_name)
                if callback is None:
                    logger.debug(
                        f"No {handler_name} handler registered, skipping",
                        extra={"handler": handler_name},
                    )
                    continue

                try:
                    await self._invoke(callback, payload)
                except Exception as e:
                    logger.error(
                        f"Handler {handler_name} failed for {envelope.event_type} ({envelope.id}): {e}",
                        exc_info=True,
                        extra={"handler": handler_name, "error": str(e)},
                    )
                    raise

                invoked.append(handler_name)

        return DispatchResult(
            status="processed",
            event_id=envelope.id,
            event_type=envelope.event_type,
            handlers=invoked,
        )

    def _build_calls(
        self,
        route: EventRoute,
        envelope: WebhookEnvelope,
        normalized_object: Dict[str, Any],
    ) -> List[Tuple[str, CreemEntity]]:
        """Build every payload for the route up front, in invocation order"""
        calls: List[Tuple[str, CreemEntity]] = []

        if route.access_control is not None:
            step = route.access_control
            # The synthetic reason always wins over an entity "reason" key
            context = {**normalized_object, "reason": step.reason}
            calls.append((step.handler, step.context_model.from_entity(context)))

        # Entity fields are merged last and flattened to the top level
        payload = {
            "webhookEventType": envelope.event_type,
            "webhookId": envelope.id,
            "webhookCreatedAt": envelope.created_at,
            **normalized_object,
        }
        calls.append((route.handler, route.event_model.from_entity(payload)))
        return calls

    @staticmethod
    async def _invoke(callback: WebhookCallback, payload: CreemEntity) -> None:
        result = callback(payload)
        if inspect.isawaitable(result):
            await result


def get_supported_event_types() -> List[str]:
    """
    Get list of all routed webhook event types.

    Useful for configuring the webhook endpoint in the Creem dashboard.
    """
    return [event_type.value for event_type in EVENT_ROUTES]


def get_access_control_mapping() -> Dict[str, Dict[str, str]]:
    """
    Get mapping of event types to their access-control step.

    Example:
        >>> get_access_control_mapping()["subscription.paused"]
        {'handler': 'on_revoke_access', 'reason': 'subscription_paused'}
    """
    return {
        event_type.value: {
            "handler": route.access_control.handler,
            "reason": route.access_control.reason.value,
        }
        for event_type, route in EVENT_ROUTES.items()
        if route.access_control is not None
    }
