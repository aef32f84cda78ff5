"""
Creem Python SDK

Async client for the Creem payment API plus a framework-agnostic webhook
verifier and dispatcher with grant/revoke access-control callbacks.
"""

__version__ = "0.1.0"

import logging

from creem.client import Creem, create_creem
from creem.handlers.registry import WebhookHandlers
from creem.models.webhook_events import (
    CheckoutCompletedEvent,
    DispatchResult,
    DisputeCreatedEvent,
    GrantAccessContext,
    GrantAccessReason,
    RefundCreatedEvent,
    RevokeAccessContext,
    RevokeAccessReason,
    SubscriptionEvent,
    WebhookEventType,
)
from creem.utils.exceptions import (
    ConfigurationException,
    CreemAPIException,
    CreemException,
    MalformedPayloadException,
    ValidationException,
    WebhookException,
    WebhookSignatureException,
)

logging.getLogger("creem").addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "Creem",
    "create_creem",
    "WebhookHandlers",
    "CheckoutCompletedEvent",
    "DispatchResult",
    "DisputeCreatedEvent",
    "GrantAccessContext",
    "GrantAccessReason",
    "RefundCreatedEvent",
    "RevokeAccessContext",
    "RevokeAccessReason",
    "SubscriptionEvent",
    "WebhookEventType",
    "ConfigurationException",
    "CreemAPIException",
    "CreemException",
    "MalformedPayloadException",
    "ValidationException",
    "WebhookException",
    "WebhookSignatureException",
]
