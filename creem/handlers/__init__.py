"""Webhook handler registry and event router"""

from creem.handlers.event_router import WebhookEventRouter
from creem.handlers.registry import WebhookHandlers

__all__ = [
    "WebhookEventRouter",
    "WebhookHandlers",
]
