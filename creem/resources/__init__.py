"""Creem API resources"""

from creem.resources.subscriptions import SubscriptionsResource
from creem.resources.webhooks import WebhooksResource

__all__ = [
    "SubscriptionsResource",
    "WebhooksResource",
]
