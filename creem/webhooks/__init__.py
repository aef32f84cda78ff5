"""Webhook signature verification, envelope parsing and key normalization"""

from creem.webhooks.normalizer import normalize_webhook_data
from creem.webhooks.parser import parse_webhook_event
from creem.webhooks.signature import generate_signature, verify_signature

__all__ = [
    "generate_signature",
    "normalize_webhook_data",
    "parse_webhook_event",
    "verify_signature",
]
