"""
Webhook Event Parser

Turns the raw payload into a validated WebhookEnvelope. Parsing is
all-or-nothing: any structural problem raises MalformedPayloadException.
"""

from typing import Union

from pydantic import ValidationError

from creem.models.webhook_events import WebhookEnvelope
from creem.utils.exceptions import MalformedPayloadException


def parse_webhook_event(payload: Union[bytes, bytearray, str]) -> WebhookEnvelope:
    """
    Parse and validate a webhook event from the raw payload.

    Args:
        payload: Raw request body (JSON text or UTF-8 bytes)

    Returns:
        Validated WebhookEnvelope

    Raises:
        MalformedPayloadException: If the payload is not JSON, is not an
            object, lacks id/eventType/created_at, or embeds an entity
            without a recognized type discriminator
    """
    if isinstance(payload, bytearray):
        payload = bytes(payload)

    try:
        return WebhookEnvelope.model_validate_json(payload)
    except ValidationError as e:
        raise MalformedPayloadException(
            details={
                "errors": [
                    {"loc": list(err["loc"]), "type": err["type"]}
                    for err in e.errors()
                ]
            }
        ) from e
