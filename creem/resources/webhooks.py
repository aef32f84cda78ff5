"""
Webhooks Resource

Framework-agnostic entry point for inbound Creem webhooks: verifies the
signature, parses the envelope, normalizes the entity and dispatches it.
"""

from typing import Any, Mapping, Optional, Union

from creem.handlers.event_router import WebhookEventRouter
from creem.handlers.registry import WebhookHandlers
from creem.models.webhook_events import DispatchResult
from creem.utils.exceptions import ConfigurationException, WebhookSignatureException
from creem.utils.logging_config import get_logger
from creem.webhooks.normalizer import normalize_webhook_data
from creem.webhooks.parser import parse_webhook_event
from creem.webhooks.signature import verify_signature

logger = get_logger(__name__)


class WebhooksResource:
    """Inbound webhook verification and dispatch"""

    def __init__(
        self,
        secret: Optional[str] = None,
        router: Optional[WebhookEventRouter] = None,
    ):
        self._secret = secret
        self.router = router or WebhookEventRouter()

    async def handle_events(
        self,
        payload: Union[bytes, str],
        signature: Optional[str],
        handlers: Union[WebhookHandlers, Mapping[str, Any], None] = None,
    ) -> DispatchResult:
        """
        Handle an incoming webhook delivery.

        Pass the raw request body: the signature covers the exact bytes, so
        decoding and re-serializing the JSON first breaks verification.

        Args:
            payload: Raw request body (bytes or text)
            signature: Value of the creem-signature header
            handlers: WebhookHandlers, or a mapping of callback names

        Returns:
            DispatchResult naming the handlers that ran

        Raises:
            ConfigurationException: If no webhook secret is configured
            WebhookSignatureException: If the signature does not match
            MalformedPayloadException: If the payload is not a valid event
            Exception: Whatever a handler raises, unchanged

        Example:
            >>> @app.post("/webhook")
            ... async def webhook(request: Request):
            ...     await creem.webhooks.handle_events(
            ...         await request.body(),
            ...         request.headers.get("creem-signature"),
            ...         WebhookHandlers(on_grant_access=grant_access),
            ...     )
        """
        if not self._secret:
            raise ConfigurationException(
                "Webhook secret not configured. Pass `webhook_secret` to `Creem` "
                "or set CREEM_WEBHOOK_SECRET."
            )

        registry = WebhookHandlers.coerce(handlers)

        if not verify_signature(payload, signature, self._secret):
            logger.warning("Webhook signature verification failed")
            raise WebhookSignatureException()

        envelope = parse_webhook_event(payload)
        normalized_object = normalize_webhook_data(envelope.object)

        logger.info(
            "Webhook verified",
            extra={"event_id": envelope.id, "event_type": envelope.event_type},
        )

        return await self.router.dispatch(envelope, normalized_object, registry)
