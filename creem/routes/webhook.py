"""
Creem Webhook Endpoint

FastAPI router that feeds the raw request body and signature header into
WebhooksResource.handle_events and maps failures to HTTP status codes.
"""

from typing import Any, Mapping, Optional, Union

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from creem.config import get_settings
from creem.handlers.registry import WebhookHandlers
from creem.resources.webhooks import WebhooksResource
from creem.utils.exceptions import (
    ConfigurationException,
    MalformedPayloadException,
    WebhookSignatureException,
)
from creem.utils.logging_config import get_logger, set_correlation_id

logger = get_logger(__name__)


def create_webhook_router(
    webhooks: WebhooksResource,
    handlers: Union[WebhookHandlers, Mapping[str, Any], None] = None,
    path: str = "/webhook/creem",
    signature_header: Optional[str] = None,
) -> APIRouter:
    """
    Build a router exposing a single Creem webhook endpoint.

    Responses:
        200: event verified and dispatched (or ignored as unknown)
        400: invalid signature or malformed payload
        500: missing webhook secret or a handler failed; Creem redelivers

    Args:
        webhooks: Configured webhooks resource (e.g. creem.webhooks)
        handlers: Callbacks to dispatch to
        path: Endpoint path
        signature_header: Header carrying the HMAC-SHA256 hex signature;
            defaults to Settings.webhook_signature_header
    """
    if signature_header is None:
        signature_header = get_settings().webhook_signature_header

    registry = WebhookHandlers.coerce(handlers)
    router = APIRouter(tags=["webhook"])

    @router.post(path)
    async def creem_webhook(request: Request):
        """Verify and dispatch a Creem webhook delivery"""
        correlation_id = request.headers.get("X-Correlation-ID")
        correlation_id = set_correlation_id(correlation_id)

        payload = await request.body()
        signature = request.headers.get(signature_header)

        try:
            result = await webhooks.handle_events(payload, signature, registry)

        except WebhookSignatureException as e:
            logger.error(
                "Webhook signature verification failed",
                extra={"error": e.to_dict(), "correlation_id": correlation_id},
            )
            raise HTTPException(status_code=400, detail="Invalid signature")

        except MalformedPayloadException as e:
            logger.error(
                f"Malformed webhook payload: {e.message}",
                extra={"error": e.to_dict(), "correlation_id": correlation_id},
            )
            raise HTTPException(status_code=400, detail=e.message)

        except ConfigurationException as e:
            logger.error(
                f"Webhook endpoint misconfigured: {e.message}",
                extra={"error": e.to_dict(), "correlation_id": correlation_id},
            )
            raise HTTPException(status_code=500, detail="Webhook not configured")

        except Exception as e:
            logger.error(
                f"Webhook handler failed: {e}",
                extra={
                    "error": str(e),
                    "type": type(e).__name__,
                    "correlation_id": correlation_id,
                },
            )
            raise HTTPException(status_code=500, detail="Webhook handler failed")

        return JSONResponse(
            status_code=200,
            content={
                "success": True,
                "status": result.status,
                "event_id": result.event_id,
                "event_type": result.event_type,
                "correlation_id": correlation_id,
            },
        )

    return router
