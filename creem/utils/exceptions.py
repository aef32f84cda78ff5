"""
Custom Exception Classes

Defines SDK-specific exceptions for webhook handling and API calls.
Errors raised by user-supplied webhook handlers are never wrapped.
"""

from typing import Any, Dict, Optional


class CreemException(Exception):
    """Base exception for all SDK errors"""

    def __init__(
        self,
        message: str,
        error_code: str = "CREEM_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationException(CreemException):
    """Configuration errors, such as a missing webhook secret"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="CONFIG_ERROR", details=details)


class WebhookException(CreemException):
    """Webhook delivery rejected before any handler ran"""

    def __init__(
        self,
        message: str,
        error_code: str = "WEBHOOK_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, details=details)


class WebhookSignatureException(WebhookException):
    """Webhook signature absent, malformed or mismatched"""

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(
            message,
            error_code="WEBHOOK_SIGNATURE_ERROR",
            details={"verification": "failed"},
        )


class MalformedPayloadException(WebhookException):
    """Webhook payload is not a structurally valid event envelope"""

    def __init__(
        self,
        message: str = "Invalid webhook event structure",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message, error_code="WEBHOOK_PAYLOAD_ERROR", details=details
        )


class ValidationException(CreemException):
    """Request parameter validation errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="VALIDATION_ERROR", details=details)


class CreemAPIException(CreemException):
    """Creem REST API call errors"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if status_code:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, error_code="CREEM_API_ERROR", details=details)
