"""
Webhook Handler Registry

The set of optional user callbacks the event router may invoke. Every entry
is independently optional; an empty registry makes every event a no-op.
Callbacks may be coroutine functions or plain callables.
"""

from dataclasses import dataclass, fields
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from creem.utils.casing import snake_key
from creem.utils.exceptions import ConfigurationException

WebhookCallback = Callable[[Any], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class WebhookHandlers:
    """Optional callbacks, one per routed event type plus access control"""

    on_checkout_completed: Optional[WebhookCallback] = None
    on_refund_created: Optional[WebhookCallback] = None
    on_dispute_created: Optional[WebhookCallback] = None
    on_subscription_active: Optional[WebhookCallback] = None
    on_subscription_trialing: Optional[WebhookCallback] = None
    on_subscription_paid: Optional[WebhookCallback] = None
    on_subscription_paused: Optional[WebhookCallback] = None
    on_subscription_expired: Optional[WebhookCallback] = None
    on_subscription_canceled: Optional[WebhookCallback] = None
    on_subscription_unpaid: Optional[WebhookCallback] = None
    on_subscription_update: Optional[WebhookCallback] = None
    on_subscription_past_due: Optional[WebhookCallback] = None
    on_subscription_scheduled_cancel: Optional[WebhookCallback] = None

    # Access control, fired ahead of the matching subscription callback
    on_grant_access: Optional[WebhookCallback] = None
    on_revoke_access: Optional[WebhookCallback] = None

    def get(self, name: str) -> Optional[WebhookCallback]:
        return getattr(self, name)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "WebhookHandlers":
        """
        Build a registry from a mapping of callback names.

        Keys may use snake_case (on_grant_access) or camelCase
        (onGrantAccess). Unknown keys are rejected.

        Raises:
            ConfigurationException: If a key names no known callback
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, callback in mapping.items():
            name = snake_key(key)
            if name not in known:
                raise ConfigurationException(
                    f"Unknown webhook handler: {key}",
                    details={"handler": key, "supported": sorted(known)},
                )
            kwargs[name] = callback
        return cls(**kwargs)

    @classmethod
    def coerce(
        cls, handlers: Union["WebhookHandlers", Mapping[str, Any], None]
    ) -> "WebhookHandlers":
        if handlers is None:
            return cls()
        if isinstance(handlers, cls):
            return handlers
        return cls.from_mapping(handlers)
