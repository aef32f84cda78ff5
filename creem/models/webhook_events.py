"""
Creem Webhook Event Models

Pydantic models for the webhook envelope (as received on the wire) and for
the flattened, camelCase payloads handed to webhook handlers.
"""

from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Type, Union, get_args

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)

# Timestamps arrive either as epoch numbers or ISO strings depending on the field
Timestamp = Union[int, float, str]
Number = Union[int, float]


class WebhookEntityType(str, Enum):
    """Closed set of entity type discriminators accepted in webhook payloads"""

    CHECKOUT = "checkout"
    CUSTOMER = "customer"
    ORDER = "order"
    PRODUCT = "product"
    SUBSCRIPTION = "subscription"
    REFUND = "refund"
    DISPUTE = "dispute"
    TRANSACTION = "transaction"


WEBHOOK_ENTITY_TYPES = frozenset(member.value for member in WebhookEntityType)


class WebhookEventType(str, Enum):
    """Closed set of recognized webhook event types"""

    CHECKOUT_COMPLETED = "checkout.completed"
    REFUND_CREATED = "refund.created"
    DISPUTE_CREATED = "dispute.created"
    SUBSCRIPTION_ACTIVE = "subscription.active"
    SUBSCRIPTION_TRIALING = "subscription.trialing"
    SUBSCRIPTION_PAID = "subscription.paid"
    SUBSCRIPTION_PAUSED = "subscription.paused"
    SUBSCRIPTION_EXPIRED = "subscription.expired"
    SUBSCRIPTION_CANCELED = "subscription.canceled"
    SUBSCRIPTION_UNPAID = "subscription.unpaid"
    SUBSCRIPTION_UPDATE = "subscription.update"
    SUBSCRIPTION_PAST_DUE = "subscription.past_due"
    SUBSCRIPTION_SCHEDULED_CANCEL = "subscription.scheduled_cancel"


class UnknownEventType(NamedTuple):
    """Event type tag not in WebhookEventType, kept verbatim"""

    raw: str


class GrantAccessReason(str, Enum):
    SUBSCRIPTION_ACTIVE = "subscription_active"
    SUBSCRIPTION_TRIALING = "subscription_trialing"
    SUBSCRIPTION_PAID = "subscription_paid"


class RevokeAccessReason(str, Enum):
    SUBSCRIPTION_PAUSED = "subscription_paused"
    SUBSCRIPTION_EXPIRED = "subscription_expired"


class WebhookEnvelope(BaseModel):
    """
    Creem webhook event envelope.
    Represents the complete webhook payload exactly as delivered.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: StrictStr = Field(description="Unique webhook event identifier")
    event_type: StrictStr = Field(
        validation_alias=AliasChoices("eventType", "event_type"),
        description="Event type (e.g., subscription.active)",
    )
    created_at: Union[StrictInt, StrictFloat] = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        description="Event creation timestamp, preserved as received",
    )
    object: Dict[str, Any] = Field(description="The embedded Creem entity")

    @field_validator("object")
    @classmethod
    def validate_entity_type(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Require a recognizable entity type discriminator"""
        entity_type = v.get("object")
        if not isinstance(entity_type, str) or entity_type not in WEBHOOK_ENTITY_TYPES:
            raise ValueError(
                f"Entity type must be one of {sorted(WEBHOOK_ENTITY_TYPES)}"
            )
        return v

    @property
    def entity_type(self) -> WebhookEntityType:
        return WebhookEntityType(self.object["object"])

    @property
    def resolved_event_type(self) -> Union[WebhookEventType, UnknownEventType]:
        """Decode the raw tag into a known event type or an UnknownEventType"""
        try:
            return WebhookEventType(self.event_type)
        except ValueError:
            return UnknownEventType(self.event_type)


# ============================================================================
# Normalized entities (camelCase keys, unknown fields preserved)
# ============================================================================


class CreemEntity(BaseModel):
    """
    Base for normalized entities. Fields the SDK does not model are kept.

    Handler payloads are built with from_entity, never validated: values
    reach handlers exactly as Creem sent them, even where they differ from
    the field annotations.
    """

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_entity(cls, data: Dict[str, Any]) -> "CreemEntity":
        """
        Build an instance from a normalized entity without coercing values.

        Nested objects under fields annotated with an entity model become
        instances of that model (recursively); everything else is kept as is.
        """
        values = {}
        for key, value in data.items():
            field = cls.model_fields.get(key)
            nested = _entity_model(field.annotation) if field is not None else None
            if nested is not None:
                value = _build_nested(nested, value)
            values[key] = value
        return cls.model_construct(**values)


def _entity_model(annotation: Any) -> Optional[Type[CreemEntity]]:
    """Find the entity model inside an annotation such as Optional[List[X]]"""
    if isinstance(annotation, type) and issubclass(annotation, CreemEntity):
        return annotation
    for arg in get_args(annotation):
        found = _entity_model(arg)
        if found is not None:
            return found
    return None


def _build_nested(model: Type[CreemEntity], value: Any) -> Any:
    if isinstance(value, dict):
        return model.from_entity(value)
    if isinstance(value, list):
        return [model.from_entity(v) if isinstance(v, dict) else v for v in value]
    return value


class NormalizedCustomer(CreemEntity):
    object: Optional[str] = None
    id: Optional[str] = None
    mode: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None
    createdAt: Optional[Timestamp] = None
    updatedAt: Optional[Timestamp] = None


class NormalizedProduct(CreemEntity):
    object: Optional[str] = None
    id: Optional[str] = None
    mode: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Number] = None
    currency: Optional[str] = None
    billingType: Optional[str] = None
    billingPeriod: Optional[str] = None
    status: Optional[str] = None
    taxMode: Optional[str] = None
    taxCategory: Optional[str] = None
    createdAt: Optional[Timestamp] = None
    updatedAt: Optional[Timestamp] = None


class NormalizedTransaction(CreemEntity):
    object: Optional[str] = None
    id: Optional[str] = None
    mode: Optional[str] = None
    amount: Optional[Number] = None
    amountPaid: Optional[Number] = None
    currency: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    order: Optional[str] = None
    subscription: Optional[str] = None
    customer: Optional[str] = None
    createdAt: Optional[Timestamp] = None


class NormalizedSubscriptionItem(CreemEntity):
    object: Optional[str] = None
    id: Optional[str] = None
    productId: Optional[str] = None
    priceId: Optional[str] = None
    units: Optional[Number] = None


class NormalizedSubscription(CreemEntity):
    """Subscription as delivered in subscription webhooks (product and customer expanded)"""

    object: Optional[str] = Field(default=None, description="Entity type discriminator")
    id: Optional[str] = None
    mode: Optional[str] = None
    product: Optional[Union[NormalizedProduct, str]] = None
    customer: Optional[Union[NormalizedCustomer, str]] = None
    items: Optional[List[NormalizedSubscriptionItem]] = None
    collectionMethod: Optional[str] = None
    status: Optional[str] = None
    lastTransactionId: Optional[str] = None
    lastTransaction: Optional[NormalizedTransaction] = None
    lastTransactionDate: Optional[Timestamp] = None
    nextTransactionDate: Optional[Timestamp] = None
    currentPeriodStartDate: Optional[Timestamp] = None
    currentPeriodEndDate: Optional[Timestamp] = None
    canceledAt: Optional[Timestamp] = None
    createdAt: Optional[Timestamp] = None
    updatedAt: Optional[Timestamp] = None
    discount: Any = None
    metadata: Optional[Dict[str, Any]] = None


class NormalizedCheckout(CreemEntity):
    object: Optional[str] = Field(default=None, description="Entity type discriminator")
    id: Optional[str] = None
    mode: Optional[str] = None
    status: Optional[str] = None
    requestId: Optional[str] = None
    product: Optional[Union[NormalizedProduct, str]] = None
    units: Optional[Number] = None
    order: Optional[Union[Dict[str, Any], str]] = None
    subscription: Optional[Union[NormalizedSubscription, str]] = None
    customer: Optional[Union[NormalizedCustomer, str]] = None
    customFields: Optional[List[Dict[str, Any]]] = None
    checkoutUrl: Optional[str] = None
    successUrl: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class NormalizedRefund(CreemEntity):
    object: Optional[str] = Field(default=None, description="Entity type discriminator")
    id: Optional[str] = None
    mode: Optional[str] = None
    status: Optional[str] = None
    refundAmount: Optional[Number] = None
    refundCurrency: Optional[str] = None
    reason: Optional[str] = None
    transaction: Optional[NormalizedTransaction] = None
    checkout: Optional[Union[NormalizedCheckout, str]] = None
    order: Optional[Union[Dict[str, Any], str]] = None
    subscription: Optional[Union[NormalizedSubscription, str]] = None
    customer: Optional[Union[NormalizedCustomer, str]] = None
    createdAt: Optional[Timestamp] = None


class NormalizedDispute(CreemEntity):
    object: Optional[str] = Field(default=None, description="Entity type discriminator")
    id: Optional[str] = None
    mode: Optional[str] = None
    amount: Optional[Number] = None
    currency: Optional[str] = None
    transaction: Optional[NormalizedTransaction] = None
    checkout: Optional[Union[NormalizedCheckout, str]] = None
    order: Optional[Union[Dict[str, Any], str]] = None
    subscription: Optional[Union[NormalizedSubscription, str]] = None
    customer: Optional[Union[NormalizedCustomer, str]] = None
    createdAt: Optional[Timestamp] = None


# ============================================================================
# Handler payloads: wrapper fields flattened together with the entity
# ============================================================================


class WebhookEventFields(CreemEntity):
    """Wrapper fields carried by every event-specific handler payload"""

    webhookEventType: str = Field(description="Webhook event type identifier")
    webhookId: str = Field(description="Unique webhook event ID")
    webhookCreatedAt: Number = Field(
        description="Webhook event creation timestamp"
    )


class CheckoutCompletedEvent(WebhookEventFields, NormalizedCheckout):
    """checkout.completed handler payload"""


class RefundCreatedEvent(WebhookEventFields, NormalizedRefund):
    """refund.created handler payload"""


class DisputeCreatedEvent(WebhookEventFields, NormalizedDispute):
    """dispute.created handler payload"""


class SubscriptionEvent(WebhookEventFields, NormalizedSubscription):
    """subscription.* handler payload"""


class GrantAccessContext(NormalizedSubscription):
    """Context passed to on_grant_access, subscription fields flattened"""

    reason: GrantAccessReason = Field(description="Why access is granted")


class RevokeAccessContext(NormalizedSubscription):
    """Context passed to on_revoke_access, subscription fields flattened"""

    reason: RevokeAccessReason = Field(description="Why access is revoked")


class DispatchResult(BaseModel):
    """Summary of one dispatch call"""

    status: str = Field(description="'processed' or 'ignored'")
    event_id: str
    event_type: str
    handlers: List[str] = Field(default_factory=list)
