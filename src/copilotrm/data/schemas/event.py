"""DomainEvent schema - canonical definition.

The payload of an event is resolved once, at validation time, into the
typed model registered for its event type. Agents and rules read typed
fields and never cast raw dictionaries.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import ConfigDict, Field, ValidationInfo, field_validator

from copilotrm.data.schemas.base import DomainModel
from copilotrm.data.schemas.ticket import TicketOutcome


class EventType(str, Enum):
    """Domain event types fed into the orchestrator."""
    TICKET_CREATED = "assistance.ticket.created"
    TICKET_CLOSED = "assistance.ticket.closed"
    TICKET_OUTCOME = "assistance.ticket.outcome"
    INBOUND_EMAIL = "inbound.email.received"
    INBOUND_WHATSAPP = "inbound.whatsapp.received"
    INVOICE_INGESTED = "danea.invoice.ingested"
    PROMO_INGESTED = "offer.promo.ingested"
    OBJECTIVE_UPDATED = "manager.objective.updated"


class EventPayload(DomainModel):
    """Base for typed payloads. Unknown keys are kept."""
    
    model_config = ConfigDict(extra="allow")


class TicketPayload(EventPayload):
    """Payload of assistance.* events."""
    ticket_id: Optional[str] = Field(default=None, description="Assistance ticket id")
    outcome: Optional[TicketOutcome] = Field(default=None, description="Repair outcome")
    inferred_signals: List[str] = Field(
        default_factory=list,
        description="Commercial signals inferred during assistance (gamer, energia, ...)"
    )
    device_type: Optional[str] = Field(default=None)
    issue: Optional[str] = Field(default=None)
    diagnosis: Optional[str] = Field(default=None)


class InboundMessagePayload(EventPayload):
    """Payload of inbound.* message events."""
    subject: str = Field(default="")
    body: str = Field(default="")
    sender: Optional[str] = Field(default=None, alias="from")
    
    @property
    def text(self) -> str:
        """Subject and body joined, lower-cased for matching."""
        return f"{self.subject} {self.body}".lower()


class InvoiceLine(DomainModel):
    """One line of a supplier invoice."""
    description: str = Field(default="")
    qty: float = Field(default=0)
    unit_cost: Optional[float] = Field(default=None)
    tags: List[str] = Field(default_factory=list)


class InvoicePayload(EventPayload):
    """Payload of danea.invoice.ingested events."""
    invoice_number: Optional[str] = Field(default=None)
    supplier: Optional[str] = Field(default=None)
    lines: List[InvoiceLine] = Field(default_factory=list)


class PromoPayload(EventPayload):
    """Payload of offer.promo.ingested events."""
    title: str = Field(default="")
    offer_id: Optional[str] = Field(default=None)
    conditions: Optional[str] = Field(default=None)


class ObjectiveUpdatedPayload(EventPayload):
    """Payload of manager.objective.updated events."""
    objective_id: Optional[str] = Field(default=None)


PAYLOAD_MODELS: Dict[EventType, Type[EventPayload]] = {
    EventType.TICKET_CREATED: TicketPayload,
    EventType.TICKET_CLOSED: TicketPayload,
    EventType.TICKET_OUTCOME: TicketPayload,
    EventType.INBOUND_EMAIL: InboundMessagePayload,
    EventType.INBOUND_WHATSAPP: InboundMessagePayload,
    EventType.INVOICE_INGESTED: InvoicePayload,
    EventType.PROMO_INGESTED: PromoPayload,
    EventType.OBJECTIVE_UPDATED: ObjectiveUpdatedPayload,
}


AnyPayload = Union[
    TicketPayload,
    InboundMessagePayload,
    InvoicePayload,
    PromoPayload,
    ObjectiveUpdatedPayload,
]


class DomainEvent(DomainModel):
    """A typed occurrence fed into the orchestrator.
    
    Immutable once created. Produced by ingestion, read-only for the core.
    """
    id: str = Field(..., description="Unique event identifier")
    type: EventType = Field(..., description="Event type tag, selects the payload model")
    occurred_at: datetime = Field(..., description="When the event happened")
    customer_id: Optional[str] = Field(default=None, description="Related customer, if known")
    payload: AnyPayload = Field(default_factory=dict, validate_default=True)
    
    @field_validator("payload", mode="before")
    @classmethod
    def _resolve_payload(cls, value: Any, info: ValidationInfo) -> Any:
        event_type = info.data.get("type")
        if event_type is None:
            # type failed validation; its error is reported on its own
            return value
        model = PAYLOAD_MODELS[EventType(event_type)]
        if isinstance(value, model):
            return value
        if isinstance(value, EventPayload):
            raise ValueError(
                f"{type(value).__name__} is not a valid payload for {EventType(event_type).value}"
            )
        return model.model_validate(value or {})
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "evt_001",
                "type": "assistance.ticket.outcome",
                "occurredAt": "2026-02-10T09:30:00Z",
                "customerId": "cust_001",
                "payload": {
                    "ticketId": "t1",
                    "outcome": "not-worth-repairing",
                    "inferredSignals": ["gamer"],
                },
            }
        }
    }
