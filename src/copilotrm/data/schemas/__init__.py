"""Domain schemas - Pydantic models for every record the decision core handles."""

from copilotrm.data.schemas.base import DomainModel
from copilotrm.data.schemas.customer import Channel, Segment, ConsentState, CustomerProfile
from copilotrm.data.schemas.offer import OfferCategory, ProductOffer
from copilotrm.data.schemas.objective import ChannelWindow, ManagerObjective
from copilotrm.data.schemas.ticket import TicketOutcome, AssistanceTicket
from copilotrm.data.schemas.event import (
    EventType,
    EventPayload,
    TicketPayload,
    InboundMessagePayload,
    InvoiceLine,
    InvoicePayload,
    PromoPayload,
    ObjectiveUpdatedPayload,
    PAYLOAD_MODELS,
    DomainEvent,
)
from copilotrm.data.schemas.action import ActionType, ScoreBreakdown, ActionCandidate
from copilotrm.data.schemas.task import TaskKind, TaskItem
from copilotrm.data.schemas.draft import CommunicationDraft

__all__ = [
    "DomainModel",
    # Customers
    "Channel",
    "Segment",
    "ConsentState",
    "CustomerProfile",
    # Offers and objectives
    "OfferCategory",
    "ProductOffer",
    "ChannelWindow",
    "ManagerObjective",
    # Tickets
    "TicketOutcome",
    "AssistanceTicket",
    # Events
    "EventType",
    "EventPayload",
    "TicketPayload",
    "InboundMessagePayload",
    "InvoiceLine",
    "InvoicePayload",
    "PromoPayload",
    "ObjectiveUpdatedPayload",
    "PAYLOAD_MODELS",
    "DomainEvent",
    # Actions and outputs
    "ActionType",
    "ScoreBreakdown",
    "ActionCandidate",
    "TaskKind",
    "TaskItem",
    "CommunicationDraft",
]
