"""Rule Candidates - turns an event and active offers into unscored actions."""

import re
from typing import Callable, List, Optional, Sequence

from copilotrm.common.constants import IdPrefixes
from copilotrm.common.runtime import IdGenerator, UuidIdGenerator
from copilotrm.data.schemas import (
    ActionCandidate,
    DomainEvent,
    EventType,
    InboundMessagePayload,
    InvoicePayload,
    ProductOffer,
    PromoPayload,
    TicketPayload,
)


RuleCandidateGenerator = Callable[[DomainEvent, Sequence[ProductOffer]], List[ActionCandidate]]

NOTEBOOK_TITLE = re.compile(r"notebook|pc", re.IGNORECASE)
ENERGY_TITLE = re.compile(r"energia|luce|gas", re.IGNORECASE)
HARDWARE_LINE = re.compile(r"rtx|gpu|notebook|pc|ssd|monitor", re.IGNORECASE)
SMARTPHONE_PROMO = re.compile(r"oppo|samsung|iphone|smartphone", re.IGNORECASE)
POST_SALE_COMPLAINT = re.compile(r"contratto.*(giorni|4 giorni)|non ho ricevuto|ritardo")


def _first(offers: Sequence[ProductOffer], predicate: Callable[[ProductOffer], bool]) -> Optional[ProductOffer]:
    return next((o for o in offers if predicate(o)), None)


def _offer_id(offer: Optional[ProductOffer]) -> Optional[str]:
    return offer.id if offer else None


def _ticket_candidates(
    event: DomainEvent,
    payload: TicketPayload,
    offers: Sequence[ProductOffer],
    ids: IdGenerator,
) -> List[ActionCandidate]:
    candidates = []
    signals = payload.inferred_signals
    
    if payload.outcome == "not-worth-repairing":
        notebook = _first(offers, lambda o: o.category == "hardware" and bool(NOTEBOOK_TITLE.search(o.title)))
        candidates.append(ActionCandidate(
            id=ids.new_id(IdPrefixes.ACTION),
            agent="preventivi",
            action_type="quote",
            title="Genera preventivo sostituzione in 3 fasce",
            channel="whatsapp",
            offer_id=_offer_id(notebook),
            customer_id=event.customer_id,
            confidence=0.82,
            metadata={
                "trigger": "not-worth-repairing",
                "contextFit": 0.95,
                "profileFit": 0.7 if "gamer" in signals else 0.6,
            },
        ))
    
    if "gamer" in signals:
        connectivity = _first(offers, lambda o: o.category == "connectivity")
        candidates.append(ActionCandidate(
            id=ids.new_id(IdPrefixes.ACTION),
            agent="telephony",
            action_type="cross-sell",
            title="Proposta connectivity gaming (fibra/router/mesh)",
            channel="whatsapp",
            offer_id=_offer_id(connectivity),
            customer_id=event.customer_id,
            confidence=0.86,
            metadata={"trigger": "gamer-lag", "contextFit": 0.98, "profileFit": 0.92},
        ))
    
    if "energia" in signals:
        energy = _first(offers, lambda o: o.category == "energy" or bool(ENERGY_TITLE.search(o.title)))
        candidates.append(ActionCandidate(
            id=ids.new_id(IdPrefixes.ACTION),
            agent="energy",
            action_type="cross-sell",
            title="Proposta risparmio energia coerente con profilo",
            channel="whatsapp",
            offer_id=_offer_id(energy),
            customer_id=event.customer_id,
            confidence=0.74,
            metadata={"trigger": "energy-signal", "contextFit": 0.82, "profileFit": 0.72},
        ))
    
    return candidates


def _invoice_candidates(
    event: DomainEvent,
    payload: InvoicePayload,
    offers: Sequence[ProductOffer],
    ids: IdGenerator,
) -> List[ActionCandidate]:
    if not any(HARDWARE_LINE.search(line.description) for line in payload.lines):
        return []
    
    hardware = _first(offers, lambda o: o.category == "hardware")
    return [
        ActionCandidate(
            id=ids.new_id(IdPrefixes.ACTION),
            agent="content",
            action_type="content",
            title="Crea task content factory per nuovo stock hardware",
            channel="telegram",
            offer_id=_offer_id(hardware),
            customer_id=event.customer_id,
            confidence=0.9,
            metadata={"trigger": "invoice-hardware", "contextFit": 0.9, "profileFit": 0.5},
        ),
        ActionCandidate(
            id=ids.new_id(IdPrefixes.ACTION),
            agent="hardware",
            action_type="followup",
            title="Prepara scheda commerciale hardware per banco e one-to-one",
            channel="whatsapp",
            offer_id=_offer_id(hardware),
            customer_id=event.customer_id,
            confidence=0.81,
            metadata={"trigger": "invoice-hardware-playbook", "contextFit": 0.88, "profileFit": 0.52},
        ),
    ]


def _promo_candidates(
    event: DomainEvent,
    payload: PromoPayload,
    offers: Sequence[ProductOffer],
    ids: IdGenerator,
) -> List[ActionCandidate]:
    if not SMARTPHONE_PROMO.search(payload.title):
        return []
    
    smartphone = _first(offers, lambda o: o.category == "smartphone")
    return [ActionCandidate(
        id=ids.new_id(IdPrefixes.ACTION),
        agent="telephony",
        action_type="campaign",
        title="Lancia campagna promo smartphone bundle",
        channel="telegram",
        offer_id=_offer_id(smartphone),
        customer_id=event.customer_id,
        confidence=0.88,
        metadata={"trigger": "promo-smartphone", "contextFit": 0.93, "profileFit": 0.75},
    )]


def _inbound_email_candidates(
    event: DomainEvent,
    payload: InboundMessagePayload,
    ids: IdGenerator,
) -> List[ActionCandidate]:
    if not POST_SALE_COMPLAINT.search(payload.text):
        return []
    
    return [ActionCandidate(
        id=ids.new_id(IdPrefixes.ACTION),
        agent="customer-care",
        action_type="customer-care",
        title="Apri task customer care urgente con risposta suggerita",
        channel="email",
        customer_id=event.customer_id,
        confidence=0.91,
        needs_approval=False,
        metadata={"trigger": "post-sale-complaint", "contextFit": 0.97, "profileFit": 0.6},
    )]


def derive_rule_candidates(
    event: DomainEvent,
    offers: Sequence[ProductOffer],
    ids: Optional[IdGenerator] = None,
) -> List[ActionCandidate]:
    """Generate unscored action candidates for an event.
    
    Args:
        event: The domain event being processed
        offers: Active offers, searched in order for the first matching offer
        ids: Id generator for candidate ids
        
    Returns:
        Candidates in rule order, without score_breakdown
    """
    ids = ids or UuidIdGenerator()
    payload = event.payload
    
    if event.type == EventType.TICKET_OUTCOME and isinstance(payload, TicketPayload):
        return _ticket_candidates(event, payload, offers, ids)
    if event.type == EventType.INVOICE_INGESTED and isinstance(payload, InvoicePayload):
        return _invoice_candidates(event, payload, offers, ids)
    if event.type == EventType.PROMO_INGESTED and isinstance(payload, PromoPayload):
        return _promo_candidates(event, payload, offers, ids)
    if event.type == EventType.INBOUND_EMAIL and isinstance(payload, InboundMessagePayload):
        return _inbound_email_candidates(event, payload, ids)
    return []
