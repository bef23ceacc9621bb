"""Telephony Agent - connectivity cross-sell and smartphone campaigns."""

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.data.schemas import EventType, PromoPayload, TicketPayload


class TelephonyAgent(BusinessAgent):
    name = "telephony"
    
    SUPPORTED = frozenset({EventType.TICKET_OUTCOME, EventType.PROMO_INGESTED})
    
    def supports(self, event_type: EventType) -> bool:
        return EventType(event_type) in self.SUPPORTED
    
    def execute(self, context) -> AgentExecutionResult:
        event = context.event
        payload = event.payload
        tasks = []
        drafts = []
        
        if (
            event.type == EventType.TICKET_OUTCOME
            and isinstance(payload, TicketPayload)
            and "gamer" in payload.inferred_signals
        ):
            tasks.append(self._task(
                kind="followup",
                title="Proposta connectivity gaming",
                assignee_role="telephony",
                priority=9,
                customer_id=event.customer_id,
            ))
            drafts.append(self._draft(
                customer_id=event.customer_id,
                channel="whatsapp",
                audience="one-to-one",
                body=(
                    "Se vuoi risolvere lag/ping possiamo proporti fibra + router/mesh "
                    "ottimizzati per gaming. Ti preparo una proposta rapida?"
                ),
                needs_approval=True,
                reason="cross-sell gamer da assistenza",
                recipient_ref=context.customer.phone if context.customer else None,
            ))
        
        if event.type == EventType.PROMO_INGESTED and isinstance(payload, PromoPayload):
            title = payload.title or "Promo smartphone"
            tasks.append(self._task(
                kind="campaign",
                title=f"Campagna telefonia: {title}",
                assignee_role="telephony-marketing",
                priority=7,
                offer_id=payload.offer_id,
            ))
            drafts.append(self._draft(
                channel="telegram",
                audience="one-to-many",
                body=f"Nuova promo telefonia: {title}. Scrivici per profilo e condizioni complete.",
                related_offer_id=payload.offer_id,
                needs_approval=True,
                reason="promo smartphone bundle",
            ))
        
        return self._result(tasks=tasks, drafts=drafts, notes=["Telephony agent valutazione completata"])
