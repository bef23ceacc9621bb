"""Preventivi Agent - three-tier replacement quotes."""

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.data.schemas import EventType, ProductOffer, TicketPayload


class PreventiviAgent(BusinessAgent):
    """Builds a replacement quote when a repair is not worth it.
    
    The quote lists up to three active hardware offers, in context order.
    """
    
    name = "preventivi"
    
    MAX_OPTIONS = 3
    
    def supports(self, event_type: EventType) -> bool:
        return EventType(event_type) == EventType.TICKET_OUTCOME
    
    @staticmethod
    def _option_line(position: int, offer: ProductOffer) -> str:
        if offer.suggested_price:
            return f"{position}. {offer.title} - {offer.suggested_price:g}€"
        return f"{position}. {offer.title}"
    
    def execute(self, context) -> AgentExecutionResult:
        event = context.event
        payload = event.payload
        if not isinstance(payload, TicketPayload) or payload.outcome != "not-worth-repairing":
            return self._result(notes=["Nessuna azione preventivi"])
        
        options = [o for o in context.active_offers if o.category == "hardware"][:self.MAX_OPTIONS]
        body = "\n".join([
            "Ti preparo 3 opzioni sostitutive in linea con il tuo uso:",
            *(self._option_line(i, offer) for i, offer in enumerate(options, start=1)),
            "Possiamo aggiungere bundle accessori e configurazione rapida in negozio.",
        ])
        
        task = self._task(
            kind="followup",
            title="Invio preventivo sostituzione 3 fasce",
            assignee_role="sales",
            priority=8,
            customer_id=event.customer_id,
        )
        draft = self._draft(
            customer_id=event.customer_id,
            channel="whatsapp",
            audience="one-to-one",
            body=body,
            related_offer_id=options[0].id if options else None,
            needs_approval=True,
            reason="preventivo da esito assistenza",
        )
        return self._result(tasks=[task], drafts=[draft], notes=["Generate 3 alternative preventivo"])
