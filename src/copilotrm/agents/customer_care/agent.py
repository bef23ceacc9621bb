"""Customer Care Agent - triage of inbound customer messages."""

import re

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.data.schemas import EventType, InboundMessagePayload


class CustomerCareAgent(BusinessAgent):
    """Flags post-sale complaints and drafts a holding reply.
    
    The suggested reply is safe to send without approval.
    """
    
    name = "customer-care"
    
    SUPPORTED = frozenset({EventType.INBOUND_EMAIL, EventType.INBOUND_WHATSAPP})
    URGENT_PATTERN = re.compile(r"non ho ricevuto|ritardo|reclamo|contratt")
    
    def supports(self, event_type: EventType) -> bool:
        return EventType(event_type) in self.SUPPORTED
    
    def execute(self, context) -> AgentExecutionResult:
        event = context.event
        payload = event.payload
        text = payload.text if isinstance(payload, InboundMessagePayload) else ""
        urgent = bool(self.URGENT_PATTERN.search(text))
        tasks = []
        drafts = []
        
        if urgent:
            tasks.append(self._task(
                kind="customer-care",
                title="Verifica stato pratica e risposta cliente",
                assignee_role="customer-care",
                priority=10,
                customer_id=event.customer_id,
            ))
            drafts.append(self._draft(
                customer_id=event.customer_id,
                channel="email",
                audience="one-to-one",
                subject="Aggiornamento sulla tua pratica",
                body=(
                    "Stiamo verificando subito lo stato della pratica. "
                    "Ti aggiorniamo a breve con esito e prossimi passaggi."
                ),
                needs_approval=False,
                reason="risposta customer care suggerita",
                recipient_ref=context.customer.email if context.customer else None,
            ))
        
        notes = ["Classificato come post-vendita critico"] if urgent else ["Nessun caso critico rilevato"]
        return self._result(tasks=tasks, drafts=drafts, notes=notes)
