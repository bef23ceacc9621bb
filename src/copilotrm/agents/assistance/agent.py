"""Assistance Agent - turns repair outcomes into approvals and customer replies."""

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.data.schemas import EventType, TicketPayload


class AssistanceAgent(BusinessAgent):
    """Reacts to every assistance.* event.
    
    When a device is not worth repairing, the hand-off to quoting needs a
    manager's approval, and the customer gets a draft offering
    replacement options.
    """
    
    name = "assistance"
    
    APPROVAL_PRIORITY = 9
    
    def supports(self, event_type: EventType) -> bool:
        return EventType(event_type).value.startswith("assistance.")
    
    def execute(self, context) -> AgentExecutionResult:
        event = context.event
        tasks = []
        drafts = []
        
        payload = event.payload
        if (
            event.type == EventType.TICKET_OUTCOME
            and isinstance(payload, TicketPayload)
            and payload.outcome == "not-worth-repairing"
        ):
            tasks.append(self._task(
                kind="approval",
                title="Valida handoff a preventivi (sostituzione)",
                assignee_role="assist-manager",
                priority=self.APPROVAL_PRIORITY,
                customer_id=event.customer_id,
                ticket_id=payload.ticket_id,
            ))
            drafts.append(self._draft(
                customer_id=event.customer_id,
                channel="whatsapp",
                audience="one-to-one",
                body=(
                    "Abbiamo verificato il dispositivo: la riparazione non conviene. "
                    "Posso prepararti 3 alternative (economica, bilanciata, top) adatte al tuo uso."
                ),
                needs_approval=True,
                reason="assistance outcome non conveniente",
                recipient_ref=context.customer.phone if context.customer else None,
            ))
        
        return self._result(
            tasks=tasks,
            drafts=drafts,
            notes=["Analisi ticket completata", "Trigger commerciali valutati"],
        )
