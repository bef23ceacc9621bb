"""Hardware Agent - counter playbooks for new stock and upgrade cross-sell."""

import re

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.data.schemas import EventType, InvoicePayload, TicketPayload


class HardwareAgent(BusinessAgent):
    name = "hardware"
    
    SUPPORTED = frozenset({EventType.INVOICE_INGESTED, EventType.TICKET_OUTCOME})
    HARDWARE_LINE = re.compile(r"gpu|rtx|ssd|notebook|pc|monitor|router|mesh", re.IGNORECASE)
    UPGRADE_SIGNALS = frozenset({"gamer", "upgrade-hardware"})
    
    def supports(self, event_type: EventType) -> bool:
        return EventType(event_type) in self.SUPPORTED
    
    def execute(self, context) -> AgentExecutionResult:
        event = context.event
        payload = event.payload
        tasks = []
        drafts = []
        
        if event.type == EventType.INVOICE_INGESTED and isinstance(payload, InvoicePayload):
            if any(self.HARDWARE_LINE.search(line.description) for line in payload.lines):
                tasks.append(self._task(
                    kind="content",
                    title="Scheda prodotto + script banco per nuovo stock hardware",
                    assignee_role="hardware-specialist",
                    priority=7,
                ))
        
        if (
            event.type == EventType.TICKET_OUTCOME
            and isinstance(payload, TicketPayload)
            and self.UPGRADE_SIGNALS.intersection(payload.inferred_signals)
        ):
            drafts.append(self._draft(
                customer_id=event.customer_id,
                channel="whatsapp",
                audience="one-to-one",
                body=(
                    "Dal controllo tecnico vedo margine per upgrade hardware/rete domestica "
                    "(mesh, cablaggio o componenti). Vuoi una proposta in 3 fasce?"
                ),
                needs_approval=True,
                reason="cross-sell hardware da assistenza",
            ))
        
        return self._result(tasks=tasks, drafts=drafts, notes=["Hardware agent valutazione completata"])
