"""Energy Agent - energy-saving follow-ups and campaigns."""

import re

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.data.schemas import EventType, PromoPayload, TicketPayload


class EnergyAgent(BusinessAgent):
    name = "energy"
    
    SUPPORTED = frozenset({EventType.TICKET_OUTCOME, EventType.PROMO_INGESTED})
    ENERGY_PROMO = re.compile(r"energia|luce|gas", re.IGNORECASE)
    
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
            and "energia" in payload.inferred_signals
        ):
            tasks.append(self._task(
                kind="followup",
                title="Follow-up energia: valutazione risparmio bolletta",
                assignee_role="energy-consultant",
                priority=6,
                customer_id=event.customer_id,
            ))
            drafts.append(self._draft(
                customer_id=event.customer_id,
                channel="whatsapp",
                audience="one-to-one",
                body=(
                    "Ti preparo una simulazione rapida per ridurre costi energia "
                    "in base ai tuoi consumi. Vuoi procedere?"
                ),
                needs_approval=True,
                reason="cross-sell energia da segnale assistenza",
            ))
        
        if (
            event.type == EventType.PROMO_INGESTED
            and isinstance(payload, PromoPayload)
            and self.ENERGY_PROMO.search(payload.title)
        ):
            tasks.append(self._task(
                kind="campaign",
                title=f"Campagna energia: {payload.title}",
                assignee_role="energy-marketing",
                priority=7,
                offer_id=payload.offer_id,
            ))
        
        return self._result(tasks=tasks, drafts=drafts, notes=["Energy agent valutazione completata"])
