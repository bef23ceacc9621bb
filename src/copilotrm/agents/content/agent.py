"""Content Agent - content-factory work for new stock and promos."""

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.data.schemas import EventType, PromoPayload


class ContentAgent(BusinessAgent):
    name = "content"
    
    SUPPORTED = frozenset({EventType.INVOICE_INGESTED, EventType.PROMO_INGESTED})
    
    def supports(self, event_type: EventType) -> bool:
        return EventType(event_type) in self.SUPPORTED
    
    def execute(self, context) -> AgentExecutionResult:
        event = context.event
        tasks = []
        drafts = []
        
        if event.type == EventType.INVOICE_INGESTED:
            tasks.append(self._task(
                kind="content",
                title="Genera pacchetto content da nuovo stock",
                assignee_role="content",
                priority=7,
            ))
            drafts.append(self._draft(
                channel="telegram",
                audience="one-to-many",
                body=(
                    "Nuovi arrivi in negozio: stock hardware selezionato disponibile. "
                    "Scrivici per configurazioni e bundle."
                ),
                needs_approval=True,
                reason="nuovo stock da fattura",
            ))
        
        if event.type == EventType.PROMO_INGESTED and isinstance(event.payload, PromoPayload):
            title = event.payload.title or "Promo"
            tasks.append(self._task(
                kind="content",
                title=f"Pacchetto social/blog per {title}",
                assignee_role="content",
                priority=6,
                offer_id=event.payload.offer_id,
            ))
        
        return self._result(tasks=tasks, drafts=drafts, notes=["Content factory draft creati"])
