"""Compliance Agent - consent and saturation checks, notes only."""

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.common.constants import CustomerConstants
from copilotrm.data.schemas import EventType


class ComplianceAgent(BusinessAgent):
    """Observes every event and flags contact-policy concerns.
    
    Never creates tasks or drafts.
    """
    
    name = "compliance"
    
    def supports(self, event_type: EventType) -> bool:
        return True
    
    def execute(self, context) -> AgentExecutionResult:
        notes = []
        customer = context.customer
        if customer is not None:
            if not customer.consents.email and context.event.type == EventType.INBOUND_EMAIL:
                notes.append(
                    "Inbound consent check skipped (inbound allowed), outbound remains restricted"
                )
            if customer.commercial_saturation_score > CustomerConstants.HIGH_SATURATION_THRESHOLD:
                notes.append("Cliente con saturazione alta: preferire approvazione manuale")
        return self._result(notes=notes)
