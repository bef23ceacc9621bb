"""Example: ticket outcome scenario from intake to stored audit trail."""

from datetime import datetime, timedelta, timezone

from copilotrm.agents import AgentRegistry
from copilotrm.audit import FileAuditStore
from copilotrm.common.config import get_config
from copilotrm.common.logging import get_logger
from copilotrm.data.repositories import (
    CustomerRepository,
    ObjectiveRepository,
    OfferRepository,
    assemble_context,
)
from copilotrm.data.schemas import (
    ConsentState,
    CustomerProfile,
    DomainEvent,
    EventType,
    ManagerObjective,
    ProductOffer,
)
from copilotrm.orchestration import Orchestrator

logger = get_logger(__name__)


def example_ticket_outcome_scenario(audit_dir=None):
    """
    Example scenario: a gamer's notebook is not worth repairing.
    
    1. Repositories hold customer, offers and objectives
    2. Context is assembled for the event
    3. Rules propose a replacement quote and a connectivity upsell
    4. Agents draft the approval task and the customer message
    5. The run's audit trail is appended to the daily JSONL log
    """
    now = datetime.now(timezone.utc)
    
    customers = CustomerRepository([
        CustomerProfile(
            id="cust_1",
            full_name="Mario Rossi",
            phone="+393331112222",
            segments=["gamer"],
            consents=ConsentState(whatsapp=True),
            commercial_saturation_score=20,
        )
    ])
    offers = OfferRepository([
        ProductOffer(id="off_nb", category="hardware", title="Notebook gaming RTX 4060",
                     suggested_price=1199, margin_pct=18, stock_qty=6),
        ProductOffer(id="off_fibra", category="connectivity", title="Fibra 2.5 Gbit gaming",
                     suggested_price=29.9, margin_pct=35, stock_qty=100),
    ])
    objectives = ObjectiveRepository([
        ManagerObjective(id="obj_q", name="Spingi fibra", period_start=now - timedelta(days=1),
                         period_end=now + timedelta(days=30), preferred_offer_ids=["off_fibra"]),
    ])
    
    event = DomainEvent(
        id="evt_123",
        type=EventType.TICKET_OUTCOME,
        occurred_at=now,
        customer_id="cust_1",
        payload={"ticketId": "t_1", "outcome": "not-worth-repairing", "inferredSignals": ["gamer"]},
    )
    
    logger.info(f"Processing event: {event.id}")
    
    context = assemble_context(event, customers, offers, objectives)
    output = Orchestrator(AgentRegistry.default()).run(context)
    
    for action in output.ranked_actions:
        logger.info(f"{action.total_score:.4f}  {action.agent:<12} {action.title}")
    
    audit_dir = audit_dir or get_config().audit_log_dir
    FileAuditStore(log_dir=audit_dir).append_records(output.audit_records, run_id=event.id)
    return output


if __name__ == "__main__":
    result = example_ticket_outcome_scenario()
    print(f"Event processed: {len(result.tasks)} tasks, {len(result.drafts)} drafts")
