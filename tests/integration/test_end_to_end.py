"""Integration tests for CopilotRM.

End-to-end runs from repositories to a stored, verified audit trail.
"""

import pytest

from copilotrm.agents import AgentRegistry, AssistanceAgent
from copilotrm.audit import FileAuditStore
from copilotrm.data.repositories import (
    CustomerRepository,
    ObjectiveRepository,
    OfferRepository,
    assemble_context,
)
from copilotrm.data.schemas import CustomerProfile, EventType
from copilotrm.orchestration import AgentRouter, Orchestrator, OrchestratorContext


STAGES = [
    "event.received",
    "rules.candidates.generated",
    "actions.ranked",
    "handoffs.derived",
    "agents.executed",
]


class TestTicketOutcomeFlow:
    """A not-worth-repairing ticket handled by the assistance agent alone."""
    
    @pytest.fixture
    def orchestrator(self, ids, clock):
        return Orchestrator(AgentRegistry([AssistanceAgent(ids=ids, clock=clock)]), ids=ids, clock=clock)
    
    @pytest.fixture
    def context(self, event_factory):
        event = event_factory(
            EventType.TICKET_OUTCOME,
            {"outcome": "not-worth-repairing", "ticketId": "t1"},
        )
        return OrchestratorContext(
            event=event,
            customer=CustomerProfile(id="cust_1", full_name="Anna", phone="+393339998888"),
        )
    
    def test_single_approval_task_and_whatsapp_draft(self, orchestrator, context):
        output = orchestrator.run(context)
        
        (task,) = output.tasks
        assert task.kind == "approval"
        assert task.priority == 9
        (draft,) = output.drafts
        assert draft.needs_approval is True
        assert draft.channel == "whatsapp"
        assert draft.recipient_ref == "+393339998888"
    
    def test_audit_trail_shape(self, orchestrator, context):
        types = [r.type for r in orchestrator.run(context).audit_records]
        
        assert types[:5] == STAGES
        rest = types[5:]
        notes_end = len(rest) - rest[::-1].index("agent.notes")
        assert rest[:notes_end] == ["agent.notes"] * notes_end
        assert set(rest[notes_end:]) <= {"candidate.scored"}
        assert notes_end >= 1
    
    def test_ids_are_unique(self, orchestrator, context):
        output = orchestrator.run(context)
        all_ids = (
            [a.id for a in output.ranked_actions]
            + [t.id for t in output.tasks]
            + [d.id for d in output.drafts]
            + [r.id for r in output.audit_records]
        )
        
        assert len(all_ids) == len(set(all_ids))
    
    def test_runs_are_independent(self, orchestrator, context):
        first = orchestrator.run(context)
        second = orchestrator.run(context)
        
        assert [r.type for r in first.audit_records] == [r.type for r in second.audit_records]
        assert first.tasks[0].id != second.tasks[0].id
        assert len(second.audit_records) == len(first.audit_records)


class TestFullRegistryFlow:
    """Repositories, the default agents and audit persistence together."""
    
    def test_invoice_run_is_stored_and_verifiable(
        self, tmp_path, ids, clock, event_factory, customer, offers, objectives
    ):
        event = event_factory(EventType.INVOICE_INGESTED, {
            "invoiceNumber": "F-2026-031",
            "supplier": "Distributore Nord",
            "lines": [
                {"description": "Notebook gaming RTX 4060", "qty": 4, "unitCost": 890},
                {"description": "Monitor 27 144Hz", "qty": 6, "unitCost": 160},
            ],
        }, customer_id=None)
        context = assemble_context(
            event,
            CustomerRepository([customer]),
            OfferRepository(offers),
            ObjectiveRepository(objectives),
        )
        orchestrator = Orchestrator(
            AgentRegistry.default(ids=ids, clock=clock),
            ids=ids,
            clock=clock,
            router=AgentRouter(parallel=False),
        )
        
        output = orchestrator.run(context)
        
        assert [a.agent for a in output.ranked_actions] == ["content", "hardware"]
        assert [r.actor for r in output.records_of_type("agent.notes")] == [
            "hardware", "content", "compliance",
        ]
        assert [t.assignee_role for t in output.tasks] == ["hardware-specialist", "content"]
        
        store = FileAuditStore(log_dir=tmp_path, clock=clock)
        stored = store.append_records(output.audit_records, run_id=event.id)
        
        assert len(stored) == len(output.audit_records)
        assert store.verify_integrity()
        assert [r.type for r in store.get_records(run_id=event.id)] == [
            r.type for r in output.audit_records
        ]
